# charity_backend/errors.py


class ValidationError(ValueError):
    """Rejected field values, keyed by the JSON field name."""

    def __init__(self, errors):
        self.errors = errors
        super().__init__('; '.join(f'{field}: {message}' for field, message in errors.items()))

    @classmethod
    def for_field(cls, field, message):
        return cls({field: message})
