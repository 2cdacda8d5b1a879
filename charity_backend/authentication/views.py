# charity_backend/authentication/views.py
from sqlalchemy.exc import IntegrityError
from charity_backend.init_db import db
from charity_backend.errors import ValidationError
from charity_backend.authentication.models import User
from charity_backend.logging_config import setup_logging

logger = setup_logging()

BEARER_PREFIX = 'Bearer '


def create_user(data):
    """Register a user from a request payload.

    Raises ``ValidationError`` when a field is missing, out of range or
    already taken by another user.
    """
    name = data.get('name')
    email = data.get('email')

    user = User(name=name, email=email, budget=data.get('budget'))
    user.set_password(data.get('password'))

    db.session.add(user)
    try:
        db.session.commit()
    except IntegrityError:
        db.session.rollback()
        raise ValidationError(duplicate_fields(name, email))

    return user


def duplicate_fields(name, email):
    errors = {}
    if User.query.filter_by(name=name).first():
        errors['name'] = 'Name is already taken.'
    if User.query.filter_by(email=email).first():
        errors['email'] = 'Email already exists.'
    return errors or {'user': 'User already exists.'}


def authenticate(email, password):
    """Return the user owning ``email`` if ``password`` matches, else None."""
    if not isinstance(email, str) or not email:
        return None
    user = User.query.filter_by(email=email).first()
    if user and user.check_password(password):
        return user
    return None


def token_from_header(header_value):
    if not header_value:
        return None
    if header_value.startswith(BEARER_PREFIX):
        header_value = header_value[len(BEARER_PREFIX):]
    return header_value.strip() or None


def load_user_from_token(token):
    if not token:
        return None
    return User.query.filter_by(access_token=token).first()
