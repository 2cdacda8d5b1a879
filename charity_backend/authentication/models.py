# charity_backend/authentication/models.py
import os
import math
import binascii
from datetime import datetime
from flask_login import UserMixin
from sqlalchemy.orm import validates
from werkzeug.security import generate_password_hash, check_password_hash
from charity_backend.init_db import db
from charity_backend.errors import ValidationError

NAME_MIN_LENGTH = 2
NAME_MAX_LENGTH = 20
PASSWORD_MIN_LENGTH = 5
ACCESS_TOKEN_BYTES = 128


def generate_access_token():
    return binascii.hexlify(os.urandom(ACCESS_TOKEN_BYTES)).decode()


class User(UserMixin, db.Model):
    __tablename__ = 'user'
    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(NAME_MAX_LENGTH), unique=True, nullable=False)
    email = db.Column(db.String(100), unique=True, nullable=False)
    password = db.Column(db.String(255), nullable=False)
    access_token = db.Column(db.String(2 * ACCESS_TOKEN_BYTES), unique=True, nullable=False, default=generate_access_token)
    budget = db.Column(db.Float, nullable=False, default=0)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)

    @validates('name')
    def validate_name(self, key, name):
        if not isinstance(name, str) or not name:
            raise ValidationError.for_field('name', 'Name is required.')
        if not NAME_MIN_LENGTH <= len(name) <= NAME_MAX_LENGTH:
            raise ValidationError.for_field(
                'name', f'Name must be between {NAME_MIN_LENGTH} and {NAME_MAX_LENGTH} characters long.')
        return name

    @validates('email')
    def validate_email(self, key, email):
        if not isinstance(email, str) or not email:
            raise ValidationError.for_field('email', 'Email is required.')
        return email

    @validates('budget')
    def validate_budget(self, key, budget):
        if budget is None:
            return 0
        if isinstance(budget, bool) or not isinstance(budget, (int, float)):
            raise ValidationError.for_field('budget', 'Budget must be a number.')
        try:
            budget = float(budget)
        except OverflowError:
            budget = math.inf
        if not math.isfinite(budget):
            raise ValidationError.for_field('budget', 'Budget must be a finite number.')
        if budget < 0:
            raise ValidationError.for_field('budget', 'Budget cannot be negative.')
        return budget

    def set_password(self, plaintext):
        """Hash and store ``plaintext``; the length rule applies to the plaintext."""
        if not isinstance(plaintext, str) or not plaintext:
            raise ValidationError.for_field('password', 'Password is required.')
        if len(plaintext) < PASSWORD_MIN_LENGTH:
            raise ValidationError.for_field(
                'password', f'Password must be at least {PASSWORD_MIN_LENGTH} characters long.')
        self.password = generate_password_hash(plaintext, method='pbkdf2:sha256')

    def check_password(self, plaintext):
        return isinstance(plaintext, str) and bool(plaintext) and check_password_hash(self.password, plaintext)

    def to_dict(self, include_token=True):
        data = {
            '_id': self.id,
            'name': self.name,
            'email': self.email,
            'budget': self.budget,
            'charities': [charity.id for charity in self.charities],
        }
        if include_token:
            data['accessToken'] = self.access_token
        return data

    def to_public_dict(self):
        return {'_id': self.id, 'name': self.name}

    def __repr__(self):
        return f"<User {self.email}>"
