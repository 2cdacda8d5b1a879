# charity_backend/authentication/routes.py
from flask import Blueprint, jsonify, request
from flask_login import login_required, current_user
from sqlalchemy.exc import SQLAlchemyError
from charity_backend.init_db import db
from charity_backend.errors import ValidationError
from charity_backend.logging_config import setup_logging
from charity_backend.authentication.models import User
from charity_backend.authentication.views import create_user, authenticate


auth_bp = Blueprint('auth', __name__)

# Setup logging
logger = setup_logging()


@auth_bp.route('/', methods=['GET'])
def index():
    return 'Backend for charity project'

@auth_bp.route('/users', methods=['POST'])
def signup():
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        data = {}
    try:
        user = create_user(data)
    except ValidationError as e:
        logger.warning(f"Rejected signup: {e}")
        return jsonify({'message': 'Could not create user', 'errors': e.errors}), 400
    except SQLAlchemyError as e:
        db.session.rollback()
        logger.error(f"Error during signup: {e}")
        return jsonify({'message': 'Could not create user'}), 400

    logger.info(f"New user {user.email} signed up successfully.")
    return jsonify(user.to_dict()), 201

@auth_bp.route('/sessions', methods=['POST'])
def login():
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        data = {}
    email = data.get('email')

    try:
        user = authenticate(email, data.get('password'))
    except SQLAlchemyError as e:
        logger.error(f"Error during login: {e}")
        return jsonify({'message': 'An error occurred during login.'}), 400

    if not user:
        # Unknown email and wrong password look the same to the caller
        logger.warning(f"Failed login attempt for email: {email}")
        return jsonify({'notFound': True}), 400

    logger.info(f"User {email} logged in successfully.")
    return jsonify({'name': user.name, 'userId': user.id, 'accessToken': user.access_token}), 200

@auth_bp.route('/secrets', methods=['GET'])
@login_required
def secrets():
    return jsonify({'secret': 'This is a super secret message'}), 200

@auth_bp.route('/users/<int:user_id>', methods=['GET'])
@login_required
def get_user(user_id):
    try:
        user = db.session.get(User, user_id)
    except SQLAlchemyError as e:
        logger.error(f"Error fetching user {user_id}: {e}")
        return jsonify({'message': 'Could not find user'}), 400

    if not user:
        return jsonify({'message': 'Could not find user'}), 404

    return jsonify(user.to_dict(include_token=user.id == current_user.id)), 200
