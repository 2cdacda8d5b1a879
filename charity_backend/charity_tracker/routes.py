# charity_backend/charity_tracker/routes.py
from flask import Blueprint, request, jsonify
from sqlalchemy.exc import SQLAlchemyError
from charity_backend.init_db import db
from charity_backend.errors import ValidationError
from charity_backend.logging_config import setup_logging
from charity_backend.authentication.models import User
from charity_backend.charity_tracker.views import (
    upsert_charity, filter_charities, find_charity, donations_for, parse_bool,
)


charity_tracker_bp = Blueprint('charity_tracker', __name__)

logger = setup_logging()


def user_not_found():
    return jsonify({'message': 'Could not find user'}), 404


@charity_tracker_bp.route('/users/<int:user_id>', methods=['PUT'])
def update_charity(user_id):
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        data = {}

    try:
        user = db.session.get(User, user_id)
        if not user:
            return user_not_found()

        charity, created = upsert_charity(user, data)
    except ValidationError as e:
        logger.warning(f"Rejected charity update for user {user_id}: {e}")
        return jsonify({'message': 'Could not add to favorites', 'errors': e.errors}), 400
    except SQLAlchemyError as e:
        db.session.rollback()
        logger.error(f"Error updating charity for user {user_id}: {e}")
        return jsonify({'message': 'Could not add to favorites'}), 400

    return jsonify(charity.to_dict()), 201 if created else 200

@charity_tracker_bp.route('/users', methods=['GET'])
def list_users():
    name = request.args.get('name')

    try:
        query = User.query
        if name:
            query = query.filter(User.name.icontains(name, autoescape=True))
        users = query.order_by(User.id).all()
    except SQLAlchemyError as e:
        logger.error(f"Error listing users: {e}")
        return jsonify({'message': 'Could not find users'}), 400

    return jsonify([user.to_public_dict() for user in users]), 200

@charity_tracker_bp.route('/users/<int:user_id>/otherUser', methods=['GET'])
def other_user(user_id):
    try:
        user = db.session.get(User, user_id)
        if not user:
            return user_not_found()
        charities = filter_charities(user_id)
    except SQLAlchemyError as e:
        logger.error(f"Error fetching profile of user {user_id}: {e}")
        return jsonify({'message': 'Could not find user'}), 400

    profile = user.to_public_dict()
    profile['charities'] = [charity.id for charity in charities]
    return jsonify({
        'user': profile,
        'charities': [charity.to_dict() for charity in charities]
    }), 200

@charity_tracker_bp.route('/users/<int:user_id>/charities', methods=['GET'])
def get_charities(user_id):
    project_id = request.args.get('projectId')
    favorite_status = request.args.get('favoriteStatus')

    try:
        if project_id:
            charity = find_charity(user_id, project_id)
            if not charity:
                return jsonify({'message': 'Could not find charity'}), 404
            return jsonify(charity.to_dict()), 200

        if favorite_status is not None:
            favorite_status = parse_bool('favoriteStatus', favorite_status)
        charities = filter_charities(user_id, favorite_status)
    except ValidationError as e:
        return jsonify({'message': 'Could not find charities', 'errors': e.errors}), 400
    except SQLAlchemyError as e:
        logger.error(f"Error retrieving charities of user {user_id}: {e}")
        return jsonify({'message': 'Could not find charities'}), 400

    return jsonify([charity.to_dict() for charity in charities]), 200

@charity_tracker_bp.route('/users/<int:user_id>/donations', methods=['GET'])
def get_donations(user_id):
    try:
        donations = donations_for(user_id)
    except SQLAlchemyError as e:
        logger.error(f"Error retrieving donations of user {user_id}: {e}")
        return jsonify({'message': 'Could not find donations'}), 400

    return jsonify([charity.to_dict() for charity in donations]), 200

@charity_tracker_bp.route('/users/<int:user_id>/budget', methods=['GET'])
def get_budget(user_id):
    try:
        user = db.session.get(User, user_id)
    except SQLAlchemyError as e:
        logger.error(f"Error retrieving budget of user {user_id}: {e}")
        return jsonify({'message': 'Could not find budget'}), 400

    if not user:
        return user_not_found()

    return jsonify(user.budget), 200
