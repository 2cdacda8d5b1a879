# charity_backend/charity_tracker/views.py
import math
from datetime import datetime
from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.dialects import postgresql, sqlite
from charity_backend.init_db import db
from charity_backend.errors import ValidationError
from charity_backend.charity_tracker.models import Charity
from charity_backend.logging_config import setup_logging

logger = setup_logging()

# Field names sent by older clients
LEGACY_FIELDS = {
    'charityId': 'projectId',
    'charityTitle': 'projectTitle',
    'addedFavorite': 'favoriteStatus',
}

INSERT_BY_DIALECT = {
    'sqlite': sqlite.insert,
    'postgresql': postgresql.insert,
}


def normalize_payload(data):
    payload = {}
    for legacy, canonical in LEGACY_FIELDS.items():
        if legacy in data:
            payload[canonical] = data[legacy]
    for key, value in data.items():
        if key not in LEGACY_FIELDS:
            payload[key] = value
    return payload


def parse_project_id(value):
    if isinstance(value, bool) or value is None or value == '':
        raise ValidationError.for_field('projectId', 'Project id is required.')
    if not isinstance(value, (str, int)):
        raise ValidationError.for_field('projectId', 'Project id must be a string or an integer.')
    return str(value)


def parse_amount(field, value):
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValidationError.for_field(field, f'{field} must be a number.')
    try:
        amount = float(value)
    except OverflowError:
        amount = math.inf
    if not math.isfinite(amount):
        raise ValidationError.for_field(field, f'{field} must be a finite number.')
    if amount < 0:
        raise ValidationError.for_field(field, f'{field} cannot be negative.')
    return amount


def parse_bool(field, value):
    if isinstance(value, bool):
        return value
    if isinstance(value, str) and value.lower() in ('true', 'false'):
        return value.lower() == 'true'
    raise ValidationError.for_field(field, f'{field} must be true or false.')


def charity_changes(payload):
    """Column values for the fields present in ``payload``."""
    changes = {}
    if 'projectTitle' in payload:
        title = payload['projectTitle']
        if title is not None and not isinstance(title, str):
            raise ValidationError.for_field('projectTitle', 'projectTitle must be a string.')
        changes['project_title'] = title
    if 'favoriteStatus' in payload:
        changes['favorite_status'] = parse_bool('favoriteStatus', payload['favoriteStatus'])
    if 'donationAmount' in payload:
        changes['donation_amount'] = parse_amount('donationAmount', payload['donationAmount'])
    return changes


def upsert_charity(user, data):
    """Create or overwrite the user's record for one project in a single statement.

    Only the fields present in ``data`` are written to an existing record.
    Returns ``(charity, created)``.
    """
    payload = normalize_payload(data)
    project_id = parse_project_id(payload.get('projectId'))
    changes = charity_changes(payload)
    budget = parse_amount('budget', payload['budget']) if 'budget' in payload else None

    dialect = db.engine.dialect.name
    existing_id = db.session.execute(
        select(Charity.id).filter_by(user_id=user.id, project_id=project_id)
    ).scalar_one_or_none()

    now = datetime.utcnow()
    insert = INSERT_BY_DIALECT[dialect](Charity).values(
        user_id=user.id,
        project_id=project_id,
        project_title=changes.get('project_title'),
        favorite_status=changes.get('favorite_status', False),
        donation_amount=changes.get('donation_amount', 0),
        created_at=now,
        updated_at=now,
    )
    update = {column: insert.excluded[column] for column in changes}
    update['updated_at'] = insert.excluded.updated_at
    statement = insert.on_conflict_do_update(
        index_elements=['user_id', 'project_id'],
        set_=update,
    ).returning(Charity.id)

    try:
        charity_id = db.session.execute(statement).scalar_one()
        if budget is not None:
            user.budget = budget
        db.session.commit()
    except SQLAlchemyError:
        db.session.rollback()
        raise

    charity = db.session.get(Charity, charity_id, populate_existing=True)
    created = existing_id is None
    logger.info(f"{'Created' if created else 'Updated'} charity {project_id} for user {user.id}")
    return charity, created


def filter_charities(user_id, favorite_status=None):
    query = Charity.query.filter_by(user_id=user_id)
    if favorite_status is not None:
        query = query.filter_by(favorite_status=favorite_status)
    return query.order_by(Charity.id).all()


def find_charity(user_id, project_id):
    return Charity.query.filter_by(user_id=user_id, project_id=str(project_id)).first()


def donations_for(user_id):
    return Charity.query.filter(
        Charity.user_id == user_id,
        Charity.donation_amount > 0,
    ).order_by(Charity.id).all()
