# charity_backend/charity_tracker/models.py
from datetime import datetime
from charity_backend.init_db import db

class Charity(db.Model):
    """One user's favorite/donation record for one charity project."""
    __tablename__ = 'charities'
    __table_args__ = (
        db.UniqueConstraint('user_id', 'project_id', name='uq_charity_user_project'),
    )

    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.Integer, db.ForeignKey('user.id'), nullable=False)
    user = db.relationship('User', backref=db.backref('charities', lazy=True, order_by='Charity.id'))
    project_id = db.Column(db.String(64), nullable=False)
    project_title = db.Column(db.String(255), nullable=True)
    favorite_status = db.Column(db.Boolean, nullable=False, default=False)
    donation_amount = db.Column(db.Float, nullable=False, default=0)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow)

    def to_dict(self):
        return {
            '_id': self.id,
            'userId': self.user_id,
            'projectId': self.project_id,
            'projectTitle': self.project_title,
            'favoriteStatus': self.favorite_status,
            'donationAmount': self.donation_amount,
        }

    def __repr__(self):
        return f"<Charity {self.user_id}:{self.project_id}>"
