from cmms.data.entity_base import EntityBase
from cmms.data.enums import (
    SERVICE_STATUSES, SERVICE_PRIORITIES, SERVICE_TYPES, enum_column_type
)
from cmms import db
import uuid


def generate_request_number():
    return f"SR-{uuid.uuid4().hex[:8].upper()}"


class ServiceRequest(EntityBase):
    __tablename__ = 'service_requests'

    request_number = db.Column(db.String(50), unique=True, nullable=False, default=generate_request_number)
    asset_id = db.Column(db.String(36), db.ForeignKey('assets.id'), nullable=True)
    status = db.Column(enum_column_type(SERVICE_STATUSES, 'service_status'), nullable=True)
    priority = db.Column(enum_column_type(SERVICE_PRIORITIES, 'service_priority'), nullable=True)
    service_type = db.Column(enum_column_type(SERVICE_TYPES, 'service_type'), nullable=True)
    service_requested = db.Column(db.Text, nullable=False)
    service_performed = db.Column(db.Text, nullable=True)
    start_date = db.Column(db.Date, nullable=True)
    due_date = db.Column(db.Date, nullable=True)
    estimated_hours = db.Column(db.Integer, nullable=True)
    estimated_minutes = db.Column(db.Integer, nullable=True)
    actual_hours = db.Column(db.Integer, nullable=True)
    actual_minutes = db.Column(db.Integer, nullable=True)
    assigned_to = db.Column(db.String(36), db.ForeignKey('service_provider.id'), nullable=True)
    completed_by = db.Column(db.String(36), db.ForeignKey('service_provider.id'), nullable=True)
    team_id = db.Column(db.String(36), db.ForeignKey('service_teams.id'), nullable=True)

    # Relationships
    asset = db.relationship('Asset')
    assigned_provider = db.relationship('ServiceProvider', foreign_keys=[assigned_to])
    completed_by_provider = db.relationship('ServiceProvider', foreign_keys=[completed_by])
    team = db.relationship('ServiceTeam')

    def __repr__(self):
        return f'<ServiceRequest {self.request_number}>'
