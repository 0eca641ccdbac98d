from cmms.data.entity_base import EntityBase
from cmms.data.enums import SCHEDULE_FREQUENCIES, enum_column_type
from cmms import db


class ServiceSchedule(EntityBase):
    __tablename__ = 'service_schedules'

    asset_id = db.Column(db.String(36), db.ForeignKey('assets.id'), nullable=True)
    name = db.Column(db.String(100), nullable=False)
    description = db.Column(db.Text, nullable=True)
    frequency = db.Column(enum_column_type(SCHEDULE_FREQUENCIES, 'schedule_frequency'), nullable=False)
    last_service_date = db.Column(db.Date, nullable=True)
    next_service_date = db.Column(db.Date, nullable=True)
    service_instructions = db.Column(db.Text, nullable=True)
    assigned_to = db.Column(db.String(36), db.ForeignKey('service_provider.id'), nullable=True)
    team_id = db.Column(db.String(36), db.ForeignKey('service_teams.id'), nullable=True)

    # Relationships
    asset = db.relationship('Asset')
    assigned_provider = db.relationship('ServiceProvider')
    team = db.relationship('ServiceTeam')

    def __repr__(self):
        return f'<ServiceSchedule {self.name} ({self.frequency})>'
