from cmms.data.entity_base import EntityBase
from cmms import db


class ServiceProvider(EntityBase):
    __tablename__ = 'service_provider'

    name = db.Column(db.String(100), nullable=False)
    email = db.Column(db.String(200), nullable=True)
    phone = db.Column(db.String(50), nullable=True)
    role = db.Column(db.String(100), nullable=True)
    notes = db.Column(db.Text, nullable=True)

    def __repr__(self):
        return f'<ServiceProvider {self.name}>'
