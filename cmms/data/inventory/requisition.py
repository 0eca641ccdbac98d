from cmms.data.entity_base import EntityBase
from cmms import db
from datetime import date


class Requisition(EntityBase):
    __tablename__ = 'requisitions'

    requisition_number = db.Column(db.String(50), unique=True, nullable=False)
    supplier_id = db.Column(db.String(36), db.ForeignKey('suppliers.id'), nullable=True)
    status = db.Column(db.String(50), nullable=True)
    requested_by = db.Column(db.String(36), db.ForeignKey('service_provider.id'), nullable=True)
    requested_date = db.Column(db.Date, default=date.today, nullable=True)
    required_date = db.Column(db.Date, nullable=True)
    notes = db.Column(db.Text, nullable=True)

    # Relationships
    supplier = db.relationship('Supplier')
    requested_by_provider = db.relationship('ServiceProvider')

    def __repr__(self):
        return f'<Requisition {self.requisition_number}>'
