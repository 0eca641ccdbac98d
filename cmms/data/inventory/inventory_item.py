from cmms.data.entity_base import EntityBase
from cmms import db


class InventoryItem(EntityBase):
    __tablename__ = 'inventory'

    item_number = db.Column(db.String(50), unique=True, nullable=False)
    name = db.Column(db.String(100), nullable=False)
    description = db.Column(db.Text, nullable=True)
    category = db.Column(db.String(100), nullable=True)
    unit = db.Column(db.String(20), nullable=True)
    quantity = db.Column(db.Integer, nullable=True)
    minimum_quantity = db.Column(db.Integer, nullable=True)
    cost_per_unit = db.Column(db.Float, nullable=True)
    location_id = db.Column(db.String(36), db.ForeignKey('locations.id'), nullable=True)
    supplier_id = db.Column(db.String(36), db.ForeignKey('suppliers.id'), nullable=True)
    notes = db.Column(db.Text, nullable=True)

    # Relationships
    location = db.relationship('Location')
    supplier = db.relationship('Supplier')

    def __repr__(self):
        return f'<InventoryItem {self.item_number} {self.name}>'
