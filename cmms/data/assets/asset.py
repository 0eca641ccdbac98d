from cmms.data.entity_base import EntityBase
from cmms.data.enums import ASSET_STATUSES, enum_column_type
from cmms import db


class Asset(EntityBase):
    __tablename__ = 'assets'

    asset_number = db.Column(db.String(50), unique=True, nullable=False)
    name = db.Column(db.String(100), nullable=False)
    description = db.Column(db.Text, nullable=True)
    category = db.Column(db.String(100), nullable=True)
    manufacturer = db.Column(db.String(100), nullable=True)
    model = db.Column(db.String(100), nullable=True)
    serial_number = db.Column(db.String(100), nullable=True)
    purchase_date = db.Column(db.Date, nullable=True)
    purchase_cost = db.Column(db.Float, nullable=True)
    status = db.Column(enum_column_type(ASSET_STATUSES, 'asset_status'), nullable=True)
    location_id = db.Column(db.String(36), db.ForeignKey('locations.id'), nullable=True)
    notes = db.Column(db.Text, nullable=True)

    # Relationships
    location = db.relationship('Location')

    def __repr__(self):
        return f'<Asset {self.name} ({self.asset_number})>'
