from cmms.data.entity_base import EntityBase
from cmms import db


class Location(EntityBase):
    __tablename__ = 'locations'

    name = db.Column(db.String(100), nullable=False)
    description = db.Column(db.Text, nullable=True)
    parent_location_id = db.Column(db.String(36), db.ForeignKey('locations.id'), nullable=True)

    # Relationships (no backrefs)
    parent_location = db.relationship('Location', remote_side='Location.id')

    def __repr__(self):
        return f'<Location {self.name}>'
