from cmms.data.entity_base import EntityBase
from cmms import db


class Supplier(EntityBase):
    __tablename__ = 'suppliers'

    name = db.Column(db.String(100), nullable=False)
    contact_person = db.Column(db.String(100), nullable=True)
    email = db.Column(db.String(200), nullable=True)
    phone = db.Column(db.String(50), nullable=True)
    address = db.Column(db.Text, nullable=True)
    notes = db.Column(db.Text, nullable=True)

    def __repr__(self):
        return f'<Supplier {self.name}>'
