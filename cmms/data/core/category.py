from cmms.data.entity_base import EntityBase
from cmms import db


class Category(EntityBase):
    __tablename__ = 'categories'

    name = db.Column(db.String(100), nullable=False)
    description = db.Column(db.Text, nullable=True)

    def __repr__(self):
        return f'<Category {self.name}>'
