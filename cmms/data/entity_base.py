from cmms import db
from datetime import datetime, date, timezone
from decimal import Decimal
from sqlalchemy import inspect
import uuid


def generate_id():
    return str(uuid.uuid4())


def utcnow():
    """Current UTC time as a naive datetime, the form the DateTime columns store"""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def serialize_value(value):
    """Convert a column value to its wire form (ISO strings for dates, floats for decimals)"""
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    if isinstance(value, Decimal):
        return float(value)
    return value


class EntityBase(db.Model):
    """Abstract base class for every stored entity kind"""

    __abstract__ = True

    id = db.Column(db.String(36), primary_key=True, default=generate_id)
    created_at = db.Column(db.DateTime, default=utcnow, nullable=True)
    updated_at = db.Column(db.DateTime, default=utcnow, onupdate=utcnow, nullable=True)

    @classmethod
    def column_map(cls):
        """Mapping of column key -> Column for this model"""
        return {c.key: c for c in inspect(cls).columns}

    def to_dict(self, embed=()):
        """
        Convert the instance to its wire form

        Args:
            embed (iterable): Relationship names to materialize as nested dicts

        Returns:
            dict: Column values plus one entry per embedded relation
        """
        result = {}
        for column in inspect(self.__class__).columns:
            result[column.key] = serialize_value(getattr(self, column.key))

        for name in embed:
            related = getattr(self, name)
            result[name] = related.to_dict() if related is not None else None

        return result

    def __repr__(self):
        return f'<{self.__class__.__name__} {self.id}>'
