"""
Table Store
Boundary between the entity repositories and the relational store.

Handles:
- The logical operation set issued per named table (select, select_one,
  insert, update, delete)
- Relation embedding, ordering, OR-combined substring search and limits
- Translating driver failures into StoreError with the store's own message
"""

from abc import ABC, abstractmethod
from datetime import datetime, date
from decimal import Decimal, InvalidOperation
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence
from sqlalchemy import or_, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import joinedload
from cmms import db
from cmms.data.entity_base import utcnow
from cmms.utils.logger import get_logger

logger = get_logger("cmms.data.table_store")

TRUE_STRINGS = {'true', 't', '1', 'yes', 'y', 'on'}
FALSE_STRINGS = {'false', 'f', '0', 'no', 'n', 'off'}


class StoreError(Exception):
    """Raised when the store rejects an operation; message is the store's own text"""

    def __init__(self, message: str, code: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.code = code


class TableStore(ABC):
    """
    Logical operations against named tables.

    Rows cross this boundary as plain dicts in wire form. Implementations
    raise StoreError for every failure reported by the underlying store.
    """

    @abstractmethod
    def select(
        self,
        table: str,
        embed: Sequence[str] = (),
        order_by: Optional[str] = None,
        descending: bool = False,
        search_fields: Sequence[str] = (),
        search_query: Optional[str] = None,
        limit: Optional[int] = None
    ) -> List[Dict[str, Any]]:
        """Return rows of ``table``, optionally filtered by a substring search"""

    @abstractmethod
    def select_one(self, table: str, record_id: str, embed: Sequence[str] = ()) -> Optional[Dict[str, Any]]:
        """Return the row with ``record_id`` or None when no row matches"""

    @abstractmethod
    def insert(self, table: str, values: Mapping[str, Any]) -> Dict[str, Any]:
        """Insert one row and return it as stored"""

    @abstractmethod
    def update(self, table: str, record_id: str, values: Mapping[str, Any]) -> Optional[Dict[str, Any]]:
        """Patch one row; return it, or None when no row matches"""

    @abstractmethod
    def delete(self, table: str, record_id: str) -> int:
        """Delete one row; return the number of rows removed"""


class SqlTableStore(TableStore):
    """TableStore over the Flask-SQLAlchemy session"""

    def __init__(self, session=None):
        self._session = session

    @property
    def session(self):
        return self._session if self._session is not None else db.session

    # ------------------------------------------------------------------ #
    # Model lookup and value preparation
    # ------------------------------------------------------------------ #

    @staticmethod
    def model_for(table: str):
        """
        Resolve the mapped model class for a table name.

        Raises:
            StoreError: If no model is mapped to ``table``
        """
        for mapper in db.Model.registry.mappers:
            model = mapper.class_
            if getattr(model, '__tablename__', None) == table:
                return model
        raise StoreError(f'relation "{table}" does not exist', code='42P01')

    def _prepare(self, model, table: str, values: Mapping[str, Any]) -> Dict[str, Any]:
        columns = model.column_map()
        prepared = {}
        for key, value in values.items():
            column = columns.get(key)
            if column is None:
                raise StoreError(f"Could not find the '{key}' column of '{table}'", code='PGRST204')
            prepared[key] = self._coerce(column, value)
        return prepared

    @staticmethod
    def _coerce(column, value):
        """Convert string input to the column's Python type"""
        if not isinstance(value, str):
            return value
        try:
            python_type = column.type.python_type
        except NotImplementedError:
            return value
        if python_type is str:
            return value

        try:
            if python_type is bool:
                lowered = value.strip().lower()
                if lowered in TRUE_STRINGS:
                    return True
                if lowered in FALSE_STRINGS:
                    return False
                raise ValueError(value)
            if python_type is datetime:
                return datetime.fromisoformat(value.strip().replace('Z', '+00:00'))
            if python_type is date:
                text = value.strip()
                try:
                    return date.fromisoformat(text)
                except ValueError:
                    return datetime.fromisoformat(text.replace('Z', '+00:00')).date()
            if python_type is int:
                return int(value.strip())
            if python_type is float:
                return float(value.strip())
            if python_type is Decimal:
                return Decimal(value.strip())
        except (ValueError, InvalidOperation):
            raise StoreError(
                f'invalid input syntax for type {python_type.__name__}: "{value}"',
                code='22P02'
            )
        return value

    @staticmethod
    def _message(error: SQLAlchemyError) -> str:
        orig = getattr(error, 'orig', None)
        return str(orig) if orig is not None else str(error)

    def _fail(self, action: str, table: str, error: SQLAlchemyError):
        self.session.rollback()
        message = self._message(error)
        logger.error(f"Store error during {action} on {table}: {message}")
        raise StoreError(message) from error

    @staticmethod
    def _with_embeds(statement, model, embed: Iterable[str]):
        for name in embed:
            statement = statement.options(joinedload(getattr(model, name)))
        return statement

    # ------------------------------------------------------------------ #
    # Logical operations
    # ------------------------------------------------------------------ #

    def select(
        self,
        table: str,
        embed: Sequence[str] = (),
        order_by: Optional[str] = None,
        descending: bool = False,
        search_fields: Sequence[str] = (),
        search_query: Optional[str] = None,
        limit: Optional[int] = None
    ) -> List[Dict[str, Any]]:
        model = self.model_for(table)
        statement = self._with_embeds(select(model), model, embed)

        if search_query:
            # Escape LIKE wildcards so the query is matched literally
            escaped = (
                search_query.replace('\\', '\\\\').replace('%', '\\%').replace('_', '\\_')
            )
            pattern = f'%{escaped}%'
            statement = statement.where(or_(*[
                getattr(model, field).ilike(pattern, escape='\\') for field in search_fields
            ]))

        if order_by:
            column = getattr(model, order_by)
            statement = statement.order_by(column.desc() if descending else column.asc())
        # Deterministic order among equal sort keys
        statement = statement.order_by(model.id.asc())

        if limit is not None:
            statement = statement.limit(limit)

        try:
            rows = self.session.execute(statement).scalars().all()
            return [row.to_dict(embed=embed) for row in rows]
        except SQLAlchemyError as e:
            self._fail('select', table, e)

    def select_one(self, table: str, record_id: str, embed: Sequence[str] = ()) -> Optional[Dict[str, Any]]:
        model = self.model_for(table)
        statement = self._with_embeds(select(model), model, embed).where(model.id == record_id)
        try:
            row = self.session.execute(statement).scalars().first()
            return row.to_dict(embed=embed) if row is not None else None
        except SQLAlchemyError as e:
            self._fail('select', table, e)

    def insert(self, table: str, values: Mapping[str, Any]) -> Dict[str, Any]:
        model = self.model_for(table)
        instance = model(**self._prepare(model, table, values))
        try:
            self.session.add(instance)
            self.session.commit()
            logger.debug(f"Inserted into {table}: {instance.id}")
            return instance.to_dict()
        except SQLAlchemyError as e:
            self._fail('insert', table, e)

    def update(self, table: str, record_id: str, values: Mapping[str, Any]) -> Optional[Dict[str, Any]]:
        model = self.model_for(table)
        prepared = self._prepare(model, table, values)
        try:
            instance = self.session.get(model, record_id)
            if instance is None:
                return None
            for key, value in prepared.items():
                setattr(instance, key, value)
            if prepared:
                instance.updated_at = utcnow()
            self.session.commit()
            logger.debug(f"Updated {table} {record_id}: {sorted(prepared)}")
            return instance.to_dict()
        except SQLAlchemyError as e:
            self._fail('update', table, e)

    def delete(self, table: str, record_id: str) -> int:
        model = self.model_for(table)
        try:
            instance = self.session.get(model, record_id)
            if instance is None:
                return 0
            self.session.delete(instance)
            self.session.commit()
            logger.debug(f"Deleted from {table}: {record_id}")
            return 1
        except SQLAlchemyError as e:
            self._fail('delete', table, e)
