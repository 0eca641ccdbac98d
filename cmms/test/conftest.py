"""
Pytest configuration and fixtures for the entity data-access tests
"""
import os
import tempfile

# Keep test logs out of the working tree; must be set before cmms is imported
os.environ.setdefault("CMMS_LOG_DIR", os.path.join(tempfile.gettempdir(), "cmms-test-logs"))

import uuid

import pytest
from cmms import create_app
from cmms import db as _db
from cmms.business.core.entity_repository import EntityRepository
from cmms.data.entity_base import utcnow
from cmms.data.table_store import StoreError, TableStore


@pytest.fixture(scope='function')
def app():
    """Create Flask application on a fresh in-memory database"""
    app = create_app({
        'SQLALCHEMY_DATABASE_URI': 'sqlite:///:memory:',
        'TESTING': True,
    })

    with app.app_context():
        _db.create_all()
        yield app
        _db.session.remove()
        _db.drop_all()


@pytest.fixture(scope='function')
def client(app):
    """Create Flask test client"""
    return app.test_client()


@pytest.fixture(scope='function')
def repository(app):
    """Factory for repositories over the real (in-memory) store"""
    def make(kind):
        return EntityRepository(kind)
    return make


class FakeTableStore(TableStore):
    """
    In-memory TableStore that records every call.

    Set ``fail_with`` to a StoreError to make the next operations fail.
    """

    def __init__(self):
        self.tables = {}
        self.calls = []
        self.fail_with = None

    def _record(self, operation, table, *args):
        self.calls.append((operation, table) + args)
        if self.fail_with is not None:
            raise self.fail_with

    def count(self, operation=None):
        if operation is None:
            return len(self.calls)
        return len([call for call in self.calls if call[0] == operation])

    def select(self, table, embed=(), order_by=None, descending=False,
               search_fields=(), search_query=None, limit=None):
        self._record('select', table)
        rows = list(self.tables.get(table, {}).values())
        if search_query:
            needle = search_query.lower()
            rows = [
                row for row in rows
                if any(needle in str(row.get(field) or '').lower() for field in search_fields)
            ]
        if order_by:
            rows.sort(key=lambda row: (row.get(order_by) is None, str(row.get(order_by))), reverse=descending)
        if limit is not None:
            rows = rows[:limit]
        return [dict(row) for row in rows]

    def select_one(self, table, record_id, embed=()):
        self._record('select_one', table, record_id)
        row = self.tables.get(table, {}).get(record_id)
        return dict(row) if row is not None else None

    def insert(self, table, values):
        self._record('insert', table, dict(values))
        now = utcnow().isoformat()
        row = dict(values)
        row.update(id=str(uuid.uuid4()), created_at=now, updated_at=now)
        self.tables.setdefault(table, {})[row['id']] = row
        return dict(row)

    def update(self, table, record_id, values):
        self._record('update', table, record_id, dict(values))
        row = self.tables.get(table, {}).get(record_id)
        if row is None:
            return None
        row.update(values)
        row['updated_at'] = utcnow().isoformat()
        return dict(row)

    def delete(self, table, record_id):
        self._record('delete', table, record_id)
        removed = self.tables.get(table, {}).pop(record_id, None)
        return 0 if removed is None else 1


@pytest.fixture(scope='function')
def fake_store():
    """Recording in-memory store; needs no app context"""
    return FakeTableStore()


@pytest.fixture(scope='function')
def store_error():
    """A store failure carrying the store's own message"""
    return StoreError('connection refused', code='08006')
