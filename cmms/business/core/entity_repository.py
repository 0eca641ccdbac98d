"""
Entity Repository
Uniform CRUD + search + import contract per entity kind.

Handles:
- Reads with eager-loaded relations in the kind's natural order
- Client-side required-field validation before any write reaches the store
- Relation reference consistency on write payloads
- Mapping store failures to FetchError / PersistError with the store message
"""

from typing import Any, Dict, List, Mapping, Optional, Union
from flask import current_app, has_app_context
from cmms.business.core.bulk_import import BulkImportPipeline, ImportResult
from cmms.business.core.entity_kinds import EntityKind, get_entity_kind
from cmms.business.core.errors import FetchError, PersistError, ValidationError
from cmms.data.table_store import SqlTableStore, StoreError, TableStore
from cmms.utils.logger import get_logger

logger = get_logger("cmms.business.repository")

DEFAULT_SEARCH_LIMIT = 10

# Assigned and maintained by the store; never taken from a write payload
STORE_MANAGED_FIELDS = ('id', 'created_at', 'updated_at')


def is_blank(value) -> bool:
    """Nullish or whitespace-only values do not satisfy a required field"""
    if value is None:
        return True
    return isinstance(value, str) and not value.strip()


class EntityRepository:
    """
    Repository over one entity kind.

    The repository owns no cache; every call goes to the store.
    """

    def __init__(
        self,
        kind: Union[str, EntityKind],
        store: Optional[TableStore] = None,
        search_limit: Optional[int] = None,
        delimiter: Optional[str] = None
    ):
        self.kind = kind if isinstance(kind, EntityKind) else get_entity_kind(kind)
        self.store = store if store is not None else SqlTableStore()
        self._search_limit = search_limit
        self._delimiter = delimiter

    @property
    def search_limit(self) -> int:
        if self._search_limit is not None:
            return self._search_limit
        if has_app_context():
            return current_app.config.get('SEARCH_RESULT_LIMIT', DEFAULT_SEARCH_LIMIT)
        return DEFAULT_SEARCH_LIMIT

    @property
    def delimiter(self) -> str:
        if self._delimiter is not None:
            return self._delimiter
        if has_app_context():
            return current_app.config.get('IMPORT_DELIMITER', ',')
        return ','

    # ------------------------------------------------------------------ #
    # Reads
    # ------------------------------------------------------------------ #

    def get_all(self) -> List[Dict[str, Any]]:
        """
        Fetch every record of the kind with relations, in natural order.

        Raises:
            FetchError: If the store reports an error
        """
        try:
            return self.store.select(
                self.kind.table,
                embed=self.kind.embed,
                order_by=self.kind.order_by,
                descending=self.kind.descending
            )
        except StoreError as e:
            logger.error(f"Error fetching {self.kind.table}: {e.message}")
            raise FetchError(e.message, e.code) from e

    def get_by_id(self, record_id: str) -> Optional[Dict[str, Any]]:
        """
        Fetch one record with relations.

        Returns:
            The record, or None when no row matches

        Raises:
            FetchError: If the store reports an error
        """
        try:
            return self.store.select_one(self.kind.table, record_id, embed=self.kind.embed)
        except StoreError as e:
            logger.error(f"Error fetching {self.kind.name} {record_id}: {e.message}")
            raise FetchError(e.message, e.code) from e

    def search(self, query: Optional[str]) -> List[Dict[str, Any]]:
        """
        Case-insensitive substring search over the kind's search fields.

        An empty query returns the first ``search_limit`` records of get_all.

        Raises:
            FetchError: If the store reports an error
        """
        text = (query or '').strip()
        try:
            return self.store.select(
                self.kind.table,
                embed=self.kind.embed,
                order_by=self.kind.order_by,
                descending=self.kind.descending,
                search_fields=self.kind.search_fields if text else (),
                search_query=text or None,
                limit=self.search_limit
            )
        except StoreError as e:
            logger.error(f"Error searching {self.kind.table} for {text!r}: {e.message}")
            raise FetchError(e.message, e.code) from e

    # ------------------------------------------------------------------ #
    # Writes
    # ------------------------------------------------------------------ #

    def missing_required_fields(self, values: Mapping[str, Any]) -> List[str]:
        return [field for field in self.kind.required_fields if is_blank(values.get(field))]

    def _write_payload(self, values: Mapping[str, Any]) -> Dict[str, Any]:
        """
        Copy a write payload, folding materialized relations into their foreign keys.

        Store-managed fields (id, created_at, updated_at) are dropped, so a
        fetched record can be sent back as a patch without re-keying the row.

        Raises:
            ValidationError: If a relation's id disagrees with its foreign key
        """
        payload = {key: value for key, value in values.items() if key not in STORE_MANAGED_FIELDS}
        for relation, foreign_key in self.kind.relations:
            if relation not in payload:
                continue
            related = payload.pop(relation)
            related_id = related.get('id') if isinstance(related, Mapping) else None
            current = payload.get(foreign_key)
            if related_id is not None and current is not None and current != related_id:
                raise ValidationError(
                    f"{relation}.id ({related_id}) does not match {foreign_key} ({current})",
                    fields=[foreign_key]
                )
            if foreign_key not in payload:
                payload[foreign_key] = related_id
        return payload

    def create(self, values: Mapping[str, Any]) -> Dict[str, Any]:
        """
        Create a record; the store assigns id and timestamps.

        Raises:
            ValidationError: If a required field is missing (no store call is made)
            PersistError: If the store rejects the insert
        """
        missing = self.missing_required_fields(values)
        if missing:
            raise ValidationError(
                f"{self.kind.name} requires: {', '.join(missing)}",
                fields=missing
            )
        payload = self._write_payload(values)

        try:
            record = self.store.insert(self.kind.table, payload)
        except StoreError as e:
            logger.error(f"Error creating {self.kind.name}: {e.message}")
            raise PersistError(e.message, e.code) from e

        logger.info(f"Created {self.kind.name} {record.get('id')}")
        return record

    def update(self, record_id: str, values: Mapping[str, Any]) -> Dict[str, Any]:
        """
        Patch a record. Absent fields are left alone; fields set to None are cleared.

        Raises:
            ValidationError: If a relation's id disagrees with its foreign key
            PersistError: If no row matches or the store rejects the update
        """
        payload = self._write_payload(values)

        try:
            record = self.store.update(self.kind.table, record_id, payload)
        except StoreError as e:
            logger.error(f"Error updating {self.kind.name} {record_id}: {e.message}")
            raise PersistError(e.message, e.code) from e

        if record is None:
            logger.error(f"Error updating {self.kind.name} {record_id}: no row returned")
            raise PersistError(f"No {self.kind.name} found with id {record_id}", not_found=True)

        logger.info(f"Updated {self.kind.name} {record_id}")
        return record

    def delete(self, record_id: str) -> None:
        """
        Hard-delete a record.

        Raises:
            PersistError: If no row matches or the store rejects the delete
        """
        try:
            deleted = self.store.delete(self.kind.table, record_id)
        except StoreError as e:
            logger.error(f"Error deleting {self.kind.name} {record_id}: {e.message}")
            raise PersistError(e.message, e.code) from e

        if not deleted:
            logger.error(f"Error deleting {self.kind.name} {record_id}: no row matched")
            raise PersistError(f"No {self.kind.name} found with id {record_id}", not_found=True)

        logger.info(f"Deleted {self.kind.name} {record_id}")

    def import_csv(self, payload) -> ImportResult:
        """Create one record per row of a delimited payload; see BulkImportPipeline"""
        return BulkImportPipeline(self, delimiter=self.delimiter).run(payload)
