"""
List View Model
Client-side sortable projection over an already-loaded collection.

The snapshot is held as a tuple and never mutated; every sort or filter
returns a new list. Sorting uses Python's stable sort in both directions,
so records with equal keys keep their snapshot order.
"""

from datetime import date, datetime, time, timezone
from typing import Any, Iterable, List, Mapping, Optional, Sequence
from cmms.business.core.entity_kinds import EntityKind

ASC = 'asc'
DESC = 'desc'
DIRECTIONS = (ASC, DESC)

EPOCH = 0.0


def field_value(item, field: str):
    if isinstance(item, Mapping):
        return item.get(field)
    return getattr(item, field, None)


def to_timestamp(value) -> float:
    """Instant of a date-like value in seconds; nullish or unparseable values are the epoch"""
    if value is None or value == '':
        return EPOCH
    if isinstance(value, str):
        try:
            value = datetime.fromisoformat(value.strip().replace('Z', '+00:00'))
        except ValueError:
            return EPOCH
    if isinstance(value, datetime):
        if value.tzinfo is None:
            value = value.replace(tzinfo=timezone.utc)
        return value.timestamp()
    if isinstance(value, date):
        return datetime.combine(value, time(), tzinfo=timezone.utc).timestamp()
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return float(value)
    return EPOCH


def is_number(value) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


class ListViewModel:
    """
    Sort state plus a frozen snapshot of records.

    Args:
        items: Loaded records (dicts or objects)
        sort_field: Current sort field, or None for snapshot order
        direction: 'asc' or 'desc'
        date_fields: Fields compared as instants. When omitted, fields whose
            name ends in '_date' or '_at' are date-like.
    """

    def __init__(
        self,
        items: Iterable[Any],
        sort_field: Optional[str] = None,
        direction: str = ASC,
        date_fields: Optional[Iterable[str]] = None
    ):
        self._validate_direction(direction)
        self._items = tuple(items)
        self.sort_field = sort_field
        self.direction = direction
        self._date_fields = frozenset(date_fields) if date_fields is not None else None

    @classmethod
    def for_kind(cls, kind: EntityKind, items: Iterable[Any]) -> 'ListViewModel':
        """View model starting from the kind's default sort"""
        if kind.default_sort:
            field, direction = kind.default_sort
            return cls(items, sort_field=field, direction=direction)
        return cls(items)

    @staticmethod
    def _validate_direction(direction: str):
        if direction not in DIRECTIONS:
            raise ValueError(f"Sort direction must be 'asc' or 'desc', got {direction!r}")

    @property
    def items(self) -> List[Any]:
        return list(self._items)

    def is_date_field(self, field: str) -> bool:
        if self._date_fields is not None:
            return field in self._date_fields
        return field.endswith('_date') or field.endswith('_at')

    def _sort_key(self, field: str):
        if self.is_date_field(field):
            return lambda item: to_timestamp(field_value(item, field))

        values = [field_value(item, field) for item in self._items]
        present = [value for value in values if value is not None]
        if present and all(is_number(value) for value in present):
            # Nullish numbers sort first in ascending order
            return lambda item: (
                (0, 0) if field_value(item, field) is None else (1, field_value(item, field))
            )

        return lambda item: '' if field_value(item, field) is None else str(field_value(item, field))

    def sort_by(self, field: str, direction: str = ASC) -> List[Any]:
        """
        Return the snapshot ordered by ``field``.

        Strings compare case-sensitively on their string form with nullish as
        ''. Date-like fields compare as instants with nullish as the epoch.

        Raises:
            ValueError: If direction is not 'asc' or 'desc'
        """
        self._validate_direction(direction)
        self.sort_field = field
        self.direction = direction
        # sorted() stays stable with reverse=True
        return sorted(self._items, key=self._sort_key(field), reverse=(direction == DESC))

    def toggle_sort(self, field: str) -> List[Any]:
        """Ascending on the current field flips to descending; anything else sorts ascending"""
        if self.sort_field == field and self.direction == ASC:
            return self.sort_by(field, DESC)
        return self.sort_by(field, ASC)

    def rows(self) -> List[Any]:
        """Snapshot in the current sort order"""
        if self.sort_field is None:
            return list(self._items)
        return self.sort_by(self.sort_field, self.direction)

    def filter_text(self, query: Optional[str], fields: Optional[Sequence[str]] = None) -> List[Any]:
        """
        Keep records where any field's string form contains ``query`` (case-insensitive).

        Args:
            query: Text to look for; blank returns every record
            fields: Fields to inspect; defaults to every key of a dict record
        """
        needle = (query or '').strip().lower()
        if not needle:
            return list(self._items)

        def matches(item) -> bool:
            if fields is not None:
                names = fields
            elif isinstance(item, Mapping):
                names = list(item.keys())
            else:
                names = list(vars(item).keys())
            for name in names:
                value = field_value(item, name)
                if value is None or isinstance(value, Mapping):
                    continue
                if needle in str(value).lower():
                    return True
            return False

        return [item for item in self._items if matches(item)]
