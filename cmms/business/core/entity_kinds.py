"""
Entity kind registry

Each EntityKind describes how one table is read and written: which fields a
create must carry, the natural ordering of list results, which text fields
a search matches, and which relations are eager-loaded.
"""

from dataclasses import dataclass
from typing import Dict, Optional, Tuple


@dataclass(frozen=True)
class EntityKind:
    """Static description of one entity kind"""
    name: str
    table: str
    slug: str
    required_fields: Tuple[str, ...]
    order_by: str
    descending: bool = False
    search_fields: Tuple[str, ...] = ()
    # (relation name, foreign key column) pairs
    relations: Tuple[Tuple[str, str], ...] = ()
    # Default (field, direction) for list views; None keeps store order
    default_sort: Optional[Tuple[str, str]] = None

    @property
    def embed(self) -> Tuple[str, ...]:
        return tuple(name for name, _ in self.relations)

    @property
    def relation_map(self) -> Dict[str, str]:
        return dict(self.relations)


LOCATION = EntityKind(
    name='Location',
    table='locations',
    slug='locations',
    required_fields=('name',),
    order_by='name',
    search_fields=('name', 'description'),
    relations=(('parent_location', 'parent_location_id'),),
)

CATEGORY = EntityKind(
    name='Category',
    table='categories',
    slug='categories',
    required_fields=('name',),
    order_by='name',
    search_fields=('name', 'description'),
)

ASSET = EntityKind(
    name='Asset',
    table='assets',
    slug='assets',
    required_fields=('asset_number', 'name'),
    order_by='asset_number',
    search_fields=('asset_number', 'name', 'description', 'manufacturer', 'model', 'serial_number'),
    relations=(('location', 'location_id'),),
)

SERVICE_PROVIDER = EntityKind(
    name='ServiceProvider',
    table='service_provider',
    slug='service-providers',
    required_fields=('name',),
    order_by='name',
    search_fields=('name', 'email'),
)

SERVICE_TEAM = EntityKind(
    name='ServiceTeam',
    table='service_teams',
    slug='service-teams',
    required_fields=('name',),
    order_by='name',
    search_fields=('name', 'description'),
)

SERVICE_REQUEST = EntityKind(
    name='ServiceRequest',
    table='service_requests',
    slug='service-requests',
    required_fields=('service_requested', 'status', 'priority', 'service_type'),
    order_by='created_at',
    descending=True,
    search_fields=('request_number', 'service_requested', 'service_performed'),
    relations=(
        ('asset', 'asset_id'),
        ('assigned_provider', 'assigned_to'),
        ('completed_by_provider', 'completed_by'),
        ('team', 'team_id'),
    ),
    default_sort=('created_at', 'desc'),
)

SUPPLIER = EntityKind(
    name='Supplier',
    table='suppliers',
    slug='suppliers',
    required_fields=('name',),
    order_by='name',
    search_fields=('name', 'contact_person', 'email'),
)

INVENTORY_ITEM = EntityKind(
    name='InventoryItem',
    table='inventory',
    slug='inventory',
    required_fields=('item_number', 'name', 'quantity', 'minimum_quantity'),
    order_by='item_number',
    search_fields=('item_number', 'name', 'description', 'category'),
    relations=(('location', 'location_id'), ('supplier', 'supplier_id')),
)

SERVICE_SCHEDULE = EntityKind(
    name='ServiceSchedule',
    table='service_schedules',
    slug='service-schedules',
    required_fields=('name', 'frequency'),
    order_by='next_service_date',
    search_fields=('name', 'description', 'service_instructions'),
    relations=(
        ('asset', 'asset_id'),
        ('assigned_provider', 'assigned_to'),
        ('team', 'team_id'),
    ),
)

REQUISITION = EntityKind(
    name='Requisition',
    table='requisitions',
    slug='requisitions',
    required_fields=('requisition_number', 'status', 'requested_date'),
    order_by='requested_date',
    descending=True,
    search_fields=('requisition_number', 'status', 'notes'),
    relations=(('supplier', 'supplier_id'), ('requested_by_provider', 'requested_by')),
)

ENTITY_KINDS: Dict[str, EntityKind] = {
    kind.name: kind for kind in (
        LOCATION, CATEGORY, ASSET, SERVICE_PROVIDER, SERVICE_TEAM,
        SERVICE_REQUEST, SUPPLIER, INVENTORY_ITEM, SERVICE_SCHEDULE, REQUISITION,
    )
}


def get_entity_kind(key: str) -> EntityKind:
    """
    Look up an entity kind by name ('Asset'), table ('assets') or slug ('service-requests').

    Raises:
        KeyError: If no kind matches
    """
    if key in ENTITY_KINDS:
        return ENTITY_KINDS[key]
    for kind in ENTITY_KINDS.values():
        if key in (kind.table, kind.slug):
            return kind
    raise KeyError(f"Unknown entity kind: {key}")
