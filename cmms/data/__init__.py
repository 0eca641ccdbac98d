"""
Data layer: entity models and the table store boundary.
Importing this package registers every model with SQLAlchemy.
"""

from cmms.data.core.location import Location
from cmms.data.core.category import Category
from cmms.data.assets.asset import Asset
from cmms.data.service.service_provider import ServiceProvider
from cmms.data.service.service_team import ServiceTeam
from cmms.data.service.service_request import ServiceRequest
from cmms.data.service.service_schedule import ServiceSchedule
from cmms.data.inventory.supplier import Supplier
from cmms.data.inventory.inventory_item import InventoryItem
from cmms.data.inventory.requisition import Requisition

__all__ = [
    'Location', 'Category', 'Asset', 'ServiceProvider', 'ServiceTeam',
    'ServiceRequest', 'ServiceSchedule', 'Supplier', 'InventoryItem', 'Requisition',
]
