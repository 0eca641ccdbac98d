#!/usr/bin/env python3
"""
Demo Data Insertion
Loads a small demo data set through the bulk import pipeline.

Each kind is skipped when its table already has rows, so seeding twice is
harmless. Relations are filled in afterwards by looking up the imported rows.
"""

from cmms.business.core.entity_repository import EntityRepository
from cmms.business.core.errors import CmmsDomainError
from cmms.utils.logger import get_logger

logger = get_logger("cmms.debug.demo_data")

DEMO_CSV = {
    'Location': (
        "name,description\n"
        "Main Plant,Primary production building\n"
        "Boiler Room,Basement boiler and chiller room\n"
        "Warehouse,Spare parts and consumables"
    ),
    'Category': (
        "name,description\n"
        "Pumps,Centrifugal and positive displacement pumps\n"
        "HVAC,Heating ventilation and cooling\n"
        "Electrical,Panels motors and drives"
    ),
    'Supplier': (
        "name,contact_person,email,phone\n"
        "Acme Industrial,Dana Reyes,sales@acme.example,555-0100\n"
        "Northside Electric,Sam Ortiz,orders@northside.example,555-0199"
    ),
    'ServiceProvider': (
        "name,email,phone,role\n"
        "Alex Kim,alex.kim@plant.example,555-0111,Mechanic\n"
        "Jordan Lee,jordan.lee@plant.example,555-0112,Electrician"
    ),
    'ServiceTeam': (
        "name,description\n"
        "Mechanical,Rotating equipment and piping\n"
        "Electrical,Power distribution and controls"
    ),
    'Asset': (
        "asset_number,name,category,manufacturer,model,serial_number,purchase_date,purchase_cost,status\n"
        "P-100,Feed Water Pump,Pumps,Grundfos,CR 32,GF-88213,2021-03-15,12500.00,In Service\n"
        "P-101,Condensate Pump,Pumps,Goulds,3196,GL-20931,2019-07-01,8900.00,Out of Service\n"
        "AHU-1,Air Handler 1,HVAC,Trane,M-Series,TR-55102,2018-11-20,45000.00,In Service"
    ),
    'InventoryItem': (
        "item_number,name,category,unit,quantity,minimum_quantity,cost_per_unit\n"
        "BRG-6205,Ball Bearing 6205,Bearings,each,24,10,7.50\n"
        "SEAL-32,Mechanical Seal 32mm,Seals,each,3,4,145.00\n"
        "FLT-2020,Air Filter 20x20,Filters,each,40,12,6.25"
    ),
}

# Kinds are loaded in dependency order
SEED_ORDER = (
    'Location', 'Category', 'Supplier', 'ServiceProvider', 'ServiceTeam', 'Asset', 'InventoryItem'
)


def _link_demo_relations():
    """Place demo assets and stock at locations once both sides exist"""
    locations = {row['name']: row for row in EntityRepository('Location').get_all()}
    suppliers = {row['name']: row for row in EntityRepository('Supplier').get_all()}

    assets = EntityRepository('Asset')
    asset_locations = {'P-100': 'Boiler Room', 'P-101': 'Boiler Room', 'AHU-1': 'Main Plant'}
    for asset in assets.get_all():
        location = locations.get(asset_locations.get(asset['asset_number']))
        if location and asset['location_id'] is None:
            assets.update(asset['id'], {'location_id': location['id']})

    inventory = EntityRepository('InventoryItem')
    warehouse = locations.get('Warehouse')
    supplier = suppliers.get('Acme Industrial')
    for item in inventory.get_all():
        patch = {}
        if warehouse and item['location_id'] is None:
            patch['location_id'] = warehouse['id']
        if supplier and item['supplier_id'] is None:
            patch['supplier_id'] = supplier['id']
        if patch:
            inventory.update(item['id'], patch)


def insert_demo_data():
    """
    Insert demo data for every seeded kind (must run inside an app context)

    Returns:
        dict: kind name -> {'success': n, 'errors': m} for each kind loaded

    Raises:
        CmmsDomainError: If a table cannot be read or a relation update fails
    """
    logger.info("Inserting demo data...")
    results = {}

    for kind_name in SEED_ORDER:
        repository = EntityRepository(kind_name)
        if repository.search(''):
            logger.info(f"{kind_name} already has rows, skipping demo data")
            continue
        result = repository.import_csv(DEMO_CSV[kind_name])
        results[kind_name] = result.to_dict()
        logger.info(f"Demo {kind_name}: {result.success} created, {result.errors} with errors")

    try:
        _link_demo_relations()
    except CmmsDomainError as e:
        logger.error(f"Error linking demo relations: {e.message}")
        raise

    logger.info("Demo data insertion complete")
    return results
