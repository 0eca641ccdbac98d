"""
Enumerated column values shared by the entity models.
The store rejects anything outside these sets.
"""

from cmms import db

ASSET_STATUSES = ('In Service', 'Out of Service', 'Scrapped', 'Sold', 'Other')

SERVICE_STATUSES = ('Open', 'Closed', 'On Hold', 'In Progress', 'Closed-Completed', 'Closed-Incomplete')

SERVICE_PRIORITIES = ('Highest', 'High', 'Medium', 'Low', 'Lowest')

SERVICE_TYPES = (
    'Corrective', 'Preventive', 'Project', 'Upgrade',
    'Inspection', 'Meter Reading', 'Safety', 'Other',
)

SCHEDULE_FREQUENCIES = ('Daily', 'Weekly', 'Monthly', 'Quarterly', 'Annually', 'Quinquennial')


def enum_column_type(values, name):
    """String-backed enum type that validates values before they reach the database"""
    return db.Enum(*values, name=name, native_enum=False, validate_strings=True, create_constraint=True)
