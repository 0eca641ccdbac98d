"""
Entity data-access core: repositories, list view model and bulk import.
"""

from cmms.business.core.entity_kinds import EntityKind, ENTITY_KINDS, get_entity_kind
from cmms.business.core.entity_repository import EntityRepository
from cmms.business.core.list_view_model import ListViewModel, ASC, DESC
from cmms.business.core.bulk_import import BulkImportPipeline, ImportResult, parse_rows
from cmms.business.core.errors import (
    CmmsDomainError, ValidationError, FetchError, PersistError,
    ImportRowError, BulkImportError, ImportReadError, ImportFormatError,
)
