"""
Domain exceptions for entity data access

These exceptions are raised by the repositories and the bulk import
pipeline. Store messages are carried through unchanged so callers can show
them to the user as-is.
"""

from typing import Iterable, Optional


class CmmsDomainError(Exception):
    """Base exception for all entity data-access errors"""

    def __init__(self, message: str, code: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.code = code


class ValidationError(CmmsDomainError):
    """Raised before any store call when a write payload is invalid (e.g. required field missing)"""

    def __init__(self, message: str, fields: Optional[Iterable[str]] = None):
        super().__init__(message)
        self.fields = list(fields or [])


class FetchError(CmmsDomainError):
    """Raised when a read (get_all, get_by_id, search) fails at the store"""
    pass


class PersistError(CmmsDomainError):
    """Raised when the store rejects a write (constraint violation, missing row, transient failure)"""

    def __init__(self, message: str, code: Optional[str] = None, not_found: bool = False):
        super().__init__(message, code)
        self.not_found = not_found


class ImportRowError(CmmsDomainError):
    """A single import row failed validation or persistence; counted, never raised to the caller"""

    def __init__(self, line_number: int, cause: CmmsDomainError):
        super().__init__(f"Line {line_number}: {cause.message}", cause.code)
        self.line_number = line_number
        self.cause = cause


class BulkImportError(CmmsDomainError):
    """Base for errors that abort a whole import batch"""
    pass


class ImportReadError(BulkImportError):
    """Raised when the import payload cannot be read"""
    pass


class ImportFormatError(BulkImportError):
    """Raised when the import payload has no usable header row"""
    pass
