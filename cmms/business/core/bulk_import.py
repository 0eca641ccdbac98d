"""
Bulk Import Pipeline
Turns a delimited text payload into entities, one create per row.

The batch is best-effort: a row that fails validation or persistence is
counted and logged, and the next row is processed. Only an unreadable
payload or a missing header aborts the batch. Rows already created are
never rolled back.

Limitation: fields are split on the delimiter with no quoting support, so a
delimiter inside a value splits it.
"""

from dataclasses import dataclass, asdict
from typing import Dict, Iterator, List, Optional, Tuple
from cmms.business.core.errors import (
    CmmsDomainError, ImportFormatError, ImportReadError, ImportRowError, ValidationError
)
from cmms.utils.logger import get_logger

logger = get_logger("cmms.business.bulk_import")

RowRecord = Dict[str, Optional[str]]


@dataclass
class ImportResult:
    """Aggregate outcome of one import batch"""
    success: int = 0
    errors: int = 0

    def to_dict(self) -> Dict[str, int]:
        return asdict(self)


def read_payload(payload) -> str:
    """
    Read an import payload into text.

    Accepts str, UTF-8 bytes (a BOM is tolerated) or any object with a
    ``read()`` method, such as an uploaded FileStorage.

    Raises:
        ImportReadError: If the payload cannot be read or decoded
    """
    if isinstance(payload, str):
        return payload
    if isinstance(payload, (bytes, bytearray)):
        try:
            return bytes(payload).decode('utf-8-sig')
        except UnicodeDecodeError as e:
            raise ImportReadError(f"Error reading file: {e}") from e

    read = getattr(payload, 'read', None)
    if read is None:
        raise ImportReadError(f"Error reading file: unsupported payload type {type(payload).__name__}")
    try:
        data = read()
    except (OSError, ValueError) as e:
        raise ImportReadError(f"Error reading file: {e}") from e
    if not isinstance(data, (str, bytes, bytearray)):
        raise ImportReadError(f"Error reading file: read() returned {type(data).__name__}")
    return read_payload(data)


def _split_lines(text: str, delimiter: str) -> Tuple[List[str], Iterator[Tuple[int, RowRecord]]]:
    lines = [line.rstrip('\r') for line in text.split('\n')]
    header = [field.strip() for field in lines[0].split(delimiter)]
    if not any(header):
        raise ImportFormatError("Import file has no header columns")

    def records():
        # Every line after the header is a row, blank ones included
        for line_number, line in enumerate(lines[1:], start=2):
            fields = line.split(delimiter)
            record = {}
            for index, column in enumerate(header):
                # Columns with a blank header are ignored
                if not column:
                    continue
                value = fields[index].strip() if index < len(fields) else ''
                record[column] = value or None
            yield line_number, record

    return header, records()


def parse_rows(text: str, delimiter: str = ',') -> Tuple[List[str], List[RowRecord]]:
    """
    Split delimited text into a header and row records.

    The first line is the header; every later line, blank or not, maps
    header[i] to its trimmed field, or None when empty or missing. A blank
    line (including the one after a trailing newline) is an all-None record.

    Raises:
        ImportFormatError: If the header row has no columns
    """
    header, records = _split_lines(text, delimiter)
    return header, [record for _, record in records]


class BulkImportPipeline:
    """
    Applies parsed rows to a repository strictly one at a time.

    Args:
        repository: EntityRepository the rows are created through
        delimiter: Single field delimiter character
    """

    def __init__(self, repository, delimiter: str = ','):
        if len(delimiter) != 1:
            raise ValueError("delimiter must be a single character")
        self.repository = repository
        self.delimiter = delimiter

    def run(self, payload) -> ImportResult:
        """
        Import every row of ``payload``.

        Returns:
            ImportResult with success and error counts

        Raises:
            ImportReadError: If the payload cannot be read
            ImportFormatError: If the header row is missing or empty
        """
        kind_name = self.repository.kind.name
        text = read_payload(payload)
        header, records = _split_lines(text, self.delimiter)
        logger.info(f"Importing {kind_name} rows with columns {[c for c in header if c]}")

        result = ImportResult()
        for line_number, record in records:
            missing = self.repository.missing_required_fields(record)
            if missing:
                self._row_failed(result, line_number, ValidationError(
                    f"{kind_name} requires: {', '.join(missing)}", fields=missing
                ))
                continue
            try:
                self.repository.create(record)
            except CmmsDomainError as e:
                self._row_failed(result, line_number, e)
                continue
            result.success += 1

        logger.info(f"Import of {kind_name} finished: {result.success} created, {result.errors} with errors")
        return result

    @staticmethod
    def _row_failed(result: ImportResult, line_number: int, cause: CmmsDomainError):
        result.errors += 1
        row_error = ImportRowError(line_number, cause)
        logger.warning(f"Error importing row: {row_error.message}")
