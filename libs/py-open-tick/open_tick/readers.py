"""
CSV reading and writing for logbook exports.

This module only turns CSV rows into typed source records and back. It knows
nothing about canonical conversion.
"""

import csv
import logging
from typing import IO, Iterable, Iterator, Sequence

from pydantic import ValidationError

from .exceptions import RowParseError, UnknownSourceError
from .schema import CanonicalTick, DataSource
from .vendor_schemas import SOURCE_RECORD_TYPES, MountainProjectTick, SourceRecord, TheCragTick

logger = logging.getLogger(__name__)

CANONICAL_COLUMNS: tuple[str, ...] = tuple(CanonicalTick.model_fields)


def detect_source(fieldnames: Sequence[str] | None) -> DataSource:
    """
    Work out which export a CSV header belongs to.

    Raises:
        UnknownSourceError: header does not contain every column of any export
    """
    headers = set(fieldnames or ())
    for source, record_type in SOURCE_RECORD_TYPES.items():
        if headers.issuperset(record_type.csv_columns()):
            return source

    raise UnknownSourceError(f"Unrecognised logbook header: {', '.join(fieldnames or ())}")


def _summarize_validation_error(exc: ValidationError) -> str:
    return "; ".join(
        f"{'.'.join(str(part) for part in err.get('loc', ())) or 'row'}: {err.get('msg', 'invalid value')}"
        for err in exc.errors()
    )


def _iter_records(reader: csv.DictReader, source: DataSource) -> Iterator[SourceRecord]:
    record_type = SOURCE_RECORD_TYPES[source]
    fieldnames = reader.fieldnames or []

    missing = [column for column in record_type.csv_columns() if column not in fieldnames]
    if missing:
        raise RowParseError(
            f"Missing columns: {', '.join(missing)}",
            source=source.value,
            row=0,
        )

    count = 0
    for row_number, row in enumerate(reader, start=1):
        # Extra trailing cells land under the None key
        cells = {key: value for key, value in row.items() if key is not None}
        try:
            record = record_type.model_validate(cells)
        except ValidationError as e:
            raise RowParseError(
                f"Row {row_number}: {_summarize_validation_error(e)}",
                source=source.value,
                row=row_number,
            ) from e
        count += 1
        yield record

    logger.debug("Read %s %s records", count, source.value)


def read_ticks(stream: IO[str], source: DataSource | None = None) -> Iterator[SourceRecord]:
    """
    Read typed source records from a CSV stream.

    Args:
        stream: Text stream positioned at the header row
        source: Export type; detected from the header when omitted

    Yields:
        One source record per data row

    Raises:
        UnknownSourceError: source omitted and header not recognised
        RowParseError: header incomplete, or a row fails validation
    """
    # Short rows are padded with blanks rather than rejected
    reader = csv.DictReader(stream, restval="")
    if source is None:
        source = detect_source(reader.fieldnames)
        logger.debug("Detected %s export from header", source.value)
    else:
        source = DataSource(source)

    yield from _iter_records(reader, source)


def read_mountain_project_csv(stream: IO[str]) -> Iterator[MountainProjectTick]:
    """Read a Mountain Project tick export."""
    return read_ticks(stream, DataSource.MOUNTAIN_PROJECT)


def read_thecrag_csv(stream: IO[str]) -> Iterator[TheCragTick]:
    """Read a theCrag logbook export."""
    return read_ticks(stream, DataSource.THECRAG)


def write_records(
    records: Iterable[SourceRecord],
    stream: IO[str],
    source: DataSource,
) -> int:
    """
    Write source records back out under their export's column names.

    Returns:
        Number of records written
    """
    record_type = SOURCE_RECORD_TYPES[DataSource(source)]
    writer = csv.DictWriter(stream, fieldnames=record_type.csv_columns(), lineterminator="\n")
    writer.writeheader()

    count = 0
    for record in records:
        writer.writerow(record.to_csv_row())
        count += 1
    return count


def write_mountain_project_csv(records: Iterable[MountainProjectTick], stream: IO[str]) -> int:
    """Write records in Mountain Project tick export format."""
    return write_records(records, stream, DataSource.MOUNTAIN_PROJECT)


def write_canonical_csv(ticks: Iterable[CanonicalTick], stream: IO[str]) -> int:
    """
    Write canonical ticks as CSV.

    Disciplines are written as ";"-joined tags; absent values as empty cells.

    Returns:
        Number of ticks written
    """
    writer = csv.DictWriter(stream, fieldnames=CANONICAL_COLUMNS, lineterminator="\n")
    writer.writeheader()

    count = 0
    for tick in ticks:
        row = {}
        for key, value in tick.to_dict().items():
            if value is None:
                row[key] = ""
            elif isinstance(value, list):
                row[key] = ";".join(value)
            else:
                row[key] = str(value)
        writer.writerow(row)
        count += 1
    return count
