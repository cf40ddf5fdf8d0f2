"""Sequential ingestion of CSV files into a RecordStore."""
from __future__ import annotations

import asyncio
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Callable, List, Optional, Sequence

from .csv_parser import parse
from .errors import InvalidFileType, SchemaMismatch, UnreadableContent
from .records import RecordStore, SourceFile


# Required file name suffix
CSV_SUFFIX = ".csv"

# Text encoding of input files; a leading BOM is ignored
ENCODING = "utf-8-sig"


@dataclass
class IngestWarning:
    """A file that was skipped during ingestion."""

    file_name: str
    kind: str
    message: str


@dataclass
class IngestReport:
    """Outcome of one ingestion run."""

    accepted: List[SourceFile]
    warnings: List[IngestWarning]


def check_file_types(names: Sequence[str], suffix: str = CSV_SUFFIX) -> None:
    """
    Raises:
        InvalidFileType: If any name lacks `suffix`
    """
    invalid = [name for name in names if not name.endswith(suffix)]
    if invalid:
        raise InvalidFileType(invalid, suffix)


def decode(name: str, data: bytes) -> str:
    """
    Raises:
        UnreadableContent: If `data` is not valid text
    """
    try:
        return data.decode(ENCODING)
    except UnicodeDecodeError as e:
        raise UnreadableContent(name, e) from e


def ingest_bytes(
    store: RecordStore,
    name: str,
    data: bytes,
    uploaded_at: datetime | None = None,
) -> SourceFile:
    """
    Parse one file's raw bytes and add it to `store`.

    The first file with headers establishes the batch schema; later files
    must have the same header set.

    Raises:
        UnreadableContent: If the bytes cannot be decoded
        SchemaMismatch: If the headers do not match the batch schema
    """
    headers, records = parse(decode(name, data))

    # An empty file cannot establish a schema, but is still checked against one
    if headers or store.schema.is_established:
        if not store.admit(headers):
            raise SchemaMismatch(name, store.headers, headers)

    entry = SourceFile(
        name=name,
        size=len(data),
        uploaded_at=uploaded_at or datetime.now(),
        records=records,
    )
    store.add_file(entry)
    return entry


async def ingest_files(
    store: RecordStore,
    paths: Sequence[Path],
    on_progress: Optional[Callable[[Path], None]] = None,
) -> IngestReport:
    """
    Read, parse and store files one after another.

    Each file is fully stored before the next read starts, so the first
    accepted file always defines the schema. A file that cannot be read or
    does not match the schema is reported and skipped; the rest of the
    batch continues.

    Raises:
        InvalidFileType: If any path lacks the CSV suffix; nothing is read
    """
    check_file_types([path.name for path in paths])

    accepted: List[SourceFile] = []
    warnings: List[IngestWarning] = []

    for path in paths:
        if on_progress is not None:
            on_progress(path)
        try:
            try:
                data = await asyncio.to_thread(path.read_bytes)
            except OSError as e:
                raise UnreadableContent(path.name, e) from e
            accepted.append(ingest_bytes(store, path.name, data))
        except SchemaMismatch as e:
            warnings.append(IngestWarning(path.name, "schema_mismatch", str(e)))
        except UnreadableContent as e:
            warnings.append(IngestWarning(path.name, "unreadable", str(e)))

    return IngestReport(accepted=accepted, warnings=warnings)


def ingest_files_sync(
    store: RecordStore,
    paths: Sequence[Path],
    on_progress: Optional[Callable[[Path], None]] = None,
) -> IngestReport:
    """Sync wrapper for non-async contexts."""
    return asyncio.run(ingest_files(store, paths, on_progress))
