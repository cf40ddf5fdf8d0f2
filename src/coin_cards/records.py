"""Records, source files and the in-memory record store."""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Dict, Iterator, List, Sequence, Tuple

from .schema import HeaderSchema


@dataclass
class Record:
    """
    One data row of a CSV file.

    `fields` keeps the header order; `values` maps each field name to its
    string value. The selection flag lives apart from the data columns.
    """

    fields: Tuple[str, ...]
    values: Dict[str, str]
    selected: bool = False

    def get(self, name: str, default: str = "") -> str:
        return self.values.get(name, default)

    def lookup(self, name: str) -> str:
        """Get a value by exact field name, falling back to a case-insensitive match."""
        if name in self.values:
            return self.values[name]
        wanted = name.casefold()
        for field_name in self.fields:
            if field_name.casefold() == wanted:
                return self.values.get(field_name, "")
        return ""


@dataclass
class SourceFile:
    """An ingested CSV file together with its parsed records."""

    name: str
    size: int
    uploaded_at: datetime = field(default_factory=datetime.now)
    selected: bool = False
    records: List[Record] = field(default_factory=list)


class RecordStore:
    """
    Owns all ingested files, their records and the batch header schema.

    The selected subset is derived on demand: records of selected files,
    in file insertion order then row order, whose own flag is set.
    """

    def __init__(self) -> None:
        self._files: List[SourceFile] = []
        self.schema = HeaderSchema()
        self.all_selected = False

    # -- files -------------------------------------------------------------

    @property
    def files(self) -> List[SourceFile]:
        return list(self._files)

    @property
    def headers(self) -> List[str]:
        return self.schema.headers

    @property
    def show_table(self) -> bool:
        return any(f.selected for f in self._files)

    def __len__(self) -> int:
        return len(self._files)

    def __iter__(self) -> Iterator[SourceFile]:
        return iter(self._files)

    def admit(self, headers: Sequence[str]) -> bool:
        """Check a candidate header row against the batch schema."""
        return self.schema.admit(headers)

    def _file(self, index: int) -> SourceFile:
        if not 0 <= index < len(self._files):
            raise IndexError(f"File index out of range: {index}")
        return self._files[index]

    def _record(self, file_index: int, row_index: int) -> Record:
        records = self._file(file_index).records
        if not 0 <= row_index < len(records):
            raise IndexError(f"Row index out of range: {row_index}")
        return records[row_index]

    def add_file(self, entry: SourceFile) -> int:
        """Append a file entry; returns its index."""
        self._files.append(entry)
        return len(self._files) - 1

    def remove_file(self, index: int) -> SourceFile:
        """Remove a file; removing the last one resets the header schema."""
        entry = self._file(index)
        del self._files[index]
        if not self._files:
            self.schema.reset()
        self.update_all_selected()
        return entry

    def toggle_file_selection(self, index: int) -> bool:
        entry = self._file(index)
        entry.selected = not entry.selected
        self.update_all_selected()
        return entry.selected

    # -- records -----------------------------------------------------------

    def set_record_selected(self, file_index: int, row_index: int, flag: bool) -> None:
        self._record(file_index, row_index).selected = flag
        self.update_all_selected()

    def toggle_record(self, file_index: int, row_index: int) -> bool:
        record = self._record(file_index, row_index)
        self.set_record_selected(file_index, row_index, not record.selected)
        return record.selected

    def selected_subset(self) -> List[Record]:
        return [
            record
            for entry in self._files
            if entry.selected
            for record in entry.records
            if record.selected
        ]

    def visible_records(self) -> List[Record]:
        """All records of selected files, regardless of their own flag."""
        return [r for entry in self._files if entry.selected for r in entry.records]

    def set_all_selected(self, flag: bool) -> None:
        """Set the flag on every record of every file, selected or not."""
        for entry in self._files:
            for record in entry.records:
                record.selected = flag
        self.update_all_selected()

    def update_all_selected(self) -> None:
        self.all_selected = self.is_all_selected()

    def is_all_selected(self) -> bool:
        # Computed over the selected files' rows, i.e. what the table shows
        rows = self.visible_records()
        return len(rows) > 0 and all(r.selected for r in rows)
