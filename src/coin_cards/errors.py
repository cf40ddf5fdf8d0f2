"""Exceptions raised while ingesting CSV files."""
from __future__ import annotations

from typing import Sequence


class CoinCardsError(Exception):
    """Base class for all coin_cards errors."""


class InvalidFileType(CoinCardsError):
    """One or more selected files do not have the required suffix."""

    def __init__(self, names: Sequence[str], suffix: str = ".csv") -> None:
        self.names = list(names)
        self.suffix = suffix
        super().__init__(
            f"Please select only {suffix.lstrip('.').upper()} files "
            f"(rejected: {', '.join(self.names)})"
        )


class SchemaMismatch(CoinCardsError):
    """A file's header set does not match the established reference headers."""

    def __init__(self, name: str, expected: Sequence[str], found: Sequence[str]) -> None:
        self.name = name
        self.expected = list(expected)
        self.found = list(found)
        super().__init__(
            f'File "{name}" format does not match the first file. '
            "Please ensure all files have the same columns."
        )


class UnreadableContent(CoinCardsError):
    """A file could not be read or decoded."""

    def __init__(self, name: str, cause: BaseException) -> None:
        self.name = name
        self.cause = cause
        super().__init__(
            f'Error processing "{name}" ({type(cause).__name__}). '
            "Please ensure it is a properly formatted CSV file."
        )


class NoRecordsSelected(CoinCardsError):
    """A card sheet build was requested with an empty selection."""

    def __init__(self) -> None:
        super().__init__("No records selected.")
