"""
Package initialization for coin_cards.

This package loads coin records from CSV files, lets a caller select a
subset of them and generates printable double-sided card sheet PDFs whose
bleed color shows each coin's rarity.

Modules:
    - csv_parser: Quote-aware CSV parsing into headers and records
    - schema: Header set reconciliation across files
    - records: Record, SourceFile and the RecordStore
    - ingest: Sequential file ingestion with per-file warnings
    - rarity: Rarity scoring and tiers
    - layout: Front/back card sheet geometry
    - pdf_generator: PDF generation for card sheets
    - builder: High-level API orchestrating the above modules
"""

from .csv_parser import ParseResult, parse, parse_row
from .errors import CoinCardsError, InvalidFileType, NoRecordsSelected, SchemaMismatch, UnreadableContent
from .ingest import IngestReport, IngestWarning, ingest_bytes, ingest_files, ingest_files_sync
from .layout import LayoutCell, PageParams, Sheet, Side, compute_layout
from .pdf_generator import write_card_sheets_pdf
from .rarity import RarityFields, RarityTier, classify, score
from .records import Record, RecordStore, SourceFile
from .schema import HeaderSchema, reconcile
from .builder import build_cards_pdf

__all__ = [
    # Parsing
    "ParseResult",
    "parse",
    "parse_row",
    # Errors
    "CoinCardsError",
    "InvalidFileType",
    "NoRecordsSelected",
    "SchemaMismatch",
    "UnreadableContent",
    # Ingestion
    "IngestReport",
    "IngestWarning",
    "ingest_bytes",
    "ingest_files",
    "ingest_files_sync",
    # Layout
    "LayoutCell",
    "PageParams",
    "Sheet",
    "Side",
    "compute_layout",
    "write_card_sheets_pdf",
    "build_cards_pdf",
    # Rarity
    "RarityFields",
    "RarityTier",
    "classify",
    "score",
    # Records
    "Record",
    "RecordStore",
    "SourceFile",
    "HeaderSchema",
    "reconcile",
]
