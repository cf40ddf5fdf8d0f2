"""CLI entry point for coin_cards."""
from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import List, Set

from rich import box
from rich.table import Table

from coin_cards.builder import build_cards_pdf, console, load_files, make_progress, print_banner, record_rows
from coin_cards.errors import InvalidFileType, NoRecordsSelected
from coin_cards.formatting import format_date, format_file_size
from coin_cards.layout import (
    DEFAULT_BLEED,
    DEFAULT_CARD_SIZE,
    DEFAULT_CARDS_PER_BATCH,
    DEFAULT_MARGIN,
    PageParams,
)
from coin_cards.pdf_generator import DEFAULT_OUTPUT
from coin_cards.rarity import RarityFields
from coin_cards.records import RecordStore


def _add_files_argument(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "files",
        nargs="+",
        type=Path,
        help="CSV files to load. The first file defines the columns.",
    )


def _add_field_arguments(parser: argparse.ArgumentParser) -> None:
    defaults = RarityFields()
    parser.add_argument("--year-field", default=defaults.year, help=f"Year column (default: {defaults.year}).")
    parser.add_argument("--value-field", default=defaults.value, help=f"Value column (default: {defaults.value}).")
    parser.add_argument(
        "--grading-field", default=defaults.grading, help=f"Grading column (default: {defaults.grading})."
    )
    parser.add_argument(
        "--subject-field", default=defaults.subject, help=f"Subject column (default: {defaults.subject})."
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Coin Cards – Generate printable double-sided coin card sheets from CSV files"
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # Inspect command - only load and show the data
    inspect_parser = subparsers.add_parser(
        "inspect",
        help="Load CSV files and show their records (no PDF generation)",
    )
    _add_files_argument(inspect_parser)
    _add_field_arguments(inspect_parser)

    # Build command - load data and generate PDF
    build_cmd = subparsers.add_parser(
        "build",
        help="Load CSV files and generate printable card sheets",
    )
    _add_files_argument(build_cmd)
    build_cmd.add_argument(
        "--output",
        type=str,
        default=str(DEFAULT_OUTPUT),
        help=f"Path to output file (default: {DEFAULT_OUTPUT}).",
    )
    build_cmd.add_argument(
        "--rows",
        type=str,
        default=None,
        help="1-based rows to print across all files, e.g. '1-5,9' (default: all rows).",
    )
    build_cmd.add_argument(
        "--card-size", type=float, default=DEFAULT_CARD_SIZE, help=f"Card size in inches (default: {DEFAULT_CARD_SIZE})."
    )
    build_cmd.add_argument(
        "--margin", type=float, default=DEFAULT_MARGIN, help=f"Margin between cards in inches (default: {DEFAULT_MARGIN})."
    )
    build_cmd.add_argument(
        "--bleed", type=float, default=DEFAULT_BLEED, help=f"Bleed width in inches (default: {DEFAULT_BLEED})."
    )
    build_cmd.add_argument(
        "--batch-size",
        type=int,
        default=DEFAULT_CARDS_PER_BATCH,
        help=f"Cards per front/back batch (default: {DEFAULT_CARDS_PER_BATCH}).",
    )
    build_cmd.add_argument(
        "--templates-dir",
        type=str,
        default=None,
        help="Folder with per-rarity background images (common.png, uncommon.png, rare.png, ultra_rare.png).",
    )
    _add_field_arguments(build_cmd)

    return parser


def parse_row_selection(spec: str) -> Set[int]:
    """
    Parse a row selection like "1-5,9" into 0-based indices.

    Raises:
        ValueError: If a part is not a positive number or range
    """
    selected: Set[int] = set()
    for part in spec.split(","):
        part = part.strip()
        if not part:
            continue
        if "-" in part:
            start_str, end_str = part.split("-", 1)
            start, end = int(start_str), int(end_str)
        else:
            start = end = int(part)
        if start < 1 or end < start:
            raise ValueError(f"Invalid row range: {part!r}")
        selected.update(range(start - 1, end))
    return selected


def _fields_from_args(args: argparse.Namespace) -> RarityFields:
    return RarityFields(
        year=args.year_field,
        value=args.value_field,
        grading=args.grading_field,
        subject=args.subject_field,
    )


def load_store(files: List[Path]) -> RecordStore:
    """Load files into a fresh store with every file selected."""
    store = RecordStore()
    with make_progress() as progress:
        load_files(store, files, progress=progress)
    for index, entry in enumerate(store):
        if not entry.selected:
            store.toggle_file_selection(index)
    return store


def print_store(store: RecordStore, fields: RarityFields) -> None:
    files_table = Table(box=box.ROUNDED, border_style="cyan", title="Files")
    files_table.add_column("File", style="cyan")
    files_table.add_column("Size", style="white")
    files_table.add_column("Uploaded", style="dim")
    files_table.add_column("Rows", style="white", justify="right")
    for entry in store:
        files_table.add_row(
            entry.name,
            format_file_size(entry.size),
            format_date(entry.uploaded_at),
            str(len(entry.records)),
        )
    console.print(files_table)

    records_table = Table(box=box.SIMPLE, show_header=True, title="Records")
    records_table.add_column("✔", style="green")
    for header in store.headers:
        records_table.add_column(header)
    records_table.add_column("Rarity", style="magenta")
    for row in record_rows(store, fields):
        records_table.add_row(*row)
    console.print(records_table)


def run_inspect(files: List[Path], fields: RarityFields) -> None:
    """Run the inspect command."""
    print_banner("🔎 Coin Cards - Inspect", "Loading CSV files", style="cyan")
    store = load_store(files)
    store.set_all_selected(True)
    print_store(store, fields)


def run_build(args: argparse.Namespace) -> None:
    """Run the build command."""
    fields = _fields_from_args(args)
    print_banner("🪙 Coin Cards", "Creating printable card sheets")

    store = load_store(args.files)
    if args.rows is None:
        store.set_all_selected(True)
    else:
        wanted = parse_row_selection(args.rows)
        store.set_all_selected(False)
        for index, record in enumerate(store.visible_records()):
            record.selected = index in wanted
        store.update_all_selected()

    params = PageParams(
        card_size=args.card_size,
        margin=args.margin,
        bleed=args.bleed,
        cards_per_batch=args.batch_size,
    )
    templates_dir = Path(args.templates_dir).resolve() if args.templates_dir else None
    build_cards_pdf(
        store,
        output_path=Path(args.output).resolve(),
        params=params,
        templates_dir=templates_dir,
        fields=fields,
    )


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    argv = list(sys.argv[1:] if argv is None else argv)

    # Default to 'build' if no command specified
    if argv and argv[0] not in ("inspect", "build", "-h", "--help"):
        argv = ["build"] + argv
    args = parser.parse_args(argv)
    if args.command is None:
        parser.print_help()
        return 1

    try:
        if args.command == "inspect":
            run_inspect(args.files, _fields_from_args(args))
        elif args.command == "build":
            run_build(args)
    except InvalidFileType as e:
        console.print(f"[yellow]⚠[/yellow] {e}")
        return 2
    except NoRecordsSelected:
        # Already reported by build_cards_pdf
        return 1
    except ValueError as e:
        console.print(f"[red]✘[/red] {e}")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
