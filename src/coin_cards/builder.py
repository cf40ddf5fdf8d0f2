"""High-level helpers tying ingestion, layout and PDF writing together."""
from __future__ import annotations

from pathlib import Path
from typing import List, Optional, Sequence

from rich import box
from rich.console import Console
from rich.panel import Panel
from rich.progress import BarColumn, Progress, SpinnerColumn, TaskProgressColumn, TextColumn, TimeElapsedColumn
from rich.table import Table

from .errors import NoRecordsSelected
from .formatting import format_file_size
from .ingest import IngestReport, IngestWarning, ingest_files_sync
from .layout import PageParams, Side, compute_layout
from .pdf_generator import write_card_sheets_pdf
from .rarity import DEFAULT_FIELDS, RarityFields, RarityTier, classify
from .records import RecordStore


# Rich console instance for beautiful output
console = Console()


def make_progress() -> Progress:
    return Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        BarColumn(),
        TaskProgressColumn(),
        TimeElapsedColumn(),
        console=console,
    )


def load_files(
    store: RecordStore,
    paths: Sequence[Path],
    progress: Optional[Progress] = None,
) -> IngestReport:
    """
    Ingest `paths` into `store`, printing a warning for every skipped file.

    Raises:
        InvalidFileType: If any path is not a CSV file
    """
    task_id = None
    if progress is not None:
        task_id = progress.add_task("[cyan]Reading files...", total=len(paths))

    def on_progress(path: Path) -> None:
        if progress is not None and task_id is not None:
            progress.update(task_id, advance=1, description=f"[cyan]Reading [bold]{path.name}[/bold]...")

    report = ingest_files_sync(store, paths, on_progress=on_progress)
    print_warnings(report.warnings)
    return report


def print_warnings(warnings: Sequence[IngestWarning]) -> None:
    for warning in warnings:
        console.print(f"[yellow]⚠[/yellow] Skipping [bold]{warning.file_name}[/bold]: {warning.message}")


def build_cards_pdf(
    store: RecordStore,
    output_path: Path,
    params: PageParams | None = None,
    templates_dir: Path | None = None,
    fields: RarityFields = DEFAULT_FIELDS,
) -> int:
    """
    High-level helper:
    - Takes the store's selected subset
    - Computes front/back sheets
    - Writes a single PDF and prints a summary

    Returns:
        Number of sheets written

    Raises:
        NoRecordsSelected: If no records are selected
    """
    params = params or PageParams()
    records = store.selected_subset()
    if not records:
        console.print("[red]✘[/red] No records selected.")
        raise NoRecordsSelected()

    # Ensure the output directory exists
    output_path.parent.mkdir(parents=True, exist_ok=True)

    sheets = compute_layout(len(records), params)

    with make_progress() as progress:
        task_id = progress.add_task("[green]Writing PDF pages...", total=len(sheets))

        def on_sheet(current: int, total: int) -> None:
            progress.update(task_id, advance=1, description=f"[green]Writing page [bold]{current}/{total}[/bold]...")

        write_card_sheets_pdf(
            records,
            sheets,
            output_path=output_path,
            params=params,
            templates_dir=templates_dir,
            fields=fields,
            progress_callback=on_sheet,
        )

    tiers = [classify(record, fields) for record in records]

    # Print summary
    console.print()

    table = Table(box=box.ROUNDED, border_style="green")
    table.add_column("Property", style="cyan")
    table.add_column("Value", style="white")

    table.add_row("🪙 Cards", f"[bold]{len(records)}[/bold]")
    table.add_row("📐 Grid", f"[bold]{params.cards_per_row} x {params.cards_per_col}[/bold]")
    table.add_row(
        "📄 Sheets created",
        f"[bold]{len(sheets)}[/bold] "
        f"({sum(1 for s in sheets if s.side == Side.FRONT)} front, "
        f"{sum(1 for s in sheets if s.side == Side.BACK)} back)",
    )
    for tier in RarityTier:
        table.add_row(f"  {tier.label}", str(tiers.count(tier)))
    table.add_row("💾 Output file", f"[bold]{output_path}[/bold]")
    table.add_row("📊 File size", f"[bold]{format_file_size(output_path.stat().st_size)}[/bold]")

    console.print(table)
    console.print()
    console.print("[green]✔[/green] [bold green]Done![/bold green] Your card sheets are ready to print.")
    console.print()

    return len(sheets)


def print_banner(title: str, subtitle: str, style: str = "magenta") -> None:
    console.print()
    console.print(Panel.fit(
        f"[bold {style}]{title}[/bold {style}]\n"
        f"[dim]{subtitle}[/dim]",
        border_style=style,
    ))
    console.print()


def record_rows(store: RecordStore, fields: RarityFields = DEFAULT_FIELDS) -> List[List[str]]:
    """Table rows (selection mark, values, rarity) for the records of selected files."""
    rows = []
    for record in store.visible_records():
        mark = "✔" if record.selected else ""
        values = [record.get(name) for name in store.headers]
        rows.append([mark, *values, classify(record, fields).label])
    return rows
