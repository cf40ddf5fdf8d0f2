"""PDF generation for double-sided coin card sheets."""
from __future__ import annotations

from pathlib import Path
from typing import Callable, List, Optional, Sequence

from reportlab.lib import colors
from reportlab.lib.units import inch
from reportlab.pdfgen import canvas

from .layout import LayoutCell, PageParams, Sheet, Side, bleed_rect
from .rarity import DEFAULT_FIELDS, RarityFields, RarityTier, classify
from .records import Record


# Fixed output file name
DEFAULT_OUTPUT = Path("build") / "coin-cards.pdf"

FONT = "Helvetica"
FONT_BOLD = "Helvetica-Bold"
SUBJECT_FONT_SIZE = 9
YEAR_FONT_SIZE = 8
SEQUENCE_FONT_SIZE = 7
BACK_SEQUENCE_FONT_SIZE = 18

# Length of the cut marks at the sheet edges, in points
CUT_MARK_LENGTH = 12


def write_card_sheets_pdf(
    records: Sequence[Record],
    sheets: Sequence[Sheet],
    output_path: Path,
    params: PageParams | None = None,
    templates_dir: Path | None = None,
    fields: RarityFields = DEFAULT_FIELDS,
    progress_callback: Optional[Callable[[int, int], None]] = None,
) -> None:
    """
    Draw precomputed sheets into a PDF, one page per sheet.

    Each card gets a bleed square in its rarity color, the tier's template
    image (when `templates_dir` has one), and its text: subject, year and
    number on the front; the number alone, centered, on the back.

    Args:
        records: Records referenced by the cells' `record_index`
        sheets: Output of `layout.compute_layout`
        output_path: Path to write the PDF to
        params: The parameters the sheets were computed with
        templates_dir: Folder holding the per-tier background images
        fields: Record columns used for rarity and card text
        progress_callback: Optional callback(current_sheet, total_sheets)

    Raises:
        ValueError: If there are no sheets to draw
    """
    if not sheets:
        raise ValueError("No card sheets to draw - no records selected.")

    params = params or PageParams()
    page_width = params.sheet_width * inch
    page_height = params.sheet_height * inch

    tiers: List[RarityTier] = [classify(record, fields) for record in records]

    c = canvas.Canvas(str(output_path), pagesize=(page_width, page_height))
    c.setTitle("Coin Cards")

    total = len(sheets)
    for sheet in sheets:
        if progress_callback is not None:
            progress_callback(sheet.number + 1, total)

        draw_cut_guides(c, sheet.cells, params)

        for cell in sheet.cells:
            record = records[cell.record_index]
            tier = tiers[cell.record_index]
            draw_card(c, cell, record, tier, params, templates_dir, fields)

        c.showPage()

    c.save()


def draw_card(
    c: canvas.Canvas,
    cell: LayoutCell,
    record: Record,
    tier: RarityTier,
    params: PageParams,
    templates_dir: Path | None = None,
    fields: RarityFields = DEFAULT_FIELDS,
) -> None:
    """Draw one card (bleed, template, text) at its cell."""
    size = params.card_size * inch
    x = cell.x * inch
    y = _to_pdf_y(cell.y, params.card_size, params)

    # Bleed square in the tier color
    bx, by, bsize = bleed_rect(cell, params)
    c.setFillColor(colors.HexColor(tier.color))
    c.rect(
        bx * inch,
        _to_pdf_y(by, bsize, params),
        bsize * inch,
        bsize * inch,
        stroke=0,
        fill=1,
    )

    if templates_dir is not None:
        template = templates_dir / tier.template
        if template.is_file():
            c.drawImage(
                str(template),
                x,
                y,
                width=size,
                height=size,
                preserveAspectRatio=True,
                anchor="c",
                mask="auto",
            )

    c.setFillColor(colors.black)
    center_x = x + size / 2.0

    if cell.side == Side.FRONT:
        c.setFont(FONT_BOLD, SUBJECT_FONT_SIZE)
        c.drawCentredString(center_x, y + size * 0.62, record.lookup(fields.subject))
        c.setFont(FONT, YEAR_FONT_SIZE)
        c.drawCentredString(center_x, y + size * 0.45, record.lookup(fields.year))
        c.setFont(FONT, SEQUENCE_FONT_SIZE)
        c.drawCentredString(center_x, y + size * 0.12, f"#{cell.sequence}")
    else:
        c.setFont(FONT_BOLD, BACK_SEQUENCE_FONT_SIZE)
        c.drawCentredString(
            center_x,
            y + size / 2.0 - BACK_SEQUENCE_FONT_SIZE / 3.0,
            f"#{cell.sequence}",
        )


def draw_cut_guides(
    c: canvas.Canvas,
    cells: Sequence[LayoutCell],
    params: PageParams,
) -> None:
    """
    Draw cut marks at the sheet edges, in line with every card edge.

    - vertical marks at the top and bottom for each card's left/right edge
    - horizontal marks at the left and right for each card's top/bottom edge
    """
    page_width = params.sheet_width * inch
    page_height = params.sheet_height * inch
    size = params.card_size * inch

    x_positions = sorted({cell.x * inch for cell in cells} | {cell.x * inch + size for cell in cells})
    y_positions = sorted(
        {_to_pdf_y(cell.y, params.card_size, params) for cell in cells}
        | {_to_pdf_y(cell.y, params.card_size, params) + size for cell in cells}
    )

    # Cut marks (black, thin)
    c.setLineWidth(0.5)
    c.setStrokeColorRGB(0, 0, 0)

    for x in x_positions:
        c.line(x, page_height, x, page_height - CUT_MARK_LENGTH)
        c.line(x, 0, x, CUT_MARK_LENGTH)

    for y in y_positions:
        c.line(0, y, CUT_MARK_LENGTH, y)
        c.line(page_width, y, page_width - CUT_MARK_LENGTH, y)


def _to_pdf_y(top: float, height: float, params: PageParams) -> float:
    """Convert a top-left based y (inches) of a box to ReportLab's bottom-left origin (points)."""
    return (params.sheet_height - top - height) * inch
