"""
Card sheet geometry.

All positions are in inches, measured from the top-left corner of the
sheet. Nothing here draws; `pdf_generator` turns the sheets into pages.
"""
from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum
from typing import List, Tuple


# Default physical dimensions (inches)
DEFAULT_CARD_SIZE = 1.6
DEFAULT_MARGIN = 0.3
DEFAULT_BLEED = 0.125
DEFAULT_SHEET_WIDTH = 8.5
DEFAULT_SHEET_HEIGHT = 11.0

# Records laid out per batch
DEFAULT_CARDS_PER_BATCH = 20


class Side(str, Enum):
    FRONT = "front"
    BACK = "back"


@dataclass(frozen=True)
class PageParams:
    """Card and sheet dimensions for one layout run."""

    card_size: float = DEFAULT_CARD_SIZE
    margin: float = DEFAULT_MARGIN
    bleed: float = DEFAULT_BLEED
    sheet_width: float = DEFAULT_SHEET_WIDTH
    sheet_height: float = DEFAULT_SHEET_HEIGHT
    cards_per_batch: int = DEFAULT_CARDS_PER_BATCH

    @property
    def pitch(self) -> float:
        """Distance between the left (or top) edges of neighbouring cards."""
        return self.card_size + self.margin

    @property
    def cards_per_row(self) -> int:
        return max(0, math.floor((self.sheet_width - self.margin) / self.pitch))

    @property
    def cards_per_col(self) -> int:
        return max(0, math.floor((self.sheet_height - self.margin) / self.pitch))

    @property
    def cards_per_sheet(self) -> int:
        return self.cards_per_row * self.cards_per_col

    def row_width(self, count: int) -> float:
        """Width of a row of `count` cards, without outer margins."""
        if count <= 0:
            return 0.0
        return count * self.card_size + (count - 1) * self.margin

    def validate(self) -> None:
        """
        Raises:
            ValueError: If the sheet holds no card or the batch size is < 1
        """
        if self.card_size <= 0 or self.margin < 0 or self.bleed < 0:
            raise ValueError(
                f"Invalid card dimensions: card_size={self.card_size}, "
                f"margin={self.margin}, bleed={self.bleed}"
            )
        if self.cards_per_sheet == 0:
            raise ValueError(
                f"A {self.card_size}in card does not fit on a "
                f"{self.sheet_width}x{self.sheet_height}in sheet with "
                f"{self.margin}in margins."
            )
        if self.cards_per_batch < 1:
            raise ValueError(f"cards_per_batch must be >= 1, got {self.cards_per_batch}")


@dataclass(frozen=True)
class LayoutCell:
    """Placement of one card on one side of a page."""

    page: int
    side: Side
    row: int
    column: int
    x: float
    y: float
    record_index: int

    @property
    def sequence(self) -> int:
        """1-based card number printed on the card."""
        return self.record_index + 1


@dataclass(frozen=True)
class Sheet:
    """One output page: a front or back side of a physical page."""

    number: int
    batch: int
    page: int
    side: Side
    cells: Tuple[LayoutCell, ...]


def bleed_rect(cell: LayoutCell, params: PageParams) -> Tuple[float, float, float]:
    """(x, y, size) of the colored bleed square behind a card."""
    return (
        cell.x - params.bleed,
        cell.y - params.bleed,
        params.card_size + 2 * params.bleed,
    )


def _front_cells(page: int, first: int, count: int, params: PageParams) -> List[LayoutCell]:
    per_row = params.cards_per_row
    cells = []
    for i in range(count):
        row, col = divmod(i, per_row)
        cells.append(
            LayoutCell(
                page=page,
                side=Side.FRONT,
                row=row,
                column=col,
                x=params.margin + col * params.pitch,
                y=params.margin + row * params.pitch,
                record_index=first + i,
            )
        )
    return cells


def _back_cells(front: List[LayoutCell], params: PageParams) -> List[LayoutCell]:
    """
    Mirror the front cells so they register when the page is flipped about
    its vertical axis: each row is reversed and right-aligned.
    """
    row_counts: dict = {}
    for cell in front:
        row_counts[cell.row] = row_counts.get(cell.row, 0) + 1

    cells = []
    for cell in front:
        width = row_counts[cell.row]
        column = width - 1 - cell.column
        x_offset = params.sheet_width - params.row_width(width) - params.margin
        cells.append(
            LayoutCell(
                page=cell.page,
                side=Side.BACK,
                row=cell.row,
                column=column,
                x=x_offset + column * params.pitch,
                y=cell.y,
                record_index=cell.record_index,
            )
        )
    return cells


def compute_layout(count: int, params: PageParams | None = None) -> List[Sheet]:
    """
    Lay out `count` records onto front and back sheets.

    - Records are split into batches of `params.cards_per_batch`.
    - For each batch, all front sheets are emitted, then one back sheet
      per front sheet in the same page order.
    - Fronts fill row-major, left-aligned; short rows stay left-aligned.
    - Backs mirror each row's column order and are right-aligned.

    The result depends only on `count` and `params`.

    Raises:
        ValueError: If `params` cannot hold a single card
    """
    params = params or PageParams()
    params.validate()

    per_sheet = params.cards_per_sheet
    sheets: List[Sheet] = []
    page = 0

    for batch, batch_start in enumerate(range(0, count, params.cards_per_batch)):
        batch_size = min(params.cards_per_batch, count - batch_start)
        pages = math.ceil(batch_size / per_sheet)

        fronts: List[List[LayoutCell]] = []
        for p in range(pages):
            first = batch_start + p * per_sheet
            on_page = min(per_sheet, batch_start + batch_size - first)
            fronts.append(_front_cells(page + p, first, on_page, params))

        for p, cells in enumerate(fronts):
            sheets.append(Sheet(len(sheets), batch, page + p, Side.FRONT, tuple(cells)))
        for p, cells in enumerate(fronts):
            sheets.append(
                Sheet(len(sheets), batch, page + p, Side.BACK, tuple(_back_cells(cells, params)))
            )
        page += pages

    return sheets
