"""Tests for the ReportLab card sheet writer."""
from __future__ import annotations

from pathlib import Path

import pytest
from pypdf import PdfReader

from coin_cards.layout import PageParams, compute_layout
from coin_cards.pdf_generator import write_card_sheets_pdf
from coin_cards.records import Record


def make_records(count: int) -> list[Record]:
    records = []
    for i in range(count):
        values = {
            "Subject": f"Morgan Dollar {i + 1}",
            "Year": str(1880 + i),
            "Value": f"${10 + i}",
            "Grading": "MS65",
        }
        records.append(Record(fields=tuple(values), values=values, selected=True))
    return records


class TestWriteCardSheets:
    def test_one_page_per_sheet(self, tmp_path: Path):
        params = PageParams()
        records = make_records(25)
        sheets = compute_layout(len(records), params)
        output = tmp_path / "cards.pdf"
        calls = []

        write_card_sheets_pdf(
            records,
            sheets,
            output_path=output,
            params=params,
            progress_callback=lambda current, total: calls.append((current, total)),
        )

        reader = PdfReader(str(output))
        assert len(reader.pages) == 4
        assert calls == [(1, 4), (2, 4), (3, 4), (4, 4)]

        page = reader.pages[0]
        assert float(page.mediabox.width) == pytest.approx(612)
        assert float(page.mediabox.height) == pytest.approx(792)

    def test_card_text(self, tmp_path: Path):
        records = make_records(2)
        output = tmp_path / "cards.pdf"

        write_card_sheets_pdf(records, compute_layout(2), output_path=output)

        reader = PdfReader(str(output))
        front_text = reader.pages[0].extract_text()
        back_text = reader.pages[1].extract_text()
        assert "Morgan Dollar 1" in front_text
        assert "1881" in front_text
        assert "#2" in back_text
        assert "Morgan" not in back_text

    def test_missing_templates_are_skipped(self, tmp_path: Path):
        output = tmp_path / "cards.pdf"
        write_card_sheets_pdf(
            make_records(1),
            compute_layout(1),
            output_path=output,
            templates_dir=tmp_path / "no-templates",
        )
        assert output.is_file()

    def test_no_sheets_raises(self, tmp_path: Path):
        with pytest.raises(ValueError):
            write_card_sheets_pdf([], [], output_path=tmp_path / "empty.pdf")
