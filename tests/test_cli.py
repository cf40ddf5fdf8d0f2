"""CLI and high-level builder smoke tests."""
from __future__ import annotations

from datetime import datetime
from pathlib import Path

import pytest
from pypdf import PdfReader
from rich.console import Console

from coin_cards.__main__ import main, parse_row_selection
from coin_cards.builder import build_cards_pdf
from coin_cards.errors import NoRecordsSelected
from coin_cards.formatting import format_date, format_file_size
from coin_cards.records import RecordStore


COINS = "Subject,Year,Value,Grading\n" + "".join(
    f"Coin {i},{1890 + i},${i},MS6{i % 10}\n" for i in range(1, 26)
)


@pytest.fixture
def coins_csv(tmp_path: Path) -> Path:
    path = tmp_path / "coins.csv"
    path.write_text(COINS, encoding="utf-8")
    return path


class TestBuildCommand:
    def test_build_all_rows(self, coins_csv: Path, tmp_path: Path):
        output = tmp_path / "out" / "cards.pdf"

        assert main(["build", str(coins_csv), "--output", str(output)]) == 0
        assert len(PdfReader(str(output)).pages) == 4

    def test_build_is_default_command(self, coins_csv: Path, tmp_path: Path):
        output = tmp_path / "cards.pdf"

        assert main([str(coins_csv), "--output", str(output), "--rows", "1-3"]) == 0
        assert len(PdfReader(str(output)).pages) == 2

    def test_invalid_file_type(self, tmp_path: Path):
        notes = tmp_path / "notes.txt"
        notes.write_text("a,b\n", encoding="utf-8")

        assert main(["build", str(notes), "--output", str(tmp_path / "x.pdf")]) == 2
        assert not (tmp_path / "x.pdf").exists()

    def test_no_rows_selected(self, coins_csv: Path, tmp_path: Path):
        assert main(["build", str(coins_csv), "--rows", "100", "--output", str(tmp_path / "x.pdf")]) == 1

    def test_card_too_large(self, coins_csv: Path, tmp_path: Path):
        assert main(["build", str(coins_csv), "--card-size", "20", "--output", str(tmp_path / "x.pdf")]) == 1

    def test_inspect(self, coins_csv: Path):
        assert main(["inspect", str(coins_csv)]) == 0

    def test_unexpected_runtime_error_propagates(self, coins_csv: Path, tmp_path: Path, monkeypatch):
        def fail(*args, **kwargs):
            raise RuntimeError("renderer failed")

        monkeypatch.setattr("coin_cards.__main__.build_cards_pdf", fail)
        with pytest.raises(RuntimeError, match="renderer failed"):
            main(["build", str(coins_csv), "--output", str(tmp_path / "x.pdf")])

    def test_summary_reports_output_size(self, coins_csv: Path, tmp_path: Path, monkeypatch):
        recorder = Console(record=True, width=200)
        monkeypatch.setattr("coin_cards.builder.console", recorder)
        output = tmp_path / "cards.pdf"

        assert main(["build", str(coins_csv), "--output", str(output)]) == 0
        assert format_file_size(output.stat().st_size) in recorder.export_text()


class TestRowSelection:
    def test_ranges_and_singles(self):
        assert parse_row_selection("1-3, 5") == {0, 1, 2, 4}

    def test_invalid(self):
        with pytest.raises(ValueError):
            parse_row_selection("3-1")
        with pytest.raises(ValueError):
            parse_row_selection("0")
        with pytest.raises(ValueError):
            parse_row_selection("x")


def test_build_requires_selection(tmp_path: Path):
    with pytest.raises(NoRecordsSelected):
        build_cards_pdf(RecordStore(), output_path=tmp_path / "cards.pdf")


class TestFormatting:
    @pytest.mark.parametrize(
        "size, expected",
        [(0, "0 Bytes"), (512, "512 Bytes"), (1024, "1 KB"), (1536, "1.5 KB"), (5 * 1024 ** 2, "5 MB")],
    )
    def test_format_file_size(self, size, expected):
        assert format_file_size(size) == expected

    def test_format_date(self):
        assert format_date(datetime(2024, 3, 1, 14, 5, 9)) == "2024-03-01 14:05:09"
