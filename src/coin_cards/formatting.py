"""Human-readable formatting helpers for file listings."""
from __future__ import annotations

import math
from datetime import datetime

SIZE_UNITS = ["Bytes", "KB", "MB", "GB"]


def format_file_size(size: int) -> str:
    """
    Format a byte count like "0 Bytes", "512 Bytes", "1.5 KB" or "2 MB".

    Values are rounded to two decimals with trailing zeros dropped.
    """
    if size <= 0:
        return "0 Bytes"
    k = 1024
    i = min(int(math.floor(math.log(size) / math.log(k))), len(SIZE_UNITS) - 1)
    value = round(size / k ** i, 2)
    return f"{value:g} {SIZE_UNITS[i]}"


def format_date(value: datetime) -> str:
    """Local date and time, e.g. "2024-03-01 14:05:09"."""
    return value.strftime("%Y-%m-%d %H:%M:%S")
