"""Rarity scoring of coin records."""
from __future__ import annotations

import re
from dataclasses import dataclass
from enum import IntEnum

from .records import Record


class RarityTier(IntEnum):
    """Ordered rarity tiers, lowest first."""

    COMMON = 0
    UNCOMMON = 1
    RARE = 2
    ULTRA_RARE = 3

    @property
    def label(self) -> str:
        return self.name.replace("_", " ").title()

    @property
    def color(self) -> str:
        return TIER_COLORS[self]

    @property
    def template(self) -> str:
        return TIER_TEMPLATES[self]


# Bleed fill color for each tier
TIER_COLORS = {
    RarityTier.COMMON: "#9E9E9E",
    RarityTier.UNCOMMON: "#2E7D32",
    RarityTier.RARE: "#1565C0",
    RarityTier.ULTRA_RARE: "#C9A227",
}

# Background template image file name for each tier
TIER_TEMPLATES = {
    RarityTier.COMMON: "common.png",
    RarityTier.UNCOMMON: "uncommon.png",
    RarityTier.RARE: "rare.png",
    RarityTier.ULTRA_RARE: "ultra_rare.png",
}


@dataclass(frozen=True)
class RarityFields:
    """Names of the record columns used for scoring and card text."""

    year: str = "Year"
    value: str = "Value"
    grading: str = "Grading"
    subject: str = "Subject"


DEFAULT_FIELDS = RarityFields()

_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")
_NOT_NUMERIC = re.compile(r"[^\d.]")


def parse_year(raw: str) -> int:
    """Leading integer of `raw`, or 0 when there is none."""
    match = _LEADING_INT.match(raw or "")
    return int(match.group(1)) if match else 0


def parse_value(raw: str) -> float:
    """Monetary value with every non-digit, non-dot character removed; 0 if invalid."""
    cleaned = _NOT_NUMERIC.sub("", raw or "")
    try:
        return float(cleaned)
    except ValueError:
        return 0.0


def year_points(year: int) -> int:
    if year < 1900:
        return 3
    if year < 1950:
        return 2
    if year < 2000:
        return 1
    return 0


def value_points(value: float) -> int:
    if value > 30:
        return 3
    if value > 20:
        return 2
    if value > 10:
        return 1
    return 0


def grading_points(grading: str) -> int:
    """Points for a Mint State (MS) or Proof (PF) grade; other grades score 0."""
    grade = (grading or "").upper()
    if "MS" not in grade and "PF" not in grade:
        return 0
    if "70" in grade or "69" in grade:
        return 3
    if "68" in grade or "67" in grade:
        return 2
    if "66" in grade or "65" in grade:
        return 1
    return 0


def score(record: Record, fields: RarityFields = DEFAULT_FIELDS) -> int:
    return (
        year_points(parse_year(record.lookup(fields.year)))
        + value_points(parse_value(record.lookup(fields.value)))
        + grading_points(record.lookup(fields.grading))
    )


def tier_for_score(total: int) -> RarityTier:
    if total >= 6:
        return RarityTier.ULTRA_RARE
    if total >= 4:
        return RarityTier.RARE
    if total >= 2:
        return RarityTier.UNCOMMON
    return RarityTier.COMMON


def classify(record: Record, fields: RarityFields = DEFAULT_FIELDS) -> RarityTier:
    """Map a record to its rarity tier."""
    return tier_for_score(score(record, fields))
