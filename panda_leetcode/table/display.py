"""Numeric coercion and label buckets for frequency, acceptance rate and difficulty."""

from __future__ import annotations

import math
import re

DIFFICULTY_RANK = {"easy": 1, "medium": 2, "hard": 3}
UNRANKED_DIFFICULTY = len(DIFFICULTY_RANK) + 1

TOPIC_PREVIEW_LIMIT = 4

_LEADING_NUMBER = re.compile(r"^\s*([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)")

_FREQUENCY_LABELS = ((70, "Very High"), (50, "High"), (30, "Medium"), (10, "Low"))
_ACCEPTANCE_LABELS = ((70, "Excellent"), (50, "Good"), (30, "Average"), (15, "Low"))


def parse_number(value: str | None) -> float:
    """Read the leading decimal number of a string; 0.0 when there is none."""
    if not value:
        return 0.0
    match = _LEADING_NUMBER.match(value)
    if not match:
        return 0.0
    number = float(match.group(1))
    return number if math.isfinite(number) else 0.0


def difficulty_rank(difficulty: str) -> int:
    """Easy < Medium < Hard, case-insensitively; anything else sorts after Hard."""
    return DIFFICULTY_RANK.get(difficulty.strip().lower(), UNRANKED_DIFFICULTY)


def frequency_percent(frequency: str | None) -> float:
    freq = parse_number(frequency)
    if 0 < freq <= 1:
        freq *= 100
    return freq


def format_frequency(frequency: str | None) -> str:
    return f"{frequency_percent(frequency):.1f}%"


def frequency_label(frequency: str | None) -> str:
    return _bucket(frequency_percent(frequency), _FREQUENCY_LABELS)


def acceptance_value(acceptance_rate: str | None) -> float:
    return parse_number((acceptance_rate or "").replace("%", ""))


def acceptance_percent(acceptance_rate: str | None) -> float:
    # A bare fraction such as "0.52" reads as 52%.
    rate = acceptance_value(acceptance_rate)
    return rate if rate > 1 else rate * 100


def acceptance_label(acceptance_rate: str | None) -> str:
    return _bucket(acceptance_percent(acceptance_rate), _ACCEPTANCE_LABELS)


def topic_preview(topics: list[str], limit: int = TOPIC_PREVIEW_LIMIT) -> tuple[list[str], int]:
    return topics[:limit], max(len(topics) - limit, 0)


def _bucket(value: float, thresholds: tuple[tuple[int, str], ...]) -> str:
    for floor, label in thresholds:
        if value >= floor:
            return label
    return "Very Low"
