"""Problem table engine — filter, sort and paginate a fetched record set.

Every function here is pure: the source records are never mutated and the
same inputs always produce the same view. State changes go through the
``with_*`` / ``toggle_sort`` / ``clear_filters`` helpers, which return a new
TableState.
"""

from __future__ import annotations

import math
from typing import Callable, Sequence

from panda_leetcode.ingestion.models import ProblemRecord
from panda_leetcode.table import display
from panda_leetcode.table.models import (
    ALL,
    Facets,
    ProblemRow,
    SortDirection,
    SortField,
    SortLink,
    TableState,
    TableView,
)

DEFAULT_PAGE_SIZE = 20
PAGE_WINDOW = 5

SORTABLE_FIELDS = [field for field in SortField if field is not SortField.NONE]


# ── Filtering ──────────────────────────────────────────────────────


def matches(record: ProblemRecord, state: TableState) -> bool:
    term = state.search.lower()
    matches_search = (
        not term
        or term in record.title.lower()
        or any(term in topic.lower() for topic in record.topics)
    )
    matches_difficulty = state.difficulty == ALL or record.difficulty == state.difficulty
    matches_topic = state.topic == ALL or state.topic in record.topics
    return matches_search and matches_difficulty and matches_topic


def filter_records(records: Sequence[ProblemRecord], state: TableState) -> list[ProblemRecord]:
    return [record for record in records if matches(record, state)]


# ── Sorting ────────────────────────────────────────────────────────


def _text_key(column: str) -> Callable[[ProblemRecord], str]:
    def key(record: ProblemRecord) -> str:
        value = record.field_value(column)
        return str(value).lower()

    return key


_SORT_KEYS: dict[SortField, Callable[[ProblemRecord], object]] = {
    SortField.DIFFICULTY: lambda r: display.difficulty_rank(r.difficulty),
    SortField.FREQUENCY: lambda r: display.frequency_percent(r.frequency),
    SortField.ACCEPTANCE_RATE: lambda r: display.acceptance_value(r.acceptance_rate),
    SortField.TOPICS: lambda r: ", ".join(r.topics).lower(),
    SortField.TITLE: _text_key("Title"),
    SortField.LINK: _text_key("Link"),
}


def sort_records(
    records: Sequence[ProblemRecord],
    field: SortField,
    direction: SortDirection = SortDirection.ASC,
) -> list[ProblemRecord]:
    """Stable sort by a column; SortField.NONE keeps upstream order."""
    if field is SortField.NONE:
        return list(records)
    return sorted(records, key=_SORT_KEYS[field], reverse=direction is SortDirection.DESC)


# ── Pagination ─────────────────────────────────────────────────────


def page_count(total: int, page_size: int = DEFAULT_PAGE_SIZE) -> int:
    return math.ceil(total / page_size)


def clamp_page(page: int, total_pages: int) -> int:
    return min(max(page, 1), max(total_pages, 1))


def paginate(
    records: Sequence[ProblemRecord], page: int, page_size: int = DEFAULT_PAGE_SIZE
) -> list[ProblemRecord]:
    start = (page - 1) * page_size
    return list(records[start:start + page_size])


def page_window(current: int, total_pages: int, size: int = PAGE_WINDOW) -> list[int]:
    """Page numbers to offer as buttons, centred on ``current`` except near either end."""
    if total_pages <= size:
        return list(range(1, total_pages + 1))
    half = size // 2
    first = min(max(current - half, 1), total_pages - size + 1)
    return list(range(first, first + size))


# ── State transitions ──────────────────────────────────────────────


def with_search(state: TableState, search: str) -> TableState:
    return state.model_copy(update={"search": search, "page": 1})


def with_difficulty(state: TableState, difficulty: str) -> TableState:
    return state.model_copy(update={"difficulty": difficulty, "page": 1})


def with_topic(state: TableState, topic: str) -> TableState:
    return state.model_copy(update={"topic": topic, "page": 1})


def with_page(state: TableState, page: int) -> TableState:
    return state.model_copy(update={"page": page})


def next_sort(state: TableState, field: SortField) -> tuple[SortField, SortDirection]:
    """asc -> desc -> none -> asc on the same column; a new column starts at asc."""
    if field is not state.sort_field:
        return field, SortDirection.ASC
    if state.sort_direction is SortDirection.ASC:
        return field, SortDirection.DESC
    return SortField.NONE, SortDirection.ASC


def toggle_sort(state: TableState, field: SortField) -> TableState:
    sort_field, sort_direction = next_sort(state, field)
    return state.model_copy(update={"sort_field": sort_field, "sort_direction": sort_direction})


def clear_filters(state: TableState) -> TableState:
    return state.model_copy(
        update={"search": "", "difficulty": ALL, "topic": ALL, "sort_field": SortField.NONE, "page": 1}
    )


def has_active_filters(state: TableState) -> bool:
    return bool(
        state.search
        or state.difficulty != ALL
        or state.topic != ALL
        or state.sort_field is not SortField.NONE
    )


# ── View ───────────────────────────────────────────────────────────


def sort_links(state: TableState) -> dict[str, SortLink]:
    links = {}
    for field in SORTABLE_FIELDS:
        sort_field, direction = next_sort(state, field)
        links[field.value] = SortLink(field=sort_field, direction=direction)
    return links


def facets(records: Sequence[ProblemRecord]) -> Facets:
    difficulties = list(dict.fromkeys(record.difficulty for record in records))
    topics = sorted({topic for record in records for topic in record.topics})
    return Facets(difficulties=difficulties, topics=topics)


def to_row(record: ProblemRecord) -> ProblemRow:
    visible, hidden = display.topic_preview(record.topics)
    return ProblemRow(
        record=record.to_row(),
        frequency_percent=display.frequency_percent(record.frequency),
        frequency_display=display.format_frequency(record.frequency),
        frequency_label=display.frequency_label(record.frequency),
        acceptance_label=display.acceptance_label(record.acceptance_rate),
        visible_topics=visible,
        hidden_topic_count=hidden,
    )


def build_view(
    records: Sequence[ProblemRecord],
    state: TableState,
    page_size: int = DEFAULT_PAGE_SIZE,
) -> TableView:
    if page_size < 1:
        raise ValueError(f"page_size must be positive, got {page_size}")
    filtered = sort_records(filter_records(records, state), state.sort_field, state.sort_direction)
    total_pages = page_count(len(filtered), page_size)
    page = clamp_page(state.page, total_pages)

    return TableView(
        state=with_page(state, page),
        rows=[to_row(record) for record in paginate(filtered, page, page_size)],
        total_records=len(records),
        filtered_count=len(filtered),
        page=page,
        page_size=page_size,
        total_pages=total_pages,
        page_numbers=page_window(page, total_pages),
        has_previous=page > 1,
        has_next=page < total_pages,
        has_active_filters=has_active_filters(state),
        facets=facets(records),
        sort_links=sort_links(state),
    )
