"""View state and derived view models for the problem table."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict

from panda_leetcode.ingestion.models import ProblemRecord

ALL = "all"


class SortField(str, Enum):
    NONE = "none"
    DIFFICULTY = "Difficulty"
    TITLE = "Title"
    FREQUENCY = "Frequency"
    ACCEPTANCE_RATE = "Acceptance Rate"
    LINK = "Link"
    TOPICS = "Topics"


class SortDirection(str, Enum):
    ASC = "asc"
    DESC = "desc"


class TableState(BaseModel):
    """Everything the user has selected on the table; replaced, never mutated."""

    model_config = ConfigDict(frozen=True)

    search: str = ""
    difficulty: str = ALL
    topic: str = ALL
    sort_field: SortField = SortField.NONE
    sort_direction: SortDirection = SortDirection.ASC
    page: int = 1


class ProblemRow(BaseModel):
    record: dict
    frequency_percent: float
    frequency_display: str
    frequency_label: str
    acceptance_label: str
    visible_topics: list[str]
    hidden_topic_count: int


class SortLink(BaseModel):
    """What selecting a column header would change the sort to."""

    field: SortField
    direction: SortDirection


class Facets(BaseModel):
    difficulties: list[str]
    topics: list[str]


class TableView(BaseModel):
    state: TableState
    rows: list[ProblemRow]
    total_records: int
    filtered_count: int
    page: int
    page_size: int
    total_pages: int
    page_numbers: list[int]
    has_previous: bool
    has_next: bool
    has_active_filters: bool
    facets: Facets
    sort_links: dict[str, SortLink]


class TableRequest(BaseModel):
    """A record set fetched once by the caller, plus the table state to apply to it."""

    records: list[ProblemRecord]
    state: TableState = TableState()
