"""Data models for the upstream problem data."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class TimeWindow(str, Enum):
    THIRTY_DAYS = "Thirty Days"
    THREE_MONTHS = "Three Months"
    SIX_MONTHS = "Six Months"
    MORE_THAN_SIX_MONTHS = "More Than Six Months"
    ALL = "All"

    @property
    def filename(self) -> str:
        return _TIME_WINDOW_FILES[self]

    @classmethod
    def from_label(cls, label: str) -> TimeWindow | None:
        """Return the window for an exact label, or None if it is not one of the five."""
        try:
            return cls(label)
        except ValueError:
            return None


_TIME_WINDOW_FILES = {
    TimeWindow.THIRTY_DAYS: "1. Thirty Days.csv",
    TimeWindow.THREE_MONTHS: "2. Three Months.csv",
    TimeWindow.SIX_MONTHS: "3. Six Months.csv",
    TimeWindow.MORE_THAN_SIX_MONTHS: "4. More Than Six Months.csv",
    TimeWindow.ALL: "5. All.csv",
}


class ContentEntry(BaseModel):
    """One item of a GitHub repository contents listing."""

    name: str
    type: str


class ProblemRecord(BaseModel):
    """A parsed CSV row with Topics normalized to a list.

    Columns other than the known ones are kept as extra fields and passed
    through unchanged.
    """

    model_config = ConfigDict(extra="allow", frozen=True)

    difficulty: str = Field(alias="Difficulty", default="")
    title: str = Field(alias="Title", default="")
    frequency: str = Field(alias="Frequency", default="")
    acceptance_rate: str = Field(alias="Acceptance Rate", default="")
    link: str = Field(alias="Link", default="")
    topics: list[str] = Field(alias="Topics", default_factory=list)

    def field_value(self, column: str) -> str | list[str]:
        """Look up a value by its CSV column name, known or extra."""
        for name, info in type(self).model_fields.items():
            if info.alias == column:
                return getattr(self, name)
        return (self.model_extra or {}).get(column, "")

    def to_row(self) -> dict:
        """The row as upstream sent it: only columns the CSV had, plus Topics."""
        return self.model_dump(by_alias=True, exclude_unset=True)
