"""Failure kinds for problem-set lookups, each bound to the HTTP status it maps to."""

from __future__ import annotations


class ProblemSetError(Exception):
    """Base class for failures surfaced by the problem-set endpoints."""

    status_code: int = 500
    detail: str = "Problem set lookup failed"

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.detail)


class InvalidCompany(ProblemSetError):
    status_code = 400
    detail = "Invalid company"

    def __init__(self, company: str) -> None:
        self.company = company
        super().__init__(f"Unknown company: {company!r}")


class InvalidTimeWindow(ProblemSetError):
    status_code = 400
    detail = "Invalid time"

    def __init__(self, time_window: str) -> None:
        self.time_window = time_window
        super().__init__(f"Unknown time window: {time_window!r}")


class UpstreamUnavailable(ProblemSetError):
    status_code = 502
    detail = "Failed to fetch data from upstream"


class MalformedUpstreamData(ProblemSetError):
    status_code = 500
    detail = "Failed to parse CSV"
