"""Problem set fetcher — resolves company + time window to an upstream CSV and parses it."""

from __future__ import annotations

import logging
import time
from urllib.parse import quote

import httpx
from opentelemetry import trace

from panda_leetcode.config import settings
from panda_leetcode.errors import (
    InvalidCompany,
    InvalidTimeWindow,
    MalformedUpstreamData,
    UpstreamUnavailable,
)
from panda_leetcode.ingestion.models import ProblemRecord, TimeWindow
from panda_leetcode.ingestion.parser import parse_problem_csv
from panda_leetcode.telemetry.metrics import upstream_request_duration, upstream_requests_total
from panda_leetcode.upstream.directory import CompanyDirectory

logger = logging.getLogger("panda_leetcode.upstream")
tracer = trace.get_tracer(__name__)

# Characters JavaScript's encodeURIComponent leaves alone, besides alphanumerics and "-_.~".
_URI_COMPONENT_SAFE = "!*'()"


def encode_path_segment(value: str) -> str:
    return quote(value, safe=_URI_COMPONENT_SAFE)


def problem_set_path(company: str, window: TimeWindow) -> str:
    """Path of the CSV for a company and window, relative to the raw content host."""
    return (
        f"/{settings.upstream_repo}/{settings.upstream_branch}/"
        f"{encode_path_segment(company)}/{encode_path_segment(window.filename)}"
    )


class ProblemSetFetcher:
    def __init__(
        self,
        directory: CompanyDirectory,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._directory = directory
        self._http = httpx.AsyncClient(
            base_url=settings.raw_content_url,
            timeout=settings.http_timeout_seconds,
            transport=transport,
        )

    async def close(self) -> None:
        await self._http.aclose()

    async def fetch(self, company: str, time_window: str) -> list[ProblemRecord]:
        """Validate the request, download the CSV and parse it into records.

        The company is checked before the time window. Raises InvalidCompany,
        InvalidTimeWindow, UpstreamUnavailable or MalformedUpstreamData.
        """
        if not await self._directory.contains(company):
            raise InvalidCompany(company)

        window = TimeWindow.from_label(time_window)
        if window is None:
            raise InvalidTimeWindow(time_window)

        with tracer.start_as_current_span("problems.fetch") as span:
            span.set_attribute("problems.company", company)
            span.set_attribute("problems.time_window", window.value)

            text = await self._download(problem_set_path(company, window))
            try:
                records = parse_problem_csv(text)
            except MalformedUpstreamData:
                logger.error("Malformed CSV for company=%s window=%s", company, window.value)
                raise

            span.set_attribute("problems.count", len(records))
            logger.info(
                "Fetched %d problems for company=%s window=%s", len(records), company, window.value
            )
            return records

    async def _download(self, path: str) -> str:
        start = time.perf_counter()
        try:
            resp = await self._http.get(path)
        except httpx.HTTPError as exc:
            upstream_requests_total.labels(source="problem_set", outcome="error").inc()
            logger.warning("Problem set request failed: %s — %s", path, exc)
            raise UpstreamUnavailable(str(exc)) from exc
        finally:
            upstream_request_duration.labels(source="problem_set").observe(time.perf_counter() - start)

        if not resp.is_success:
            upstream_requests_total.labels(source="problem_set", outcome="error").inc()
            logger.warning("Problem set request returned HTTP %d: %s", resp.status_code, path)
            raise UpstreamUnavailable(f"Upstream returned HTTP {resp.status_code}")

        upstream_requests_total.labels(source="problem_set", outcome="success").inc()
        return resp.text
