"""Company directory — lists company folders at the root of the upstream repository."""

from __future__ import annotations

import logging
import time

import httpx
from opentelemetry import trace
from pydantic import TypeAdapter, ValidationError

from panda_leetcode.config import settings
from panda_leetcode.ingestion.models import ContentEntry
from panda_leetcode.telemetry.metrics import (
    directory_cache_total,
    upstream_request_duration,
    upstream_requests_total,
)

logger = logging.getLogger("panda_leetcode.upstream")
tracer = trace.get_tracer(__name__)

_LISTING = TypeAdapter(list[ContentEntry])


class CompanyDirectory:
    """Resolves the set of valid company names.

    A successful listing is reused for ``revalidate_seconds``. Failed refreshes
    are never cached: the last successful listing is served instead, or an
    empty list when there has been none.
    """

    def __init__(
        self,
        transport: httpx.AsyncBaseTransport | None = None,
        revalidate_seconds: int | None = None,
    ) -> None:
        self._http = httpx.AsyncClient(
            base_url=settings.github_api_url,
            headers={
                "Accept": "application/vnd.github.v3+json",
                "User-Agent": settings.user_agent,
            },
            timeout=settings.http_timeout_seconds,
            transport=transport,
        )
        self._revalidate_seconds = (
            settings.directory_revalidate_seconds if revalidate_seconds is None else revalidate_seconds
        )
        self._companies: list[str] | None = None
        self._fetched_at = 0.0

    async def close(self) -> None:
        await self._http.aclose()

    def _is_fresh(self) -> bool:
        return (
            self._companies is not None
            and time.monotonic() - self._fetched_at < self._revalidate_seconds
        )

    def cache_status(self) -> dict:
        """Snapshot of the cached listing; never triggers a fetch."""
        if self._companies is None:
            return {"cached_companies": 0, "fresh": False, "age_seconds": None}
        return {
            "cached_companies": len(self._companies),
            "fresh": self._is_fresh(),
            "age_seconds": round(time.monotonic() - self._fetched_at, 2),
        }

    async def list_companies(self) -> list[str]:
        """Return company names in upstream order."""
        if self._is_fresh():
            directory_cache_total.labels(result="hit").inc()
            return list(self._companies)

        directory_cache_total.labels(result="miss").inc()
        companies = await self._fetch()
        if companies is not None:
            self._companies = companies
            self._fetched_at = time.monotonic()
            logger.info("Company directory refreshed: %d companies", len(companies))
            return list(companies)

        if self._companies is not None:
            logger.warning("Serving stale company directory (%d companies)", len(self._companies))
            return list(self._companies)
        return []

    async def contains(self, company: str) -> bool:
        return company in await self.list_companies()

    async def _fetch(self) -> list[str] | None:
        """One GET of the repository root listing; None on any failure."""
        path = f"/repos/{settings.upstream_repo}/contents/"
        with tracer.start_as_current_span("directory.refresh") as span:
            span.set_attribute("upstream.repo", settings.upstream_repo)
            start = time.perf_counter()
            try:
                resp = await self._http.get(path)
            except httpx.HTTPError as exc:
                upstream_requests_total.labels(source="directory", outcome="error").inc()
                logger.warning("Company directory request failed: %s", exc)
                return None
            finally:
                upstream_request_duration.labels(source="directory").observe(time.perf_counter() - start)

            span.set_attribute("http.status_code", resp.status_code)
            if not resp.is_success:
                upstream_requests_total.labels(source="directory", outcome="error").inc()
                logger.warning("Company directory returned HTTP %d", resp.status_code)
                return None

            try:
                entries = _LISTING.validate_json(resp.content)
            except ValidationError:
                upstream_requests_total.labels(source="directory", outcome="error").inc()
                logger.warning("Company directory listing was not a list of content entries")
                return None

            upstream_requests_total.labels(source="directory", outcome="success").inc()
            return [entry.name for entry in entries if entry.type == "dir"]
