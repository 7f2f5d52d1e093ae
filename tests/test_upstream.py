"""Tests for the company directory and the problem set fetcher against a mocked upstream."""

import httpx
import pytest

from panda_leetcode.errors import (
    InvalidCompany,
    InvalidTimeWindow,
    MalformedUpstreamData,
    UpstreamUnavailable,
)
from panda_leetcode.ingestion.models import TimeWindow
from panda_leetcode.upstream.directory import CompanyDirectory
from panda_leetcode.upstream.problem_sets import (
    ProblemSetFetcher,
    encode_path_segment,
    problem_set_path,
)

from conftest import UpstreamStub


class TestCompanyDirectory:
    @pytest.mark.asyncio
    async def test_only_directories_in_upstream_order(self, directory):
        assert await directory.list_companies() == ["Amazon", "Google", "Jane Street"]

    @pytest.mark.asyncio
    async def test_sends_github_headers(self, upstream, directory):
        await directory.list_companies()

        request = upstream.requests[0]
        assert request.url.path == "/repos/liquidslr/leetcode-company-wise-problems/contents/"
        assert request.headers["Accept"] == "application/vnd.github.v3+json"
        assert request.headers["User-Agent"] == "company-leetcode-app"

    @pytest.mark.asyncio
    async def test_non_2xx_gives_empty_list(self, clients):
        upstream = UpstreamStub(listing_status=403, listing={"message": "rate limited"})
        directory = clients(CompanyDirectory(transport=upstream.transport))

        assert await directory.list_companies() == []

    @pytest.mark.asyncio
    async def test_transport_error_gives_empty_list(self, clients):
        def refuse(request):
            raise httpx.ConnectError("connection refused", request=request)

        directory = clients(CompanyDirectory(transport=httpx.MockTransport(refuse)))

        assert await directory.list_companies() == []

    @pytest.mark.asyncio
    async def test_unexpected_payload_gives_empty_list(self, clients):
        upstream = UpstreamStub(listing={"not": "a list"})
        directory = clients(CompanyDirectory(transport=upstream.transport))

        assert await directory.list_companies() == []

    @pytest.mark.asyncio
    async def test_listing_cached_within_window(self, upstream, directory):
        await directory.list_companies()
        await directory.list_companies()

        assert upstream.count("api.github.com") == 1

    @pytest.mark.asyncio
    async def test_listing_refetched_after_window(self, upstream, clients):
        directory = clients(CompanyDirectory(transport=upstream.transport, revalidate_seconds=0))

        await directory.list_companies()
        await directory.list_companies()

        assert upstream.count("api.github.com") == 2

    @pytest.mark.asyncio
    async def test_failed_refresh_serves_last_listing(self, upstream, clients):
        directory = clients(CompanyDirectory(transport=upstream.transport, revalidate_seconds=0))
        first = await directory.list_companies()

        upstream.listing_status = 500
        assert await directory.list_companies() == first

    @pytest.mark.asyncio
    async def test_failures_are_not_cached(self, upstream, clients):
        upstream.listing_status = 500
        directory = clients(CompanyDirectory(transport=upstream.transport))
        assert await directory.list_companies() == []

        upstream.listing_status = 200
        assert await directory.list_companies() == ["Amazon", "Google", "Jane Street"]

    @pytest.mark.asyncio
    async def test_close_releases_http_client(self, upstream):
        directory = CompanyDirectory(transport=upstream.transport)
        fetcher = ProblemSetFetcher(directory, transport=upstream.transport)

        await fetcher.close()
        await directory.close()

        assert directory._http.is_closed
        assert fetcher._http.is_closed


class TestProblemSetPath:
    def test_encodes_like_encode_uri_component(self):
        assert encode_path_segment("Jane Street") == "Jane%20Street"
        assert encode_path_segment("a/b&c") == "a%2Fb%26c"
        assert encode_path_segment("it's(ok)!*") == "it's(ok)!*"

    def test_every_window_has_its_file(self):
        assert {w.value: w.filename for w in TimeWindow} == {
            "Thirty Days": "1. Thirty Days.csv",
            "Three Months": "2. Three Months.csv",
            "Six Months": "3. Six Months.csv",
            "More Than Six Months": "4. More Than Six Months.csv",
            "All": "5. All.csv",
        }

    def test_path_template(self):
        path = problem_set_path("Jane Street", TimeWindow.MORE_THAN_SIX_MONTHS)

        assert path == (
            "/liquidslr/leetcode-company-wise-problems/main/"
            "Jane%20Street/4.%20More%20Than%20Six%20Months.csv"
        )


class TestProblemSetFetcher:
    @pytest.mark.asyncio
    async def test_fetch_parses_records(self, upstream, fetcher):
        records = await fetcher.fetch("Amazon", "All")

        assert [r.title for r in records] == ["Two Sum", "LRU Cache"]
        assert records[0].topics == ["Array", "Hash Table"]

        csv_request = next(r for r in upstream.requests if r.url.host == "raw.githubusercontent.com")
        assert csv_request.url.raw_path.decode() == (
            "/liquidslr/leetcode-company-wise-problems/main/Amazon/5.%20All.csv"
        )

    @pytest.mark.asyncio
    async def test_unknown_company_rejected_before_fetch(self, upstream, fetcher):
        with pytest.raises(InvalidCompany):
            await fetcher.fetch("Initech", "All")

        assert upstream.count("raw.githubusercontent.com") == 0

    @pytest.mark.asyncio
    async def test_company_checked_before_time_window(self, fetcher):
        with pytest.raises(InvalidCompany):
            await fetcher.fetch("Initech", "Yesterday")

    @pytest.mark.asyncio
    @pytest.mark.parametrize("label", ["Yesterday", "all", "5. All.csv", ""])
    async def test_unknown_time_window_rejected(self, upstream, fetcher, label):
        with pytest.raises(InvalidTimeWindow):
            await fetcher.fetch("Amazon", label)

        assert upstream.count("raw.githubusercontent.com") == 0

    @pytest.mark.asyncio
    async def test_empty_directory_rejects_every_company(self, clients):
        upstream = UpstreamStub(listing_status=500)
        directory = clients(CompanyDirectory(transport=upstream.transport))
        fetcher = clients(ProblemSetFetcher(directory, transport=upstream.transport))

        with pytest.raises(InvalidCompany):
            await fetcher.fetch("Amazon", "All")

    @pytest.mark.asyncio
    async def test_upstream_non_2xx_is_unavailable(self, upstream, fetcher):
        upstream.csv_status = 404

        with pytest.raises(UpstreamUnavailable) as exc_info:
            await fetcher.fetch("Amazon", "Thirty Days")

        assert exc_info.value.status_code == 502

    @pytest.mark.asyncio
    async def test_transport_error_is_unavailable(self, upstream, clients):
        def route(request):
            if request.url.host == "api.github.com":
                return upstream(request)
            raise httpx.ReadTimeout("timed out", request=request)

        transport = httpx.MockTransport(route)
        directory = clients(CompanyDirectory(transport=transport))
        fetcher = clients(ProblemSetFetcher(directory, transport=transport))

        with pytest.raises(UpstreamUnavailable):
            await fetcher.fetch("Amazon", "All")

    @pytest.mark.asyncio
    async def test_malformed_csv(self, upstream, fetcher):
        upstream.csv_text = "Title,Difficulty\nTwo Sum,Easy,Array\n"

        with pytest.raises(MalformedUpstreamData) as exc_info:
            await fetcher.fetch("Amazon", "All")

        assert exc_info.value.status_code == 500
