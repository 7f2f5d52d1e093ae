"""Shared fixtures: canned upstream responses and record builders."""

import json

import httpx
import pytest
import pytest_asyncio

from panda_leetcode.ingestion.models import ProblemRecord
from panda_leetcode.upstream.directory import CompanyDirectory
from panda_leetcode.upstream.problem_sets import ProblemSetFetcher

SAMPLE_CSV = (
    "Difficulty,Title,Frequency,Acceptance Rate,Link,Topics\n"
    'EASY,Two Sum,100.0,0.5573,https://leetcode.com/problems/two-sum,"Array, Hash Table"\n'
    "\n"
    'MEDIUM,LRU Cache,0.8,45.2%,https://leetcode.com/problems/lru-cache,"Hash Table; Design; Linked List"\n'
)

DIRECTORY_LISTING = [
    {"name": "Amazon", "type": "dir", "path": "Amazon"},
    {"name": "Google", "type": "dir", "path": "Google"},
    {"name": "README.md", "type": "file", "path": "README.md"},
    {"name": "Jane Street", "type": "dir", "path": "Jane Street"},
]


class UpstreamStub:
    """Routes MockTransport requests by host and records what was requested."""

    def __init__(self, listing=None, listing_status=200, csv_text=SAMPLE_CSV, csv_status=200):
        self.listing = DIRECTORY_LISTING if listing is None else listing
        self.listing_status = listing_status
        self.csv_text = csv_text
        self.csv_status = csv_status
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if request.url.host == "api.github.com":
            return httpx.Response(self.listing_status, content=json.dumps(self.listing))
        return httpx.Response(self.csv_status, text=self.csv_text)

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self)

    def count(self, host: str) -> int:
        return sum(1 for r in self.requests if r.url.host == host)


@pytest.fixture
def upstream():
    return UpstreamStub()


@pytest_asyncio.fixture
async def clients():
    """Registers upstream clients built in a test and closes them afterwards."""
    opened = []

    def track(client):
        opened.append(client)
        return client

    yield track
    for client in opened:
        await client.close()


@pytest_asyncio.fixture
async def directory(upstream, clients):
    return clients(CompanyDirectory(transport=upstream.transport))


@pytest_asyncio.fixture
async def fetcher(upstream, directory, clients):
    return clients(ProblemSetFetcher(directory, transport=upstream.transport))


def make_record(title, difficulty="Easy", frequency="", acceptance="", topics=(), **extra):
    return ProblemRecord.model_validate(
        {
            "Title": title,
            "Difficulty": difficulty,
            "Frequency": frequency,
            "Acceptance Rate": acceptance,
            "Link": f"https://leetcode.com/problems/{title.lower().replace(' ', '-')}",
            "Topics": list(topics),
            **extra,
        }
    )
