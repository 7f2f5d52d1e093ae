"""Request-scoped access to the upstream clients built at startup."""

from starlette.requests import Request

from panda_leetcode.upstream.directory import CompanyDirectory
from panda_leetcode.upstream.problem_sets import ProblemSetFetcher


def get_directory(request: Request) -> CompanyDirectory:
    return request.app.state.directory


def get_fetcher(request: Request) -> ProblemSetFetcher:
    return request.app.state.fetcher
