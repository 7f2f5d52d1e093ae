"""Problem set endpoints — raw records from upstream, and the table view over a fetched set."""

import logging

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from panda_leetcode.config import settings
from panda_leetcode.routers.companies import JSON_UTF8
from panda_leetcode.routers.dependencies import get_fetcher
from panda_leetcode.table.engine import build_view
from panda_leetcode.table.models import TableRequest
from panda_leetcode.upstream.problem_sets import ProblemSetFetcher

router = APIRouter(prefix="/api", tags=["problems"])
logger = logging.getLogger("panda_leetcode.api")


@router.get("/getProblems/{company}/{time}")
async def get_problems(
    company: str,
    time: str,
    fetcher: ProblemSetFetcher = Depends(get_fetcher),
):
    records = await fetcher.fetch(company, time)
    return JSONResponse(content=[record.to_row() for record in records], media_type=JSON_UTF8)


@router.post("/table")
async def build_table(request: TableRequest):
    """Search, facet-filter, sort and paginate a record set already fetched by the caller.

    Never contacts the upstream; the page posts the rows it got from
    ``/api/getProblems`` together with each state change.
    """
    view = build_view(request.records, request.state, page_size=settings.page_size)
    logger.debug(
        "Table view page=%d/%d rows=%d of %d",
        view.page, view.total_pages, len(view.rows), view.filtered_count,
    )
    return JSONResponse(content=view.model_dump(mode="json"), media_type=JSON_UTF8)
