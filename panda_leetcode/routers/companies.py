"""Company list endpoint."""

import logging

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from panda_leetcode.routers.dependencies import get_directory
from panda_leetcode.upstream.directory import CompanyDirectory

router = APIRouter(prefix="/api", tags=["companies"])
logger = logging.getLogger("panda_leetcode.api")

JSON_UTF8 = "application/json; charset=utf-8"


@router.get("/getCompanies")
async def get_companies(directory: CompanyDirectory = Depends(get_directory)):
    """Company names in upstream order; an empty list when the upstream is unavailable."""
    companies = await directory.list_companies()
    if not companies:
        logger.warning("Company list is empty")
    return JSONResponse(content=companies, media_type=JSON_UTF8)
