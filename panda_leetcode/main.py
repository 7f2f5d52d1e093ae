"""Panda LeetCode — FastAPI application entry point."""

from __future__ import annotations

import logging
import os
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import FileResponse, PlainTextResponse
from fastapi.staticfiles import StaticFiles
from opentelemetry.instrumentation.fastapi import FastAPIInstrumentor

from panda_leetcode.config import settings
from panda_leetcode.errors import ProblemSetError
from panda_leetcode.middleware import MetricsMiddleware
from panda_leetcode.routers import companies, problems, service
from panda_leetcode.telemetry.logging import setup_logging
from panda_leetcode.telemetry.metrics import problem_set_errors_total
from panda_leetcode.telemetry.tracing import SERVICE_VERSION, setup_tracing
from panda_leetcode.upstream.directory import CompanyDirectory
from panda_leetcode.upstream.problem_sets import ProblemSetFetcher

tracer_provider = setup_tracing(
    otlp_endpoint=settings.otlp_endpoint,
    environment=settings.environment,
    sample_ratio=settings.trace_sample_ratio,
)
logger = setup_logging(
    otlp_endpoint=settings.otlp_endpoint,
    level=settings.log_level,
    environment=settings.environment,
)


@asynccontextmanager
async def lifespan(app: FastAPI):
    directory = CompanyDirectory()
    fetcher = ProblemSetFetcher(directory)
    app.state.directory = directory
    app.state.fetcher = fetcher
    logger.info("Upstream clients ready for %s", settings.upstream_repo)

    yield

    await fetcher.close()
    await directory.close()
    logger.info("Upstream clients closed")
    tracer_provider.force_flush()


async def problem_set_error_handler(request: Request, exc: ProblemSetError):
    problem_set_errors_total.labels(error_type=type(exc).__name__).inc()
    logger.log(
        logging.WARNING if exc.status_code < 500 else logging.ERROR,
        "%s on %s: %s", type(exc).__name__, request.url.path, exc,
    )
    return PlainTextResponse(exc.detail, status_code=exc.status_code)


app = FastAPI(
    title="Panda LeetCode",
    description="Company-wise LeetCode interview problems, fetched and tabulated",
    version=SERVICE_VERSION,
    lifespan=lifespan,
)

app.add_middleware(MetricsMiddleware)
app.add_exception_handler(ProblemSetError, problem_set_error_handler)

app.include_router(service.router)
app.include_router(companies.router)
app.include_router(problems.router)

STATIC_DIR = os.path.join(os.path.dirname(__file__), "static")
app.mount("/static", StaticFiles(directory=STATIC_DIR), name="static")


@app.get("/", include_in_schema=False)
async def root():
    return FileResponse(os.path.join(STATIC_DIR, "index.html"))


FastAPIInstrumentor.instrument_app(app)

logger.info("Panda LeetCode started")


def run() -> None:
    import uvicorn

    uvicorn.run("panda_leetcode.main:app", host=settings.host, port=settings.port)
