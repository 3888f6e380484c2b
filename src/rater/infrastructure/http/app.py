"""HTTP adapter: the rate request/poll endpoints on FastAPI.

  POST /rate            -> 202 {"request_id"}
  GET  /rate/{rate_id}  -> 200 {"status": {done, total, complete}, "rates"}
  GET  /health          -> liveness
  GET  /                -> service description

Domain errors map to 400 (invalid input or a body that is not JSON), 404
(unknown job or endpoint) and 500 (computation unavailable). Error bodies
never carry internal details.
"""

from __future__ import annotations

import time
from datetime import datetime, timezone
from typing import Any

from fastapi import Body, FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from loguru import logger

from rater.application.job_store import JobStore
from rater.application.serialization import job_view_to_raw
from rater.domain.exceptions import (
    ComputationUnavailableError,
    InvalidInputError,
    JobNotFoundError,
)

SERVICE_NAME = "Shipping Rate Quoting Service"
SERVICE_VERSION = "1.0.0"
ENDPOINTS = ["GET /", "GET /health", "POST /rate", "GET /rate/{id}"]


def _unavailable_body() -> dict:
    return {
        "message": ComputationUnavailableError.MESSAGE,
        "error": ComputationUnavailableError.HINT,
    }


def create_app(store: JobStore) -> FastAPI:
    app = FastAPI(title=SERVICE_NAME, version=SERVICE_VERSION)
    started = time.monotonic()

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        logger.info("{} {}", request.method, request.url.path)
        return await call_next(request)

    # --- Error mapping --------------------------------------------------------

    @app.exception_handler(InvalidInputError)
    async def invalid_input(request: Request, exc: InvalidInputError) -> JSONResponse:
        return JSONResponse(status_code=400, content={"message": str(exc)})

    @app.exception_handler(RequestValidationError)
    async def malformed_body(request: Request, exc: RequestValidationError) -> JSONResponse:
        return JSONResponse(
            status_code=400, content={"message": "Rate request body must be valid JSON"}
        )

    @app.exception_handler(JobNotFoundError)
    async def not_found(request: Request, exc: JobNotFoundError) -> JSONResponse:
        return JSONResponse(status_code=404, content={"message": "Rate request not found"})

    @app.exception_handler(404)
    async def unknown_endpoint(request: Request, exc: Exception) -> JSONResponse:
        return JSONResponse(
            status_code=404,
            content={"message": "Endpoint not found", "available_endpoints": ENDPOINTS},
        )

    @app.exception_handler(ComputationUnavailableError)
    async def unavailable(request: Request, exc: ComputationUnavailableError) -> JSONResponse:
        return JSONResponse(status_code=500, content=_unavailable_body())

    @app.exception_handler(Exception)
    async def unexpected(request: Request, exc: Exception) -> JSONResponse:
        logger.opt(exception=exc).error("Unhandled error on {} {}", request.method, request.url.path)
        return JSONResponse(status_code=500, content=_unavailable_body())

    # --- Routes ---------------------------------------------------------------

    @app.post("/rate", status_code=202)
    def submit_rate(payload: Any = Body(None)) -> dict:
        logger.debug("Rate request body: {}", payload)
        return {"request_id": store.submit(payload)}

    @app.get("/rate/{rate_id}")
    def poll_rate(rate_id: str) -> dict:
        return job_view_to_raw(store.poll(rate_id))

    @app.get("/health")
    def health() -> dict:
        return {
            "status": "healthy",
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "version": SERVICE_VERSION,
            "uptime": round(time.monotonic() - started, 3),
        }

    @app.get("/")
    def root() -> dict:
        return {
            "name": SERVICE_NAME,
            "version": SERVICE_VERSION,
            "description": "Quotes parcel and LTL shipments by polling",
            "available_endpoints": ENDPOINTS,
        }

    return app
