"""
Exception handlers.

Maps the application exception hierarchy to JSON error bodies of the form
{"error": message}.

Dependencies: fastapi
System role: HTTP error translation
"""

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from portfolio_rag.core.exceptions import PortfolioRAGException, UpstreamError

logger = logging.getLogger(__name__)


async def handle_portfolio_exception(request: Request, exc: PortfolioRAGException) -> JSONResponse:
    if isinstance(exc, UpstreamError):
        logger.error(f"{request.method} {request.url.path} - {exc}")
    else:
        logger.warning(f"{request.method} {request.url.path} - {exc.status_code} {exc.message}")
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})


async def handle_request_validation(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = exc.errors()
    if errors:
        first = errors[0]
        location = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
        message = f"Invalid request: {location} {first.get('msg', '')}".strip()
    else:
        message = "Invalid request"
    return JSONResponse(status_code=400, content={"error": message})


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(PortfolioRAGException, handle_portfolio_exception)
    app.add_exception_handler(RequestValidationError, handle_request_validation)
