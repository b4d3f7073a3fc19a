"""Render any unhandled error as the ``{status, message}`` envelope."""

import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from watchboard.errors import WatchboardError
from watchboard.schemas import ErrorResponse
from watchboard.services.error_classifier import classify, public_message

logger = logging.getLogger(__name__)


async def handle_error(request: Request, exc: Exception) -> JSONResponse:
    status = classify(exc)
    if status >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc}", exc_info=exc)
    else:
        logger.warning(f"{request.method} {request.url.path} -> {status}: {exc}")

    body = ErrorResponse(status=status, message=public_message(exc, status))
    return JSONResponse(status_code=status, content=body.model_dump())


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(WatchboardError, handle_error)
    app.add_exception_handler(Exception, handle_error)
