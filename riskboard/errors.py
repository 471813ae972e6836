"""Error taxonomy and the JSON handlers that expose it over HTTP.

Every client-visible failure is rendered as ``{"error": "<message>"}``:

* ``ValidationError`` -> 400, bad or missing input.
* ``NotFoundError``   -> 404, referenced risk id does not exist.
* ``StorageError``    -> 500, persistence failed; the message is generic and
  the underlying exception is only logged.
"""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

logger = logging.getLogger("riskboard.errors")


class RiskBoardError(Exception):
    status_code = 500

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ValidationError(RiskBoardError):
    status_code = 400


class NotFoundError(RiskBoardError):
    status_code = 404


class StorageError(RiskBoardError):
    status_code = 500


def _describe_request_error(exc: RequestValidationError) -> str:
    errors = exc.errors()
    if not errors:
        return "Invalid request"
    first = errors[0]
    location = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
    message = first.get("msg", "Invalid value")
    return f"{location}: {message}" if location else message


async def _handle_riskboard_error(request: Request, exc: RiskBoardError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error("request failed: %s", exc.message, extra={"path": request.url.path})
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})


async def _handle_request_validation(request: Request, exc: RequestValidationError) -> JSONResponse:
    return JSONResponse(status_code=400, content={"error": _describe_request_error(exc)})


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(RiskBoardError, _handle_riskboard_error)
    app.add_exception_handler(RequestValidationError, _handle_request_validation)
