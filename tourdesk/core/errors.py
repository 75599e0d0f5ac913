from __future__ import annotations

import logging
from typing import Any, Dict, Optional

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import BaseModel


logger = logging.getLogger(__name__)


class ErrorEnvelope(BaseModel):
    error: str
    details: Optional[Dict[str, Any]] = None


class AppError(Exception):
    def __init__(self, message: str, status_code: int = 400) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class NotFoundError(AppError):
    def __init__(self, message: str = "Resource not found") -> None:
        super().__init__(message=message, status_code=404)


class BadRequestError(AppError):
    def __init__(self, message: str = "Bad request") -> None:
        super().__init__(message=message, status_code=400)


def app_error_handler(_: Request, exc: AppError) -> JSONResponse:
    envelope = ErrorEnvelope(error=exc.message)
    return JSONResponse(status_code=exc.status_code, content=envelope.model_dump(exclude_none=True))


def validation_error_handler(_: Request, exc: RequestValidationError) -> JSONResponse:
    errors = [
        {"loc": list(error.get("loc", ())), "msg": error.get("msg", ""), "type": error.get("type", "")}
        for error in exc.errors()
    ]
    envelope = ErrorEnvelope(error="Validation error", details={"errors": errors})
    return JSONResponse(status_code=400, content=envelope.model_dump(exclude_none=True))


def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path, exc_info=exc)
    envelope = ErrorEnvelope(error="Internal server error")
    return JSONResponse(status_code=500, content=envelope.model_dump(exclude_none=True))
