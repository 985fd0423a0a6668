# gearguard/core/errors.py
import logging
from typing import Optional

from fastapi import FastAPI, HTTPException, Request, status
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException

from .api import fail

logger = logging.getLogger(__name__)


class FieldConflict(HTTPException):
    """Tekil alan çakışması (kullanıcı adı, e-posta, seri no, kod)."""

    def __init__(self, field: str, detail: Optional[str] = None):
        super().__init__(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=detail or f"{field} already exists",
        )
        self.field = field


def not_found(what: str) -> HTTPException:
    return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"{what} not found")


def install_error_handlers(app: FastAPI) -> None:
    # -----------------------------
    # Global hata zarfı
    # -----------------------------
    @app.exception_handler(FieldConflict)
    async def field_conflict_to_envelope(request: Request, exc: FieldConflict):
        return fail(str(exc.detail), status_code=exc.status_code, meta={"field": exc.field})

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_to_envelope(request: Request, exc: StarletteHTTPException):
        resp = fail(str(exc.detail) if exc.detail else exc.__class__.__name__, status_code=exc.status_code)
        if getattr(exc, "headers", None):
            resp.headers.update(exc.headers)
        return resp

    @app.exception_handler(RequestValidationError)
    async def validation_exception_to_envelope(request: Request, exc: RequestValidationError):
        return fail("Validation error", status_code=422, meta={"errors": exc.errors()})

    @app.exception_handler(Exception)
    async def unhandled_exception_to_envelope(request: Request, exc: Exception):
        logger.exception("unhandled error on %s %s", request.method, request.url.path)
        return fail("Internal server error", status_code=500)
