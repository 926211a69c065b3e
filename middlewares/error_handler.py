import logging
from datetime import datetime, timezone

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from utils.errors import NotFound, StoreFailure, ValidationFailure

logger = logging.getLogger(__name__)


def _now_iso():
    return datetime.now(timezone.utc).isoformat().replace("+00:00", "Z")


def _error(status_code: int, code: str, message: str, **extra):
    return JSONResponse(
        status_code=status_code,
        content={
            "success": False,
            "error": {"code": code, "message": message, **extra},
            "generated_at": _now_iso(),
        },
    )


def add_error_handlers(app: FastAPI):
    @app.exception_handler(ValidationFailure)
    async def validation_failure_handler(request: Request, exc: ValidationFailure):
        return _error(422, exc.code, str(exc), missing_fields=exc.missing_fields)

    @app.exception_handler(NotFound)
    async def not_found_handler(request: Request, exc: NotFound):
        return _error(404, exc.code, str(exc))

    @app.exception_handler(StoreFailure)
    async def store_failure_handler(request: Request, exc: StoreFailure):
        logger.error(f"{request.method} {request.url.path}: {exc}")
        return _error(502, exc.code, str(exc))

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception):
        logger.exception(f"{request.method} {request.url.path}: unhandled error")
        return _error(500, "INTERNAL_ERROR", str(exc))
