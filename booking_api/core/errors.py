from typing import Optional
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from booking_api.core.logger import logger


class BookingAPIError(Exception):
    """Base error rendered as ``{"ok": false, "error": ..., "message": ...}``."""

    status_code = 500
    error = "server_error"

    def __init__(self, error: Optional[str] = None, message: Optional[str] = None):
        self.error = error or self.error
        self.message = message or self.error
        super().__init__(self.message)


class ValidationFailed(BookingAPIError):
    status_code = 400
    error = "validation_error"


class Unauthorized(BookingAPIError):
    status_code = 401
    error = "unauthorized"


class BookingNotFound(BookingAPIError):
    status_code = 404
    error = "not_found"


def error_body(error: str, message: str) -> dict:
    return {"ok": False, "error": error, "message": message}


def register_exception_handlers(app: FastAPI):
    @app.exception_handler(BookingAPIError)
    async def booking_error_handler(request: Request, exc: BookingAPIError):
        if exc.status_code >= 500:
            logger.error(f"❌ {request.method} {request.url.path}: {exc.message}")
        else:
            logger.info(f"↩️ {request.method} {request.url.path} -> {exc.status_code} {exc.error}")
        return JSONResponse(status_code=exc.status_code, content=error_body(exc.error, exc.message))

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        problems = []
        for err in exc.errors():
            location = ".".join(str(part) for part in err.get("loc", ()) if part != "body")
            problems.append(f"{location}: {err.get('msg')}" if location else err.get("msg", ""))
        message = "; ".join(problems) or "Invalid request"
        logger.info(f"↩️ {request.method} {request.url.path} -> 400 invalid_request ({message})")
        return JSONResponse(status_code=400, content=error_body("invalid_request", message))

    # Global Exception Handler
    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        logger.opt(exception=exc).error(f"🔥 UNHANDLED ERROR on {request.method} {request.url.path}: {exc}")
        return JSONResponse(
            status_code=500,
            content=error_body("server_error", "An unexpected error occurred."),
        )
