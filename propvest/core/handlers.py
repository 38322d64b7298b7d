# propvest/core/handlers.py
import logging

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware

from propvest.core.exceptions import PropvestError

logger = logging.getLogger(__name__)

GENERIC_ERROR_MESSAGE = "Something went wrong on our end. Please try again."


async def propvest_error_handler(request: Request, exc: PropvestError):
    if exc.status_code >= 500:
        logger.error(
            "%s on %s %s: %s",
            type(exc).__name__,
            request.method,
            request.url.path,
            exc.message,
        )
        return JSONResponse(
            status_code=exc.status_code, content={"message": GENERIC_ERROR_MESSAGE}
        )

    logger.warning(
        "%s %s rejected (%s): %s",
        request.method,
        request.url.path,
        exc.status_code,
        exc.message,
    )
    return JSONResponse(status_code=exc.status_code, content={"message": exc.message})


class ValidationErrorHandler:
    """Reports malformed requests as 400 with one entry per failing field."""

    async def __call__(self, request: Request, exc: RequestValidationError):
        errors = []

        for err in exc.errors():
            loc = [str(part) for part in err.get("loc", ()) if part != "body"]
            errors.append({
                "field": ".".join(loc),
                "message": str(err.get("msg")),
            })

        message = errors[0]["message"] if errors else "Invalid input"
        if message.startswith("Value error, "):
            message = message[len("Value error, "):]

        return JSONResponse(
            status_code=400,
            content={"message": message, "errors": errors},
        )


class ErrorHandlerMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next):
        try:
            return await call_next(request)
        except Exception:
            logger.exception(
                "Unhandled server error on %s %s", request.method, request.url.path
            )
            return JSONResponse(
                status_code=500, content={"message": GENERIC_ERROR_MESSAGE}
            )
