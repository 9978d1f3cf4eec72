import logging
from http import HTTPStatus

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from video_api.core.config import settings
from video_api.core.errors import ServiceError

logger = logging.getLogger(__name__)

INTERNAL_ERROR = "Internal server error"


def error_body(message: str, status: int,
               detail: str | None = None) -> JSONResponse:
    """Every failure leaves as {"error": "..."}."""
    content = {"error": message}
    if detail is not None:
        content["detail"] = detail
    return JSONResponse(status_code=int(status), content=content)


def validation_message(exc: RequestValidationError) -> str:
    errors = exc.errors()
    if not errors:
        return "Invalid request"
    first = errors[0]
    field = ".".join(str(p) for p in first.get("loc", ())
                     if p not in ("body", "query", "path", "header"))
    msg = first.get("msg", "Invalid value")
    return f"{field}: {msg}" if field else msg


async def service_error_handler(request: Request, exc: ServiceError):
    if exc.status >= HTTPStatus.INTERNAL_SERVER_ERROR:
        logger.error("service_error",
                     extra={"path": request.url.path, "err": exc.message})
    return error_body(exc.message, exc.status)


async def http_error_handler(request: Request, exc: StarletteHTTPException):
    return error_body(str(exc.detail), exc.status_code)


async def validation_error_handler(request: Request,
                                   exc: RequestValidationError):
    return error_body(validation_message(exc), HTTPStatus.BAD_REQUEST)


async def unhandled_error_handler(request: Request, exc: Exception):
    # RuntimeError("mongo_..._error: ...") из сервисов попадает сюда
    logger.exception("unhandled_error", extra={"path": request.url.path})
    return error_body(
        INTERNAL_ERROR,
        HTTPStatus.INTERNAL_SERVER_ERROR,
        detail=str(exc) if settings.debug else None,
    )


def install_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(ServiceError, service_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_error_handler)
    app.add_exception_handler(RequestValidationError,
                              validation_error_handler)
    # RuntimeError goes through ExceptionMiddleware and is answered here;
    # anything else still reaches ServerErrorMiddleware
    app.add_exception_handler(RuntimeError, unhandled_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)

