
import logging
from typing import Callable

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import IntegrityError
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.middleware.base import BaseHTTPMiddleware

from back.exceptions import (BaseCustomHTTPException, ConflictException,
                             InternalServerException, RouteNotFoundException,
                             ValidationFailedException)
from config import settings

logger = logging.getLogger(__name__)


def error_response(exc: StarletteHTTPException) -> JSONResponse:
    content = {"message": exc.detail}
    issues = getattr(exc, "issues", None)
    if issues is not None:
        content["issues"] = issues
    return JSONResponse(status_code=exc.status_code, content=content, headers=exc.headers)


class ExceptionMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next: Callable) -> JSONResponse:
        try:
            response = await call_next(request)
            return response
        except BaseCustomHTTPException as exc:
            return error_response(exc)
        except IntegrityError:
            logger.warning("Integrity error on %s %s", request.method, request.url.path)
            return error_response(ConflictException())
        except Exception as exc:
            logger.exception("Unhandled error on %s %s", request.method, request.url.path)
            message = "Internal server error"
            if settings.environment != "production":
                message = f"{message}: {exc}"
            return error_response(InternalServerException(message))


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    if exc.status_code == 404 and not isinstance(exc, BaseCustomHTTPException):
        return error_response(RouteNotFoundException(request.method, request.url.path))
    return error_response(exc)


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    issues = [{"path": [str(part) for part in error.get("loc", ())],
               "message": error.get("msg", ""),
               "type": error.get("type", "")}
              for error in exc.errors()]
    return error_response(ValidationFailedException(issues))


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
