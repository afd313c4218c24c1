"""
Service exceptions and their HTTP rendering
"""
import logging

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)


class ServiceException(Exception):
    """Base error raised by services and routers; rendered as an error entity."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    error_code = "500"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ResourceNotFoundException(ServiceException):
    status_code = status.HTTP_404_NOT_FOUND
    error_code = "404"


class ConflictException(ServiceException):
    status_code = status.HTTP_409_CONFLICT
    error_code = "409"


class OperationNotAllowedException(ServiceException):
    status_code = status.HTTP_409_CONFLICT
    error_code = "409"


class InvalidRequestException(ServiceException):
    status_code = status.HTTP_400_BAD_REQUEST
    error_code = "400"


class UnauthorizedException(ServiceException):
    status_code = status.HTTP_401_UNAUTHORIZED
    error_code = "401"

    def __init__(self, user: str, store_code: str):
        super().__init__(f"User {user} not authorized for store {store_code}")
        self.user = user
        self.store_code = store_code


def _error_entity(error_code: str, message: str, **extra) -> dict:
    body = {"errorCode": error_code, "message": message}
    body.update(extra)
    return body


async def service_exception_handler(request: Request, exc: ServiceException):
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc.message}")
    return JSONResponse(
        status_code=exc.status_code,
        content=_error_entity(exc.error_code, exc.message)
    )


async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse(
        status_code=exc.status_code,
        content=_error_entity(str(exc.status_code), str(exc.detail)),
        headers=getattr(exc, "headers", None)
    )


async def validation_exception_handler(request: Request, exc: RequestValidationError):
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=_error_entity("400", "Validation failed", errors=jsonable_encoder(exc.errors()))
    )


async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.exception(f"Unexpected error on {request.method} {request.url.path}")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=_error_entity("500", "Internal server error")
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(ServiceException, service_exception_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
