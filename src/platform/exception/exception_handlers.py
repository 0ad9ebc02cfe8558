from typing import Any, Callable, Coroutine

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.responses import Response

from src.platform.exception.exceptions import BusyError, CustomBaseError, DomainError
from src.platform.logging.loguru_io import Logger

# Type alias for exception handlers (compatible with Starlette's expected signature)
ExceptionHandler = Callable[[Request, Exception], Coroutine[Any, Any, Response]]

# Seconds a client should back off when an inventory counter is contended
BUSY_RETRY_AFTER_SECONDS = 1


def _error_body(error: CustomBaseError) -> dict[str, str]:
    return {'detail': error.message, 'error': type(error).__name__}


async def custom_error_handler(request: Request, exc: Exception) -> JSONResponse:
    error = exc if isinstance(exc, CustomBaseError) else CustomBaseError(str(exc), 500)
    if isinstance(error, DomainError):
        Logger.base.info(f'{request.method} {request.url.path} rejected: {error.message}')
    return JSONResponse(status_code=error.status_code, content=_error_body(error))


async def busy_error_handler(request: Request, exc: Exception) -> JSONResponse:
    error = exc if isinstance(exc, BusyError) else BusyError(str(exc))
    return JSONResponse(
        status_code=error.status_code,
        content=_error_body(error),
        headers={'Retry-After': str(BUSY_RETRY_AFTER_SECONDS)},
    )


async def value_error_handler(request: Request, exc: Exception) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={'detail': str(exc), 'error': 'ValidationError'},
    )


async def request_validation_handler(request: Request, exc: Exception) -> JSONResponse:
    """Malformed bodies and query strings answer 400 like domain validation does"""
    errors = exc.errors() if isinstance(exc, RequestValidationError) else []
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={'detail': jsonable_encoder(errors), 'error': 'ValidationError'},
    )


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    Logger.base.exception(f'Unhandled error on {request.method} {request.url.path}: {exc}')
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={'detail': 'Internal server error'},
    )


# Most specific first; Starlette resolves handlers along the exception MRO
EXCEPTION_HANDLERS: dict[type[Exception], ExceptionHandler] = {
    BusyError: busy_error_handler,
    CustomBaseError: custom_error_handler,
    ValueError: value_error_handler,
    RequestValidationError: request_validation_handler,
    Exception: unhandled_error_handler,
}


def register_exception_handlers(app: FastAPI) -> None:
    for exception_class, handler in EXCEPTION_HANDLERS.items():
        app.add_exception_handler(exception_class, handler)
