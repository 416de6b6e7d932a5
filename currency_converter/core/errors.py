from fastapi import Request
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from starlette import status
import logging

logger = logging.getLogger("currency_converter.errors")


class ConverterError(Exception):
    """Base class for all converter failures."""


class FetchError(ConverterError):
    """Network, HTTP status or payload failure while retrieving rates."""


class RatesUnavailableError(ConverterError):
    """No rate snapshot has been fetched yet."""


class StorageReadError(ConverterError):
    pass


class StorageWriteError(ConverterError):
    pass


class NotRecordableError(ConverterError):
    """Raised when an error or zero-display result is offered to the history."""


def _error(status_code: int, error: str, detail) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": error, "detail": detail})


def not_found_handler(request: Request, exc):  # type: ignore
    if getattr(exc, "status_code", 404) != 404:
        return _error(exc.status_code, "http_error", exc.detail)
    return _error(
        status.HTTP_404_NOT_FOUND,
        "not_found",
        f"No route for {request.method} {request.url.path}",
    )


def validation_error_handler(request: Request, exc: RequestValidationError):  # type: ignore
    return _error(status.HTTP_422_UNPROCESSABLE_ENTITY, "validation_error", exc.errors())


def fetch_error_handler(request: Request, exc: FetchError):  # type: ignore
    logger.warning("rate fetch failed: %s", exc)
    return _error(
        status.HTTP_502_BAD_GATEWAY,
        "fetch_error",
        "Falha ao atualizar taxas de câmbio.",
    )


def rates_unavailable_handler(request: Request, exc: RatesUnavailableError):  # type: ignore
    return _error(
        status.HTTP_503_SERVICE_UNAVAILABLE,
        "rates_unavailable",
        "Falha ao carregar dados. Verifique sua conexão.",
    )


def not_recordable_handler(request: Request, exc: NotRecordableError):  # type: ignore
    return _error(status.HTTP_400_BAD_REQUEST, "not_recordable", str(exc))


def server_error_handler(request: Request, exc: Exception):  # type: ignore
    logger.exception("unhandled exception")
    return _error(
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        "internal_error",
        "An unexpected error occurred.",
    )
