"""
Error taxonomy shared by the API and the storefront client.

Every domain error carries the HTTP status it is served with. The API
renders them as ``{"error": message}``; the client maps error responses
back onto the same classes.
"""
import structlog
from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

logger = structlog.get_logger(__name__)


class BookstoreError(Exception):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(BookstoreError):
    status_code = status.HTTP_400_BAD_REQUEST


class Unauthorized(BookstoreError):
    status_code = status.HTTP_401_UNAUTHORIZED


class NotFound(BookstoreError):
    status_code = status.HTTP_404_NOT_FOUND


class QueryFailure(BookstoreError):
    """The datastore rejected or failed a statement."""


class PartialOrderFailure(BookstoreError):
    """An order was rejected at the line-item stage.

    The header had been flushed but not committed; the transaction was
    rolled back, so neither the header nor any item is persisted.
    """


class PaymentFailure(BookstoreError):
    status_code = status.HTTP_502_BAD_GATEWAY

    def __init__(self, message: str, order_id: int | None = None):
        super().__init__(message)
        self.order_id = order_id


ERRORS_BY_STATUS = {
    cls.status_code: cls
    for cls in (ValidationError, Unauthorized, NotFound, PaymentFailure)
}


def error_for_status(status_code: int, message: str) -> BookstoreError:
    if status_code == 422:  # request shape rejected by FastAPI
        return ValidationError(message)
    return ERRORS_BY_STATUS.get(status_code, QueryFailure)(message)


async def bookstore_error_handler(request: Request, exc: BookstoreError):
    if exc.status_code >= 500:
        logger.error("request_failed", path=request.url.path, error=exc.message)
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})


def register_exception_handlers(app: FastAPI):
    app.add_exception_handler(BookstoreError, bookstore_error_handler)
