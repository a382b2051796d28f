"""Repository error taxonomy.

Every layer of the pipeline raises only these errors. Leaves translate
their own I/O failures (httpx, redis, pydantic decoding) into
``TransportError`` and chain the original exception as ``__cause__``.
"""

from enum import Enum


class RepositoryError(Exception):
    """Base class for all repository errors."""


class NotFoundError(RepositoryError):
    """The requested product does not exist."""

    def __init__(self, product_id: str) -> None:
        super().__init__(f"Product not found: {product_id!r}")
        self.product_id = product_id


class ConflictError(RepositoryError):
    """A product with the same id already exists."""

    def __init__(self, product_id: str) -> None:
        super().__init__(f"Product already exists: {product_id!r}")
        self.product_id = product_id


class ValidationReason(str, Enum):
    """Why an argument was rejected before reaching the data source."""

    INVALID_ID = "invalid_id"
    EMPTY_NAME = "empty_name"
    INVALID_PRICE = "invalid_price"
    INVALID_PAGE = "invalid_page"


class ValidationError(RepositoryError):
    """An argument was rejected before any I/O took place."""

    def __init__(self, reason: ValidationReason, message: str | None = None) -> None:
        super().__init__(message or reason.value)
        self.reason = reason


class TransportError(RepositoryError):
    """An I/O failure talking to a data source (timeout, non-2xx, decode error).

    Attributes:
        status_code: HTTP status code when the failure was an HTTP response
    """

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code
