"""
Error taxonomy for the StockFlow API.

Every error carries a client-safe message and the HTTP status it maps to.
Internal details (SQL, driver messages) stay in the server log and in the
exception chain (`__cause__`), never in `message`.
"""
from typing import Optional


class StockflowError(Exception):
    """Base exception for all StockFlow failures surfaced to clients."""

    code: str = "stockflow_error"
    status_code: int = 500
    default_message: str = "Server Error"

    def __init__(self, message: Optional[str] = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(StockflowError):
    """Missing or malformed input; raised before any store access."""

    code = "validation_error"
    status_code = 400
    default_message = "Invalid request"


class ConflictError(StockflowError):
    """A uniqueness rule was violated (e.g. duplicate sku)."""

    code = "conflict"
    status_code = 409
    default_message = "Resource already exists"


class NotFoundError(StockflowError):
    code = "not_found"
    status_code = 404
    default_message = "Not found"


class PersistenceError(StockflowError):
    """Any other store failure. The transaction has already been rolled back."""

    code = "persistence_error"
    status_code = 500
    default_message = "Server Error"
