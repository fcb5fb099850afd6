from .api import app
from .schemas import (
    AccountResponse,
    AccountsResponse,
    ErrorResponse,
    HealthResponse,
    TransferRequest,
    TransferResponse,
)

__all__ = [
    # Core
    "app",
    # Schemas
    "TransferRequest",
    "TransferResponse",
    "AccountResponse",
    "AccountsResponse",
    "HealthResponse",
    "ErrorResponse",
]
