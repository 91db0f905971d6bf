from symbl_client.errors import (
    AuthenticationFailedError,
    InvalidInputError,
    JobTimeoutError,
    SymblClientError,
    ValidationError,
)
from symbl_client.http import StatusError
from symbl_client.models import BearerToken, Credentials
from symbl_client.services import SymblClient

__all__ = [
    "AuthenticationFailedError",
    "BearerToken",
    "Credentials",
    "InvalidInputError",
    "JobTimeoutError",
    "StatusError",
    "SymblClient",
    "SymblClientError",
    "ValidationError",
]
