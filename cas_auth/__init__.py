"""Passport-style CAS authentication strategy."""

from typing import Any

from .config import CasOptions
from .exceptions import (
    CasAuthenticationError,
    CasError,
    CasResponseError,
    CasTransportError,
)
from .models import (
    AuthOutcome,
    CasAuthenticationFailure,
    CasAuthenticationSuccess,
    CasRequest,
    Failure,
    MalformedResponse,
    Redirect,
    Success,
)
from .strategy import CasStrategy


# Import the Starlette middleware lazily so the strategy works without a web stack
def __getattr__(name: str) -> Any:
    if name == "CasAuthenticationMiddleware":
        from .middleware import CasAuthenticationMiddleware

        return CasAuthenticationMiddleware
    raise AttributeError(f"module '{__name__}' has no attribute '{name}'")


__all__ = [
    "AuthOutcome",
    "CasAuthenticationError",
    "CasAuthenticationFailure",
    "CasAuthenticationMiddleware",
    "CasAuthenticationSuccess",
    "CasError",
    "CasOptions",
    "CasRequest",
    "CasResponseError",
    "CasStrategy",
    "CasTransportError",
    "Failure",
    "MalformedResponse",
    "Redirect",
    "Success",
]
