"""Authentication models and types."""

from collections.abc import Awaitable, Callable, Mapping
from dataclasses import dataclass, field
from typing import Any, Generic, Protocol, TypeVar

Attributes = TypeVar("Attributes")


@dataclass
class CasAuthenticationSuccess(Generic[Attributes]):
    """Profile extracted from a successful CAS validation response."""

    user: str
    attributes: Attributes = field(default_factory=dict)  # type: ignore[assignment]


@dataclass
class CasAuthenticationFailure:
    """Failure branch of a CAS validation response."""

    code: str | None = None
    description: str | None = None


@dataclass
class MalformedResponse:
    """Validation response carrying neither a usable success nor a failure."""

    reason: str


ServiceResponse = CasAuthenticationSuccess[Any] | CasAuthenticationFailure | MalformedResponse


@dataclass(frozen=True)
class Redirect:
    """Send the user agent to another URL."""

    url: str


@dataclass(frozen=True)
class Success:
    """Authentication succeeded."""

    user: Any
    info: Any = None


@dataclass(frozen=True)
class Failure:
    """Authentication failed.

    ``challenge`` is the reason reported to the host, ``error`` the underlying
    error object when there is one.
    """

    challenge: Any = None
    error: Any = None


AuthOutcome = Redirect | Success | Failure


class CasRequest(Protocol):
    """Request-like object handled by the CAS strategy."""

    @property
    def original_url(self) -> str:
        """Path and query string of the request as received."""
        ...

    @property
    def query_params(self) -> Mapping[str, str]:
        """Decoded query parameters."""
        ...

    def logout(self) -> Awaitable[None] | None:
        """Log the request out locally."""
        ...


# Called by the verification hook. A truthy ``err`` makes the attempt fail;
# otherwise the attempt succeeds iff ``profile`` is truthy.
VerifiedCallback = Callable[..., None]

# Host-provided hook resolving a CAS profile into an application user.
VerifyCallback = Callable[
    [CasAuthenticationSuccess[Any], VerifiedCallback], Awaitable[None] | None
]

ErrorLogger = Callable[[str, Any], None]
DebugLogger = Callable[[str], None]
