"""CAS authentication strategy.

See https://apereo.github.io/cas/6.6.x/images/cas_flow_diagram.png for the CAS
authentication workflow. A request is handled in one of three ways:

* a ``RelayState`` query parameter logs the request out locally and redirects
  to the CAS logout route,
* a request without ``ticket`` is redirected to the CAS login route,
* a request with ``ticket`` has the ticket validated against the CAS server,
  and a valid profile is passed to the host's verification hook, which
  decides the outcome.
"""

import inspect
from typing import Any, Generic

import httpx

from .bridge import VerificationBridge
from .config import CasOptions
from .exceptions import CasAuthenticationError, CasResponseError, CasTransportError
from .models import (
    Attributes,
    AuthOutcome,
    CasAuthenticationFailure,
    CasAuthenticationSuccess,
    CasRequest,
    DebugLogger,
    ErrorLogger,
    Failure,
    Redirect,
    ServiceResponse,
    VerifyCallback,
)
from .urls import build_url, resolve_service_url
from .validator import TicketValidator


class CasStrategy(Generic[Attributes]):
    """Authenticate requests against an external CAS server."""

    name = "cas"

    def __init__(
        self,
        verify: VerifyCallback,
        options: CasOptions,
        error_logger: ErrorLogger | None = None,
        debug_logger: DebugLogger | None = None,
        http_client: httpx.AsyncClient | None = None,
    ):
        """Initialize the strategy.

        Args:
            verify: Hook called with the CAS profile and a completion function
            options: CAS routes and the public URL of this server
            error_logger: Called as ``error_logger(message, error)``
            debug_logger: Called as ``debug_logger(message)``
            http_client: Client used for ticket validation requests
        """
        self.verify = verify
        self.config = options
        self.validator = TicketValidator(options, http_client=http_client)
        self.error_logger = error_logger
        self.debug_logger = debug_logger

    def _log_error(self, message: str, error: Any) -> None:
        if self.error_logger:
            self.error_logger(message, error)

    def _log_debug(self, message: str) -> None:
        if self.debug_logger:
            self.debug_logger(message)

    def get_service_url(self, request: CasRequest) -> str:
        """Service URL of the request, without its ``ticket`` parameter."""
        return resolve_service_url(request.original_url, self.config.server_url)

    def login_url(self, service: str) -> str:
        return build_url(
            self.config.base, self.config.login_route, {"service": service}
        )

    def logout_url(self, relay_state: str) -> str:
        return build_url(
            self.config.base,
            self.config.logout_route,
            {"_eventId": "next", "RelayState": relay_state},
        )

    async def authenticate(self, request: CasRequest) -> AuthOutcome:
        """Authenticate a request.

        Returns:
            Redirect to the CAS login or logout page, or the final Success or
            Failure once the ticket is validated and the verification hook has
            completed. Errors are reported as Failure, never raised.
        """
        relay_state = request.query_params.get("RelayState")
        if relay_state:
            self._log_debug("RelayState present, logging out")
            return await self.logout(request, relay_state)

        service = self.get_service_url(request)
        self._log_debug(f"Extracted service: {service}")
        ticket = request.query_params.get("ticket")

        # First visit: CAS sends the user back here with a ticket after login
        if not ticket:
            self._log_debug("No ticket provided, starting login process")
            return Redirect(self.login_url(service))

        self._log_debug(f"Got ticket {ticket}, starting validation process")
        try:
            response = await self.validator.validate(ticket, service)
        except CasTransportError as e:
            self._log_error("Failed to validate ticket", e)
            return Failure(challenge=str(e), error=e)

        self._log_debug(f"Got info: {response}")
        return await self.validate(response)

    async def logout(self, request: CasRequest, relay_state: str) -> Redirect:
        """Log the request out locally and redirect to the CAS logout route.

        A failing local logout is logged and does not prevent the redirect.
        """
        try:
            result = request.logout()
            if inspect.isawaitable(result):
                await result
        except Exception as e:
            self._log_error("Failed to log request out", e)

        return Redirect(self.logout_url(relay_state))

    async def validate(self, response: ServiceResponse) -> AuthOutcome:
        """Turn a parsed validation response into the final outcome."""
        if isinstance(response, CasAuthenticationFailure):
            error = CasAuthenticationError(response.code, response.description)
            self._log_error("CAS validation failed", error)
            return Failure(challenge=str(error), error=error)

        if not isinstance(response, CasAuthenticationSuccess):
            response_error = CasResponseError(response.reason)
            self._log_error("CAS validation failed", response_error)
            return Failure(challenge=response.reason, error=response_error)

        self._log_debug("CAS validate: ticket ok, calling user verify function")
        self._log_debug(f"Got profile: {response}")
        return await self.verified(response)

    async def verified(self, profile: CasAuthenticationSuccess[Any]) -> AuthOutcome:
        """Run the verification hook and wait for its completion."""
        bridge = VerificationBridge(self.error_logger, self.debug_logger)
        try:
            result = self.verify(profile, bridge.complete)
            if inspect.isawaitable(result):
                await result
        except Exception as e:
            if not bridge.done:
                self._log_error("CAS verify function raised", e)
                return Failure(challenge=str(e), error=e)
            self._log_error("CAS verify function raised after completing", e)

        return await bridge.outcome()
