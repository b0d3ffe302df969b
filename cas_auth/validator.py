"""Ticket validation against the CAS server."""

import httpx

from .config import CasOptions
from .exceptions import CasTransportError
from .models import ServiceResponse
from .parser import parse_service_response
from .urls import build_url


class TicketValidator:
    """Client for the CAS ``serviceValidate`` route."""

    def __init__(self, options: CasOptions, http_client: httpx.AsyncClient | None = None):
        """Initialize the validator.

        Args:
            options: CAS configuration
            http_client: Client used for validation requests. Timeouts, TLS
                         verification and proxies are configured on it. When
                         None, a client with httpx defaults is opened per request.
        """
        self.options = options
        self.http_client = http_client

    def validation_url(self, ticket: str, service: str) -> str:
        """Build the validation URL for a ticket issued to a service."""
        return build_url(
            self.options.base,
            self.options.validate_route,
            {"ticket": ticket, "service": service},
        )

    async def fetch(self, ticket: str, service: str) -> str:
        """Send the validation request and return the response body.

        Raises:
            CasTransportError: If the request fails or the status is not 200
        """
        url = self.validation_url(ticket, service)

        try:
            if self.http_client is not None:
                response = await self.http_client.get(url)
            else:
                async with httpx.AsyncClient() as client:
                    response = await client.get(url)
        except httpx.TimeoutException as e:
            raise CasTransportError(f"Validation request timed out: {e}") from e
        except httpx.RequestError as e:
            raise CasTransportError(str(e) or type(e).__name__) from e
        except Exception as e:
            raise CasTransportError(str(e) or type(e).__name__) from e

        if response.status_code != 200:
            raise CasTransportError(
                response.reason_phrase or f"HTTP {response.status_code}"
            )

        return response.text

    async def validate(self, ticket: str, service: str) -> ServiceResponse:
        """Validate a ticket and parse the server's answer.

        Raises:
            CasTransportError: If the request fails or the status is not 200
        """
        body = await self.fetch(ticket, service)
        return parse_service_response(body)
