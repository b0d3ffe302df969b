"""Starlette integration for the CAS strategy."""

import inspect
from collections.abc import Callable, Mapping
from typing import Any

import structlog
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import JSONResponse, RedirectResponse

from .models import Failure, Redirect
from .strategy import CasStrategy

logger = structlog.get_logger()

LogoutHook = Callable[[Request], Any]
AuthenticatedHook = Callable[[Request], Any]


class StarletteCasRequest:
    """Expose a Starlette request through the ``CasRequest`` protocol."""

    def __init__(self, request: Request, logout_hook: LogoutHook | None = None):
        self.request = request
        self.logout_hook = logout_hook

    @property
    def original_url(self) -> str:
        url = self.request.url
        return f"{url.path}?{url.query}" if url.query else url.path

    @property
    def query_params(self) -> Mapping[str, str]:
        return self.request.query_params

    async def logout(self) -> None:
        """Log out through the host hook, or clear the session if there is one."""
        if self.logout_hook is not None:
            result = self.logout_hook(self.request)
            if inspect.isawaitable(result):
                await result
        elif "session" in self.request.scope:
            self.request.session.clear()


class CasAuthenticationMiddleware(BaseHTTPMiddleware):
    """Middleware authenticating every request through a CAS strategy."""

    def __init__(
        self,
        app: Any,
        strategy: CasStrategy[Any],
        unprotected_paths: list[str] | None = None,
        logout_hook: LogoutHook | None = None,
        is_authenticated: AuthenticatedHook | None = None,
    ):
        """Initialize the middleware.

        Args:
            app: ASGI application to wrap
            strategy: Strategy authenticating requests
            unprotected_paths: Paths served without authentication
            logout_hook: Called with the request to log it out locally
            is_authenticated: Called with the request, may be a coroutine.
                              A truthy result is the already logged-in user
                              and skips CAS for that request.
        """
        super().__init__(app)
        self.strategy = strategy
        self.unprotected_paths = (
            unprotected_paths if unprotected_paths is not None else ["/health", "/metrics"]
        )
        self.logout_hook = logout_hook
        self.is_authenticated = is_authenticated

    async def _current_user(self, request: Request) -> Any:
        # RelayState requests are logouts and always reach the strategy
        if self.is_authenticated is None or "RelayState" in request.query_params:
            return None
        user = self.is_authenticated(request)
        if inspect.isawaitable(user):
            user = await user
        return user

    async def dispatch(self, request: Any, call_next: Any) -> Any:
        """Process request with authentication."""
        if request.url.path in self.unprotected_paths:
            return await call_next(request)

        user = await self._current_user(request)
        if user:
            request.state.user = user
            request.state.auth_info = None
            return await call_next(request)

        outcome = await self.strategy.authenticate(
            StarletteCasRequest(request, self.logout_hook)
        )

        if isinstance(outcome, Redirect):
            logger.info(
                "Redirecting to CAS", path=request.url.path, location=outcome.url
            )
            return RedirectResponse(outcome.url, status_code=302)

        if isinstance(outcome, Failure):
            reason = None if outcome.challenge is None else str(outcome.challenge)
            logger.warning(
                "Authentication failed", path=request.url.path, reason=reason
            )
            return JSONResponse(
                status_code=401,
                content={"error": "Authentication failed", "reason": reason},
            )

        request.state.user = outcome.user
        request.state.auth_info = outcome.info
        logger.info("Authentication successful", path=request.url.path)

        return await call_next(request)
