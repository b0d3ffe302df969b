"""Hand-off between a validated CAS profile and the host's verification hook."""

import asyncio
import json
from typing import Any

from .models import AuthOutcome, DebugLogger, ErrorLogger, Failure, Success


def _describe(profile: Any) -> str:
    try:
        return json.dumps(profile, default=repr)
    except (TypeError, ValueError):
        return repr(profile)


class VerificationBridge:
    """Single-use completion handed to the verification hook.

    The hook calls :meth:`complete` once, synchronously, after its own
    asynchronous work, or from another thread. The strategy awaits
    :meth:`outcome` to learn the result.
    """

    def __init__(
        self,
        error_logger: ErrorLogger | None = None,
        debug_logger: DebugLogger | None = None,
    ):
        self._loop = asyncio.get_running_loop()
        self._future: asyncio.Future[AuthOutcome] = self._loop.create_future()
        self._error_logger = error_logger
        self._debug_logger = debug_logger

    @property
    def done(self) -> bool:
        return self._future.done()

    def complete(
        self,
        err: Any,
        profile: Any,
        info: Any = None,
        challenge: Any = None,
    ) -> None:
        """Report the host's decision.

        Args:
            err: Truthy to fail the attempt
            profile: Application user; a falsy value fails the attempt
            info: Extra data reported with a success
            challenge: Reason reported with a failure
        """
        if err:
            if self._error_logger:
                self._error_logger("CAS verified callback error", err)
            self._resolve(Failure(challenge=challenge, error=err))
            return

        if not profile:
            if self._debug_logger:
                self._debug_logger("CAS verified callback error: invalid profile")
                self._debug_logger(_describe(profile))
            self._resolve(Failure(challenge=challenge))
            return

        if self._debug_logger:
            self._debug_logger("CAS verified callback success")
            self._debug_logger(_describe(profile))
        self._resolve(Success(user=profile, info=info))

    # Allow passing the bridge itself as the completion function.
    __call__ = complete

    def _resolve(self, outcome: AuthOutcome) -> None:
        try:
            running = asyncio.get_running_loop()
        except RuntimeError:
            running = None

        if running is self._loop:
            self._future.set_result(outcome)
        else:
            self._loop.call_soon_threadsafe(self._future.set_result, outcome)

    async def outcome(self) -> AuthOutcome:
        """Wait for the hook to complete and return the final outcome."""
        return await self._future
