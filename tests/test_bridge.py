"""Unit tests for the verification bridge."""

import asyncio
import threading
from unittest.mock import Mock

import pytest

from cas_auth.bridge import VerificationBridge
from cas_auth.models import Failure, Success


class TestVerificationBridge:
    """Test completion handling."""

    @pytest.mark.asyncio
    async def test_error_fails_with_challenge(self) -> None:
        """Test a truthy error fails the attempt with the challenge."""
        error_logger = Mock()
        bridge = VerificationBridge(error_logger=error_logger)
        error = ValueError("lookup failed")

        bridge.complete(error, {"user": "bob"}, None, "account locked")

        assert await bridge.outcome() == Failure(challenge="account locked", error=error)
        error_logger.assert_called_once_with("CAS verified callback error", error)

    @pytest.mark.asyncio
    async def test_empty_profile_fails(self) -> None:
        """Test a falsy profile fails even without an error."""
        debug_logger = Mock()
        bridge = VerificationBridge(debug_logger=debug_logger)

        bridge.complete(None, None)

        assert await bridge.outcome() == Failure(challenge=None)
        debug_logger.assert_any_call("CAS verified callback error: invalid profile")

    @pytest.mark.asyncio
    async def test_empty_profile_reports_challenge(self) -> None:
        """Test an empty profile carries the challenge like an error does."""
        bridge = VerificationBridge()

        bridge.complete(None, {}, None, "unknown user")

        assert await bridge.outcome() == Failure(challenge="unknown user")

    @pytest.mark.asyncio
    async def test_success_with_info(self) -> None:
        """Test a profile without error succeeds carrying info."""
        debug_logger = Mock()
        bridge = VerificationBridge(debug_logger=debug_logger)

        bridge.complete(None, {"user": "bob"}, {"role": "admin"})

        assert await bridge.outcome() == Success(
            user={"user": "bob"}, info={"role": "admin"}
        )
        debug_logger.assert_any_call("CAS verified callback success")
        debug_logger.assert_any_call('{"user": "bob"}')

    @pytest.mark.asyncio
    async def test_bridge_is_callable(self) -> None:
        """Test the bridge itself can be passed as the completion function."""
        bridge = VerificationBridge()

        bridge(None, "bob")

        assert await bridge.outcome() == Success(user="bob")

    @pytest.mark.asyncio
    async def test_deferred_completion(self) -> None:
        """Test completion scheduled later on the loop resolves the outcome."""
        bridge = VerificationBridge()
        asyncio.get_running_loop().call_later(0.01, bridge.complete, None, "bob")

        assert not bridge.done
        assert await bridge.outcome() == Success(user="bob")

    @pytest.mark.asyncio
    async def test_completion_from_thread(self) -> None:
        """Test completion from another thread is handed to the loop."""
        bridge = VerificationBridge()
        thread = threading.Thread(target=bridge.complete, args=(None, "bob", "info"))
        thread.start()

        outcome = await asyncio.wait_for(bridge.outcome(), timeout=5)
        thread.join()

        assert outcome == Success(user="bob", info="info")

    @pytest.mark.asyncio
    async def test_without_loggers(self) -> None:
        """Test completion works when no loggers are injected."""
        bridge = VerificationBridge()

        bridge.complete(RuntimeError("boom"), None)

        outcome = await bridge.outcome()
        assert isinstance(outcome, Failure)
        assert outcome.challenge is None
