"""Shared fixtures for CAS strategy tests."""

import pytest

from cas_auth.config import CasOptions


@pytest.fixture
def options() -> CasOptions:
    return CasOptions(
        base="https://cas.example.com",
        login_route="/cas/login",
        validate_route="/cas/p3/serviceValidate",
        logout_route="/cas/logout",
        server_url="https://app.example.com",
    )
