"""Exceptions raised while validating CAS tickets."""


class CasError(Exception):
    """Base exception for CAS authentication errors."""

    pass


class CasTransportError(CasError):
    """The validation request could not reach the CAS server or was refused."""

    pass


class CasResponseError(CasError):
    """The CAS server answered with something that is not a usable response."""

    def __init__(self, reason: str):
        super().__init__(reason)
        self.reason = reason


class CasAuthenticationError(CasError):
    """The CAS server reported an authentication failure."""

    def __init__(self, code: str | None = None, description: str | None = None):
        message = "Authentication failed"
        if code:
            message = f"{message} {code}"
        super().__init__(message)
        self.code = code
        self.description = description
