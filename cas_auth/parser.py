"""Parsing of CAS v3 ``serviceValidate`` XML responses."""

from typing import Any
from xml.parsers.expat import ExpatError

import xmltodict

from .models import (
    CasAuthenticationFailure,
    CasAuthenticationSuccess,
    MalformedResponse,
    ServiceResponse,
)

BAD_RESPONSE = "Bad response from server"
AUTHENTICATION_FAILED = "Authentication failed"


def _normalize_entry(path: list[Any], key: str, value: Any) -> tuple[str, Any]:
    """Lower-case tag names, strip namespace prefixes and collapse whitespace.

    ``cas:authenticationSuccess`` and ``AUTHENTICATIONSUCCESS`` both become
    ``authenticationsuccess``. Attribute (``@``) and text (``#``) keys keep
    their names.
    """
    if not key.startswith(("@", "#")):
        key = key.rpartition(":")[2].lower()
    if isinstance(value, str):
        value = " ".join(value.split())
    return key, value


def parse_xml(body: str | bytes) -> dict[str, Any]:
    """Parse an XML document into nested dicts with normalized tag names.

    Elements occurring once stay scalars; repeated elements become lists.

    Raises:
        ExpatError: If the body is not well-formed XML
        ValueError: If the document declares entities
    """
    return xmltodict.parse(
        body,
        postprocessor=_normalize_entry,
        strip_whitespace=True,
        disable_entities=True,
    )


def _text(value: Any) -> str | None:
    if isinstance(value, dict):
        return value.get("#text")
    return value or None


def parse_service_response(body: str | bytes) -> ServiceResponse:
    """Turn a validation response body into a success, failure or malformed result.

    Args:
        body: Raw XML returned by the CAS validate route

    Returns:
        CasAuthenticationFailure if the server reported a failure,
        CasAuthenticationSuccess if it reported a success, MalformedResponse
        otherwise
    """
    try:
        document = parse_xml(body)
    except (ExpatError, ValueError):
        return MalformedResponse(BAD_RESPONSE)

    if not isinstance(document, dict) or "serviceresponse" not in document:
        return MalformedResponse(BAD_RESPONSE)

    root = document["serviceresponse"]
    if not isinstance(root, dict):
        return MalformedResponse(AUTHENTICATION_FAILED)

    failure = root.get("authenticationfailure")
    if failure:
        code = failure.get("@code") if isinstance(failure, dict) else None
        return CasAuthenticationFailure(code=code, description=_text(failure))

    success = root.get("authenticationsuccess")
    if success and isinstance(success, dict):
        user = _text(success.get("user"))
        if user:
            return CasAuthenticationSuccess(
                user=user,
                attributes=success.get("attributes") or {},
            )

    return MalformedResponse(AUTHENTICATION_FAILED)
