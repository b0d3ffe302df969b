"""Response bodies and request doubles shared by the CAS tests."""

from typing import Any
from unittest.mock import Mock
from urllib.parse import parse_qsl, urlsplit

SUCCESS_XML = """<cas:serviceResponse xmlns:cas="http://www.yale.edu/tp/cas">
    <cas:authenticationSuccess>
        <cas:user>alice</cas:user>
        <cas:attributes>
            <cas:email>a@x.com</cas:email>
        </cas:attributes>
    </cas:authenticationSuccess>
</cas:serviceResponse>"""

FAILURE_XML = """<cas:serviceResponse xmlns:cas="http://www.yale.edu/tp/cas">
    <cas:authenticationFailure code="INVALID_TICKET">
        Ticket ST-1856339-aA5Yuvrxzpv8Tau1cYQ7 not recognized
    </cas:authenticationFailure>
</cas:serviceResponse>"""

ENTITY_XML = """<!DOCTYPE r [<!ENTITY a "x">]>
<cas:serviceResponse xmlns:cas="http://www.yale.edu/tp/cas"/>"""


class FakeRequest:
    """Minimal request satisfying the CasRequest protocol."""

    def __init__(self, original_url: str, logout: Any = None):
        self.original_url = original_url
        self.query_params = dict(
            parse_qsl(urlsplit(original_url).query, keep_blank_values=True)
        )
        self.logout = logout if logout is not None else Mock(return_value=None)


def make_response(status_code: int = 200, text: str = "", reason_phrase: str = "OK") -> Mock:
    response = Mock()
    response.status_code = status_code
    response.text = text
    response.reason_phrase = reason_phrase
    return response
