"""URL helpers for the CAS redirect and validation routes."""

from urllib.parse import parse_qsl, urlencode, urljoin, urlsplit, urlunsplit


def set_query_params(url: str, params: dict[str, str]) -> str:
    """Set query parameters on a URL, replacing any existing values.

    Existing parameters keep their position; new ones are appended. The whole
    query is re-serialized using form encoding.
    """
    parts = urlsplit(url)
    query: list[tuple[str, str]] = []
    seen: set[str] = set()

    for key, value in parse_qsl(parts.query, keep_blank_values=True):
        if key in params:
            if key in seen:
                continue
            seen.add(key)
            value = params[key]
        query.append((key, value))

    query.extend((key, value) for key, value in params.items() if key not in seen)
    return urlunsplit(parts._replace(query=urlencode(query)))


def build_url(base: str, route: str, params: dict[str, str]) -> str:
    """Resolve a route against the CAS base URL and attach query parameters."""
    return set_query_params(urljoin(base, route), params)


def resolve_service_url(original_url: str, server_url: str) -> str:
    """Compute the service URL identifying a request.

    The request URL is resolved against the server's public URL and stripped
    of its ``ticket`` parameter, so the login redirect and the later ticket
    validation see the same value.
    """
    parts = urlsplit(urljoin(server_url, original_url))
    query = [
        (key, value)
        for key, value in parse_qsl(parts.query, keep_blank_values=True)
        if key != "ticket"
    ]
    return urlunsplit(parts._replace(query=urlencode(query)))
