"""
HTTP transport.

The client never touches the network directly: it hands a fully formed URL
(credentials embedded as user:key@host) and an optional parameter map to a
Transport and gets back the status code and raw body.  Decoding the body is
the client's job.

UrllibTransport is the default and uses stdlib urllib only.  Tests pass a
recording fake instead.
"""

from __future__ import annotations

import base64
import http.client
import logging
import urllib.error
import urllib.parse
import urllib.request
from abc import ABC, abstractmethod
from typing import Literal, NamedTuple

from challongeclient.errors import TransportError

logger = logging.getLogger(__name__)

HttpMethod = Literal["GET", "POST", "PUT", "DELETE"]

_USER_AGENT = "challongeclient/1.0"


class TransportResponse(NamedTuple):
    status: int
    body: bytes


class Transport(ABC):
    """Abstract base for anything that can carry a request to the service."""

    @abstractmethod
    def request(
        self,
        method: HttpMethod,
        url: str,
        params: dict[str, str] | None = None,
    ) -> TransportResponse:
        """
        Perform one blocking HTTP round trip.

        GET and DELETE send params in the query string; POST and PUT send
        them form-encoded in the body.

        Raises:
            TransportError: the request could not be completed at all
                            (connection refused, DNS failure, timeout,
                            malformed HTTP response).
        """
        ...


def split_credentials(url: str) -> tuple[str, str | None]:
    """
    Strip user:password@ from a URL.

    Returns the bare URL and a Basic auth header value (None when the URL
    carries no credentials).  urllib cannot authenticate from the netloc, so
    the credentials have to travel as a header instead.
    """
    parts = urllib.parse.urlsplit(url)
    if parts.username is None:
        return url, None
    user = urllib.parse.unquote(parts.username)
    password = urllib.parse.unquote(parts.password or "")
    host = parts.hostname or ""
    if parts.port is not None:
        host = f"{host}:{parts.port}"
    bare = urllib.parse.urlunsplit((parts.scheme, host, parts.path, parts.query, parts.fragment))
    token = base64.b64encode(f"{user}:{password}".encode()).decode()
    return bare, f"Basic {token}"


class UrllibTransport(Transport):
    """Blocking transport on top of urllib.request."""

    def __init__(self, timeout: float = 15.0) -> None:
        self._timeout = timeout

    def request(
        self,
        method: HttpMethod,
        url: str,
        params: dict[str, str] | None = None,
    ) -> TransportResponse:
        bare_url, auth_header = split_credentials(url)
        headers: dict[str, str] = {
            "Accept": "application/json",
            "User-Agent": _USER_AGENT,
        }
        if auth_header:
            headers["Authorization"] = auth_header

        data: bytes | None = None
        if params:
            encoded = urllib.parse.urlencode(params)
            if method in ("POST", "PUT"):
                data = encoded.encode()
                headers["Content-Type"] = "application/x-www-form-urlencoded"
            else:
                sep = "&" if urllib.parse.urlsplit(bare_url).query else "?"
                bare_url = f"{bare_url}{sep}{encoded}"
        elif method in ("POST", "PUT"):
            # Some servers reject body-less writes without an explicit length.
            data = b""

        logger.debug("%s %s", method, bare_url)
        req = urllib.request.Request(bare_url, data=data, headers=headers, method=method)
        try:
            with urllib.request.urlopen(req, timeout=self._timeout) as resp:
                return TransportResponse(status=resp.status, body=resp.read())
        except urllib.error.HTTPError as exc:
            # Non-2xx still carries a body the client may be able to decode
            # (the service reports validation failures this way).
            try:
                body = exc.read() or b""
            except (OSError, http.client.HTTPException) as read_exc:
                raise TransportError(
                    f"{method} {bare_url}", str(read_exc), status=exc.code, cause=read_exc,
                ) from read_exc
            logger.debug("%s %s -> HTTP %s", method, bare_url, exc.code)
            return TransportResponse(status=exc.code, body=body)
        except (urllib.error.URLError, OSError, http.client.HTTPException) as exc:
            reason = getattr(exc, "reason", exc)
            raise TransportError(f"{method} {bare_url}", str(reason), cause=exc) from exc
