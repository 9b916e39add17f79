"""Sends requests to Discord and hands back what came back.

The client only ever talks to a `Transport`, so tests (or callers with their
own HTTP stack) can swap in anything with a matching `request` method.
`RequestsTransport` is the real one, backed by a `requests.Session` so
connections are reused between calls.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Protocol, Self

import requests

from discord_webhooks.constants import DEFAULT_HEADERS, DEFAULT_TIMEOUT
from discord_webhooks.errors import TransportError

if TYPE_CHECKING:  # pragma no cover
    from collections.abc import Mapping
    from types import TracebackType

logger = logging.getLogger(__name__)

_TOKEN_PATTERN = re.compile(r"(/webhooks/[^/?#]+/)[^/?#]+")


def redact_url(url: str) -> str:
    """Hide the token in a webhook URL, so it's safe to log.

    >>> redact_url("https://discord.com/api/webhooks/123/secret?wait=true")
    'https://discord.com/api/webhooks/123/***?wait=true'
    """
    return _TOKEN_PATTERN.sub(r"\1***", url)


@dataclass(slots=True, frozen=True)
class RawResponse:
    """A response before anyone has decided whether it's good news.

    Attributes:
        status: The HTTP status code.
        headers: The response headers. Lookups are case-insensitive when the
            response came from `RequestsTransport`.
        body: The response body, undecoded.
    """

    status: int
    headers: Mapping[str, str] = field(default_factory=dict)
    body: bytes = b""

    @property
    def text(self) -> str:
        return self.body.decode("utf-8", errors="replace")


class Transport(Protocol):
    def request(
        self,
        method: str,
        url: str,
        *,
        body: bytes | None = None,
        content_type: str | None = None,
    ) -> RawResponse:
        """Make one request and return the response, whatever its status.

        Raises:
            TransportError: No response was received.
        """
        ...


class RequestsTransport:
    """A `Transport` backed by a `requests.Session`.

    One instance can be shared by any number of clients and threads: each
    call builds its own request, and the session only holds the connection
    pool.

    Attributes:
        session: The session requests are made through.
        timeout: Seconds to wait for Discord, passed straight to `requests`.
        headers: Headers sent with every request.
    """

    def __init__(
        self,
        session: requests.Session | None = None,
        timeout: float | tuple[float, float] = DEFAULT_TIMEOUT,
        headers: Mapping[str, str] | None = None,
    ) -> None:
        self._owns_session = session is None
        self.session = session if session is not None else requests.Session()
        self.timeout = timeout
        self.headers = DEFAULT_HEADERS | dict(headers or {})

    def request(
        self,
        method: str,
        url: str,
        *,
        body: bytes | None = None,
        content_type: str | None = None,
    ) -> RawResponse:
        headers = dict(self.headers)
        if content_type is not None:
            headers["Content-Type"] = content_type
        safe_url = redact_url(url)
        logger.debug(
            "%s %s (%s, %d bytes)", method, safe_url, content_type, len(body or b"")
        )
        try:
            response = self.session.request(
                method, url, data=body, headers=headers, timeout=self.timeout
            )
        except requests.RequestException as e:
            # The exception's own message can include the full URL, token and all.
            raise TransportError(
                f"{method} {safe_url} failed: {type(e).__name__}"
            ) from e
        logger.debug(
            "%s %s: %d %s", method, safe_url, response.status_code, response.reason
        )
        return RawResponse(
            status=response.status_code,
            headers=response.headers,
            body=response.content,
        )

    def close(self) -> None:
        """Close the session, if this transport made it."""
        if self._owns_session:
            self.session.close()

    def __enter__(self) -> Self:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()
