"""Exceptions raised by the webhook client.

Everything raised on purpose by this package is a `WebhookError`, so callers
can catch the whole family at once, or pick out the one they care about.
"""

from __future__ import annotations


class WebhookError(Exception):
    """Base class for all errors raised by this package."""


class EncodingError(WebhookError):
    """A message couldn't be turned into a request body."""


class TransportError(WebhookError):
    """The request never got a response, e.g. a refused connection or a timeout."""


class DecodingError(WebhookError):
    """Discord answered with a success status, but the body made no sense."""


class ApiError(WebhookError):
    """Discord answered with a status code we weren't expecting.

    Attributes:
        status: The HTTP status code of the response.
        body: The raw response body, so callers can see what Discord
            complained about.
        expected: The status code the operation was waiting for, if known.
    """

    def __init__(self, status: int, body: str, expected: int | None = None) -> None:
        self.status = status
        self.body = body
        self.expected = expected
        if expected is None:
            message = f"Bad Discord response (got {status}): {body}"
        else:
            message = (
                f"Bad Discord response (expected {expected}, got {status}): {body}"
            )
        super().__init__(message)
