"""Posts, edits, and deletes messages through a Discord webhook.

Each method is a single HTTP exchange: encode, send once, then check the
status code. Nothing is retried, and every failure is raised to the caller.
"""

from __future__ import annotations

import json
import logging
from http import HTTPStatus
from typing import TYPE_CHECKING, Any, Self
from urllib.parse import quote

from discord_webhooks.discord_types import WebhookInfo
from discord_webhooks.encoding import build_query_string, encode_message
from discord_webhooks.errors import ApiError, DecodingError
from discord_webhooks.transport import RequestsTransport

if TYPE_CHECKING:  # pragma no cover
    from types import TracebackType

    from discord_webhooks.discord_types import Message, MessageEdit, QueryParams
    from discord_webhooks.transport import RawResponse, Transport

logger = logging.getLogger(__name__)


class WebhookClient:
    """A client for one webhook.

    Attributes:
        webhook_url: The webhook's URL, token included, e.g.
            `https://discord.com/api/webhooks/<id>/<token>`.
        transport: What requests are sent through. Defaults to a new
            `RequestsTransport`, which is closed along with the client.
    """

    def __init__(self, webhook_url: str, transport: Transport | None = None) -> None:
        self.webhook_url = webhook_url.rstrip("/")
        self._owns_transport = transport is None
        self.transport: Transport = (
            transport if transport is not None else RequestsTransport()
        )

    def post_message(self, message: Message) -> str | None:
        """Post a message through the webhook.

        Returns:
            The id of the new message. `wait=true` is always sent, so this is
            only `None` if Discord ignores it and answers with a 204.

        Raises:
            EncodingError: The message couldn't be encoded.
            TransportError: Discord couldn't be reached.
            ApiError: Discord answered with anything other than 200 or 204.
            DecodingError: Discord's answer didn't contain a message id.
        """
        url = f"{self.webhook_url}?{build_query_string(message.query_params)}"
        body, content_type = encode_message(message)
        response = self.transport.request(
            "POST", url, body=body, content_type=content_type
        )
        if response.status == HTTPStatus.NO_CONTENT:
            return None
        _expect_status(response, HTTPStatus.OK)
        data = _decode_json(response)
        if not isinstance(data, dict) or not isinstance(data.get("id"), str):
            raise DecodingError(
                f"No message id in Discord's response: {response.text}"
            )
        logger.debug("Posted message %s", data["id"])
        return data["id"]

    def edit_message(
        self,
        message_id: str,
        edit: MessageEdit,
        query_params: QueryParams | None = None,
    ) -> None:
        """Edit a message previously posted by this webhook.

        Discord only allows this for application-owned webhooks; for any
        other kind it answers with an error, which is raised as `ApiError`.

        Args:
            message_id: The id returned by `post_message`.
            edit: The new content. Anything left unset stays as it was.
            query_params: Needed when the message is in a thread.
        """
        url = f"{self._message_url(message_id)}?{build_query_string(query_params)}"
        body, content_type = encode_message(edit)
        response = self.transport.request(
            "PATCH", url, body=body, content_type=content_type
        )
        _expect_status(response, HTTPStatus.NO_CONTENT)

    def delete_message(
        self, message_id: str, query_params: QueryParams | None = None
    ) -> None:
        """Delete a message previously posted by this webhook.

        Unlike the other calls, no query string is sent unless `query_params`
        is given.
        """
        url = self._message_url(message_id)
        if query_params is not None:
            url = f"{url}?{build_query_string(query_params)}"
        response = self.transport.request("DELETE", url)
        _expect_status(response, HTTPStatus.NO_CONTENT)

    def get_webhook_info(self) -> WebhookInfo:
        """Fetch the webhook's own details."""
        response = self.transport.request("GET", self.webhook_url)
        _expect_status(response, HTTPStatus.OK)
        data = _decode_json(response)
        try:
            return WebhookInfo.from_json(data)
        except (KeyError, TypeError, ValueError, AttributeError) as e:
            raise DecodingError(
                f"Bad webhook object. {type(e).__name__}: {e}: {response.text}"
            ) from e

    def _message_url(self, message_id: str) -> str:
        # `safe=""` so a "/" in the id can't reach a different endpoint.
        return f"{self.webhook_url}/messages/{quote(message_id, safe='')}"

    def close(self) -> None:
        """Close the transport, if this client made it."""
        if self._owns_transport and isinstance(self.transport, RequestsTransport):
            self.transport.close()

    def __enter__(self) -> Self:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()


def _expect_status(response: RawResponse, expected: HTTPStatus) -> None:
    if response.status != expected:
        raise ApiError(response.status, response.text, expected=int(expected))


def _decode_json(response: RawResponse) -> Any:  # noqa: ANN401
    try:
        return json.loads(response.body)
    except ValueError as e:
        raise DecodingError(
            f"Discord sent invalid JSON. {type(e).__name__}: {e}: {response.text}"
        ) from e
