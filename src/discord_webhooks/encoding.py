"""Turns messages into request bodies, and query parameters into query strings.

A message without attachments is sent as plain JSON. As soon as there's one
file, the whole thing becomes `multipart/form-data`: the JSON goes in a
`payload_json` field, and each file gets its own `files[n]` part, as
documented [here](https://discord.com/developers/docs/reference#uploading-files).
"""

from __future__ import annotations

import json
import logging
from typing import TYPE_CHECKING, Any
from urllib.parse import urlencode

from urllib3 import encode_multipart_formdata

from discord_webhooks.constants import JSON_CONTENT_TYPE, PAYLOAD_JSON_FIELD
from discord_webhooks.discord_types import Message
from discord_webhooks.errors import EncodingError

if TYPE_CHECKING:  # pragma no cover
    from discord_webhooks.discord_types import (
        File,
        MessageDict,
        MessageEdit,
        MessageEditDict,
        QueryParams,
    )

logger = logging.getLogger(__name__)


def to_payload(message: Message | MessageEdit) -> MessageDict | MessageEditDict:
    """Get the JSON-ready body of a message, without its files or query params."""
    try:
        return message.to_dict()
    except (TypeError, ValueError, AttributeError) as e:
        raise EncodingError(f"Couldn't encode message. {type(e).__name__}: {e}") from e


def encode_message(message: Message | MessageEdit) -> tuple[bytes, str]:
    """Encode a message as a request body.

    Returns:
        The body, and the value for its `Content-Type` header.

    Raises:
        EncodingError: Some part of the message can't be serialised.
    """
    payload = to_payload(message)
    try:
        payload_json = json.dumps(payload, allow_nan=False)
    except (TypeError, ValueError) as e:
        raise EncodingError(f"Couldn't encode message. {type(e).__name__}: {e}") from e

    files = message.files if isinstance(message, Message) else None
    if not files:
        return payload_json.encode(), JSON_CONTENT_TYPE
    return _encode_multipart(payload_json, files)


def _encode_multipart(payload_json: str, files: list[File]) -> tuple[bytes, str]:
    fields: list[tuple[str, Any]] = [(PAYLOAD_JSON_FIELD, payload_json)]
    for index, file in enumerate(files):
        if not isinstance(file.data, bytes | bytearray):
            raise EncodingError(
                f"Attachment {file.name!r} must be bytes,"
                f" not {type(file.data).__name__}"
            )
        fields.append((f"files[{index}]", (file.name, bytes(file.data))))
    try:
        body, content_type = encode_multipart_formdata(fields)
    except (TypeError, ValueError) as e:
        raise EncodingError(
            f"Couldn't encode attachments. {type(e).__name__}: {e}"
        ) from e
    logger.debug("Encoded %d attachments in %d bytes", len(files), len(body))
    return body, content_type


def build_query_string(query_params: QueryParams | None) -> str:
    """Build the query string for a request to the webhook.

    `wait=true` is always included, because without it Discord answers with
    an empty 204 and we never find out the message's id. `thread_id` is
    added after it when there is one.
    """
    params = [("wait", "true")]
    if query_params is not None and query_params.thread_id:
        params.append(("thread_id", query_params.thread_id))
    return urlencode(params)
