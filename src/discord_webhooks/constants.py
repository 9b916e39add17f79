"""Constants used by modules in this package."""

#: Seconds to wait for Discord before giving up on a request.
DEFAULT_TIMEOUT = 20

#: A user agent specifically for the library, so Discord can tell who we are.
USER_AGENT = "discord-webhooks client"

#: Headers sent with every request. Per-transport headers are merged over these.
DEFAULT_HEADERS = {
    "User-Agent": USER_AGENT,
}

JSON_CONTENT_TYPE = "application/json"

#: Name of the multipart field that carries the JSON-encoded message.
PAYLOAD_JSON_FIELD = "payload_json"

#: Embed colours are 24-bit RGB values, so the top byte must be zero.
MIN_COLOR = 0
MAX_COLOR = 0xFFFFFF
