from __future__ import annotations

import os
from pathlib import Path

import pytest
from dotenv import load_dotenv

from discord_webhooks.transport import RawResponse

# Loads the fake environment variables, then any real ones over the top
load_dotenv(Path(__file__).parents[1] / ".env.example")
load_dotenv(Path(__file__).parents[1] / ".env", override=True)


def pytest_addoption(parser: pytest.Parser) -> None:
    parser.addoption(
        "--side-effects",
        action="store_true",
        default=False,
        help="run tests that have side effects, like posting to discord",
    )


def pytest_configure(config: pytest.Config) -> None:
    config.addinivalue_line(
        "markers", "side_effects: mark test as using real APIs (has side effects)"
    )


def pytest_collection_modifyitems(
    config: pytest.Config, items: list[pytest.Item]
) -> None:
    if not config.getoption("--side-effects"):
        skip_real = pytest.mark.skip(reason="need --side-effects option to run")
        for item in items:
            if "side_effects" in item.keywords:
                item.add_marker(skip_real)


class FakeTransport:
    """Records every request, and answers each one with the next canned response."""

    def __init__(self, *responses: RawResponse) -> None:
        self.responses = list(responses)
        self.requests: list[dict[str, object]] = []

    def request(
        self,
        method: str,
        url: str,
        *,
        body: bytes | None = None,
        content_type: str | None = None,
    ) -> RawResponse:
        self.requests.append({
            "method": method,
            "url": url,
            "body": body,
            "content_type": content_type,
        })
        return self.responses.pop(0)


@pytest.fixture
def webhook_url() -> str:
    return os.environ["WEBHOOK_URL"]


@pytest.fixture
def fake_transport() -> type[FakeTransport]:
    return FakeTransport
