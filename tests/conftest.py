"""Shared test fixtures."""

import json
from unittest.mock import MagicMock

import pytest

from vidscribe.config import GatewayConfig

VIDEO_BYTES = b"\x00\x00\x00\x18ftypmp42fake video payload"


@pytest.fixture
def gateway_config() -> GatewayConfig:
    return GatewayConfig(api_key="test-key", endpoint="https://gateway.test/v1/chat/completions")


@pytest.fixture
def video_bytes() -> bytes:
    return VIDEO_BYTES


@pytest.fixture
def make_response():
    """Factory for fake ``requests`` responses."""

    def _make(status: int = 200, content: str | None = None, body: str | None = None):
        resp = MagicMock()
        resp.status_code = status
        resp.ok = status < 400
        if body is None:
            body = json.dumps({"choices": [{"message": {"content": content or ""}}]})
        resp.text = body
        resp.json.side_effect = lambda: json.loads(body)
        return resp

    return _make
