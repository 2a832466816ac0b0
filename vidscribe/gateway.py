"""HTTP client for the multimodal chat-completion gateway."""

import logging

import requests

from vidscribe.config import API_KEY_ENV, GatewayConfig
from vidscribe.errors import (
    ConfigurationError,
    QuotaExceeded,
    RateLimited,
    TransportError,
    UpstreamError,
)

logger = logging.getLogger(__name__)


class GatewayClient:
    """Sends one completion request per call. No retries.

    Raises RateLimited (429), QuotaExceeded (402), UpstreamError (other
    non-2xx or an unreadable body) and TransportError (no response).
    """

    def __init__(self, config: GatewayConfig, session: requests.Session | None = None):
        if not config.api_key:
            raise ConfigurationError(f"{API_KEY_ENV} is not configured")
        self.config = config
        self._http = session or requests

    def invoke(self, payload: dict) -> dict:
        """POST ``payload`` and return the decoded JSON response."""
        logger.info("Sending request to AI gateway (model=%s)", payload.get("model"))
        try:
            resp = self._http.post(
                self.config.endpoint,
                json=payload,
                headers={
                    "Authorization": f"Bearer {self.config.api_key}",
                    "Content-Type": "application/json",
                },
                timeout=self.config.timeout,
            )
        except requests.RequestException as e:
            logger.error("AI gateway transport failure: %s", e)
            raise TransportError(f"AI Gateway request failed: {e}") from e

        if not 200 <= resp.status_code < 300:
            body = resp.text
            logger.error("AI gateway error: %s %s", resp.status_code, body[:500])
            if resp.status_code == 429:
                raise RateLimited()
            if resp.status_code == 402:
                raise QuotaExceeded()
            raise UpstreamError(resp.status_code, body)

        try:
            return resp.json()
        except ValueError as e:
            raise UpstreamError(resp.status_code, resp.text) from e

    def complete(self, payload: dict, default: str = "") -> str:
        """Invoke and return ``choices[0].message.content`` (or ``default``)."""
        return message_content(self.invoke(payload), default)


def message_content(data: dict, default: str = "") -> str:
    try:
        content = data["choices"][0]["message"]["content"]
    except (KeyError, IndexError, TypeError):
        return default
    return content if isinstance(content, str) and content else default
