"""Gateway configuration, read from the environment at request time."""

import os
from dataclasses import dataclass
from typing import Mapping

from vidscribe.errors import ConfigurationError

API_KEY_ENV = "AI_GATEWAY_API_KEY"


@dataclass
class GatewayConfig:
    """Connection settings for the multimodal completion endpoint."""

    api_key: str | None = None
    endpoint: str = "https://ai.gateway.lovable.dev/v1/chat/completions"
    standard_model: str = "google/gemini-2.5-flash"
    visual_model: str = "google/gemini-2.5-pro"
    max_tokens: int = 8000
    timeout: float | None = None


def _number(environ: Mapping[str, str], name: str, cast):
    raw = environ.get(name)
    if raw is None or raw == "":
        return None
    try:
        return cast(raw)
    except ValueError as e:
        raise ConfigurationError(f"{name} must be a number, got {raw!r}") from e


def load_config(environ: Mapping[str, str] | None = None) -> GatewayConfig:
    """Build a GatewayConfig from ``environ`` (defaults to ``os.environ``).

    A missing API key is not an error here; GatewayClient refuses to start
    without one.
    """
    env = os.environ if environ is None else environ
    defaults = GatewayConfig()

    max_tokens = _number(env, "VIDSCRIBE_MAX_TOKENS", int)
    if max_tokens is not None and max_tokens <= 0:
        raise ConfigurationError(f"VIDSCRIBE_MAX_TOKENS must be positive, got {max_tokens}")

    return GatewayConfig(
        api_key=env.get(API_KEY_ENV) or None,
        endpoint=env.get("VIDSCRIBE_GATEWAY_URL") or defaults.endpoint,
        standard_model=env.get("VIDSCRIBE_STANDARD_MODEL") or defaults.standard_model,
        visual_model=env.get("VIDSCRIBE_VISUAL_MODEL") or defaults.visual_model,
        max_tokens=max_tokens or defaults.max_tokens,
        timeout=_number(env, "VIDSCRIBE_GATEWAY_TIMEOUT", float),
    )
