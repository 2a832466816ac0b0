"""Parse the model's visual-analysis answer into VisualSegments.

The answer should be a bare JSON array but is often wrapped in prose or code
fences. Strategies are tried in order; the last one always succeeds, so the
pipeline yields at least one segment for any 2xx answer.
"""

import json
import logging
import math
import re
import uuid
from typing import Callable

from vidscribe.models import VisualSegment

logger = logging.getLogger(__name__)

SLOT_SECONDS = 5
FALLBACK_END = 30.0
FALLBACK_DESCRIPTION = "Video content analyzed"

_ARRAY_RE = re.compile(r"\[.*\]", re.DOTALL)
_FENCE_RE = re.compile(r"```json|```")


def _number(value, default: float) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return default
    if not math.isfinite(value):
        return default
    return value


def _string(value) -> str:
    if value is None:
        return ""
    return value if isinstance(value, str) else str(value)


def _make_segment(index: int, item, nonce: str) -> VisualSegment:
    fields = item if isinstance(item, dict) else {}
    return VisualSegment(
        id=f"seg-{index}-{nonce}",
        timestamp=_number(fields.get("timestamp"), index * SLOT_SECONDS),
        end_time=_number(fields.get("endTime"), (index + 1) * SLOT_SECONDS),
        text=_string(fields.get("text")),
        visual_description=_string(fields.get("visualDescription")),
    )


def parse_bracketed_json(raw: str) -> list[VisualSegment] | None:
    """Strict-parse the span from the first '[' to the last ']'."""
    match = _ARRAY_RE.search(raw)
    if match is None:
        return None
    try:
        items = json.loads(match.group(0))
    except json.JSONDecodeError as e:
        logger.warning("Visual response JSON parse error: %s", e)
        return None
    if not isinstance(items, list) or not items:
        return None

    nonce = uuid.uuid4().hex[:12]
    return [_make_segment(i, item, nonce) for i, item in enumerate(items)]


def fallback_segment(raw: str) -> list[VisualSegment]:
    """Whole answer, fences stripped, as one 0-30s segment."""
    return [
        VisualSegment(
            id=f"seg-0-{uuid.uuid4().hex[:12]}",
            timestamp=0.0,
            end_time=FALLBACK_END,
            text=_FENCE_RE.sub("", raw).strip(),
            visual_description=FALLBACK_DESCRIPTION,
        )
    ]


STRATEGIES: list[Callable[[str], list[VisualSegment] | None]] = [
    parse_bracketed_json,
    fallback_segment,
]


def parse_visual_response(raw: str) -> list[VisualSegment]:
    """Return segments in the order the model emitted them (not re-sorted)."""
    logger.debug("Raw visual response: %s", raw[:500])
    for strategy in STRATEGIES:
        segments = strategy(raw)
        if segments:
            if strategy is fallback_segment:
                logger.warning("Visual response was not a JSON array; using fallback segment")
            return segments
    return fallback_segment(raw)
