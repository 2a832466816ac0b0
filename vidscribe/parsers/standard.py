"""Split a plain-text transcript into timed segments.

The gateway returns no timing in standard mode, so every sentence gets a
fixed 5 second slot laid end to end from 0. These timestamps are an
approximation for display and editing, not real alignment.
"""

import re

from vidscribe.models import Segment

SEGMENT_SECONDS = 5.0

# A run of non-terminators followed by terminators, or the trailing remainder.
_SENTENCE_RE = re.compile(r"[^.!?]+(?:[.!?]+|$)")


def split_sentences(text: str) -> list[str]:
    """Return trimmed, non-empty sentence units, terminators kept."""
    units = _SENTENCE_RE.findall(text)
    if not units:
        units = [text]
    return [u.strip() for u in units if u.strip()]


def parse_transcript(text: str, seconds_per_segment: float = SEGMENT_SECONDS) -> list[Segment]:
    """Turn transcript text into back-to-back segments of equal width."""
    segments: list[Segment] = []
    for i, sentence in enumerate(split_sentences(text)):
        segments.append(
            Segment(
                text=sentence,
                start=i * seconds_per_segment,
                end=(i + 1) * seconds_per_segment,
            )
        )
    return segments
