"""Transcript export: plain text, RTF, JSON and subtitle renderings."""

import json
from datetime import datetime, timezone

from vidscribe.models import Segment, VisualSegment

FORMATS = ("txt", "rtf", "json", "srt", "vtt")


def format_clock(seconds: float) -> str:
    mins = int(seconds // 60)
    secs = int(seconds % 60)
    return f"{mins:02d}:{secs:02d}"


def _format_srt_time(seconds: float) -> str:
    h = int(seconds // 3600)
    m = int((seconds % 3600) // 60)
    s = int(seconds % 60)
    ms = int((seconds % 1) * 1000)
    return f"{h:02d}:{m:02d}:{s:02d},{ms:03d}"


def _format_vtt_time(seconds: float) -> str:
    return _format_srt_time(seconds).replace(",", ".")


def _span(seg: Segment | VisualSegment) -> tuple[float, float]:
    if isinstance(seg, VisualSegment):
        return seg.timestamp, seg.end_time
    return seg.start, seg.end


def segments_to_text(segments: list[Segment], timestamps: bool = True) -> str:
    if timestamps:
        return "\n\n".join(f"[{format_clock(seg.start)}] {seg.text}" for seg in segments)
    return " ".join(seg.text for seg in segments)


def segments_to_rtf(segments: list[Segment], timestamps: bool = True) -> str:
    body = segments_to_text(segments, timestamps).replace("\n", "\\par ")
    return "{\\rtf1\\ansi\\deff0 {\\fonttbl {\\f0 Arial;}}\n\\f0\\fs24 " + body + "\n}"


def visual_segments_to_text(segments: list[VisualSegment], show_visual: bool = True) -> str:
    blocks = []
    for seg in segments:
        block = f"[{format_clock(seg.timestamp)}] {seg.text}"
        if show_visual:
            block += f"\n  Visual: {seg.visual_description}"
        blocks.append(block)
    return "\n\n".join(blocks)


def visual_segments_to_json(segments: list[VisualSegment], exported_at: datetime | None = None) -> str:
    exported_at = exported_at or datetime.now(timezone.utc)
    data = {
        "segments": [
            {
                "timestamp": seg.timestamp,
                "endTime": seg.end_time,
                "text": seg.text,
                "visualDescription": seg.visual_description,
            }
            for seg in segments
        ],
        "metadata": {
            "totalSegments": len(segments),
            "exportedAt": exported_at.isoformat(),
        },
    }
    return json.dumps(data, indent=2)


def segments_to_srt(segments: list[Segment] | list[VisualSegment]) -> str:
    lines: list[str] = []
    for i, seg in enumerate(segments, 1):
        start, end = _span(seg)
        lines.append(str(i))
        lines.append(f"{_format_srt_time(start)} --> {_format_srt_time(end)}")
        lines.append(seg.text or "")
        lines.append("")
    return "\n".join(lines)


def segments_to_vtt(segments: list[Segment] | list[VisualSegment]) -> str:
    lines: list[str] = ["WEBVTT", ""]
    for seg in segments:
        start, end = _span(seg)
        lines.append(f"{_format_vtt_time(start)} --> {_format_vtt_time(end)}")
        lines.append(seg.text or "")
        lines.append("")
    return "\n".join(lines)


def check_format(fmt: str, visual: bool) -> None:
    """Raise ValueError unless ``fmt`` can render a transcript of this kind."""
    if fmt not in FORMATS:
        raise ValueError(f"Unknown export format: {fmt!r} (expected one of {', '.join(FORMATS)})")
    if fmt == "rtf" and visual:
        raise ValueError("RTF export is only available for standard transcripts")
    if fmt == "json" and not visual:
        raise ValueError("JSON export is only available for visual transcripts")


def export(segments: list, fmt: str, timestamps: bool = True) -> str:
    """Render ``segments`` in ``fmt``. ``timestamps`` toggles clocks (txt/rtf)
    or visual descriptions (visual txt)."""
    visual = bool(segments) and isinstance(segments[0], VisualSegment)
    if segments or fmt != "json":
        check_format(fmt, visual)

    if fmt == "txt":
        if visual:
            return visual_segments_to_text(segments, show_visual=timestamps)
        return segments_to_text(segments, timestamps)
    if fmt == "rtf":
        return segments_to_rtf(segments, timestamps)
    if fmt == "json":
        return visual_segments_to_json(segments)
    if fmt == "srt":
        return segments_to_srt(segments)
    return segments_to_vtt(segments)
