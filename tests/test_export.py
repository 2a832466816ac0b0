"""Tests for transcript export formats."""

import json
from datetime import datetime, timezone

import pytest

from vidscribe.export import (
    check_format,
    export,
    format_clock,
    segments_to_rtf,
    segments_to_srt,
    segments_to_text,
    segments_to_vtt,
    visual_segments_to_json,
    visual_segments_to_text,
)
from vidscribe.models import Segment, VisualSegment

SEGMENTS = [
    Segment(text="Hello there.", start=0, end=5),
    Segment(text="How are you?", start=65, end=70),
]

VISUAL = [
    VisualSegment(id="seg-0-a", timestamp=0, end_time=4, text="hi", visual_description="a room"),
    VisualSegment(id="seg-1-a", timestamp=4, end_time=8.5, text="", visual_description="a door"),
]


class TestFormatClock:
    @pytest.mark.parametrize("seconds, expected", [(0, "00:00"), (65.9, "01:05"), (3725, "62:05")])
    def test_values(self, seconds, expected):
        assert format_clock(seconds) == expected


class TestStandardText:
    def test_with_timestamps(self):
        assert segments_to_text(SEGMENTS) == "[00:00] Hello there.\n\n[01:05] How are you?"

    def test_without_timestamps(self):
        assert segments_to_text(SEGMENTS, timestamps=False) == "Hello there. How are you?"

    def test_rtf(self):
        rtf = segments_to_rtf(SEGMENTS)
        assert rtf.startswith("{\\rtf1\\ansi\\deff0 {\\fonttbl {\\f0 Arial;}}\n\\f0\\fs24 ")
        assert "[00:00] Hello there.\\par \\par [01:05]" in rtf
        assert rtf.endswith("\n}")


class TestVisualText:
    def test_with_visual_captions(self):
        text = visual_segments_to_text(VISUAL)
        assert text.split("\n\n")[0] == "[00:00] hi\n  Visual: a room"

    def test_without_visual_captions(self):
        assert visual_segments_to_text(VISUAL, show_visual=False) == "[00:00] hi\n\n[00:04] "

    def test_json(self):
        when = datetime(2024, 1, 2, 3, 4, 5, tzinfo=timezone.utc)
        data = json.loads(visual_segments_to_json(VISUAL, exported_at=when))
        assert data["segments"][1] == {
            "timestamp": 4,
            "endTime": 8.5,
            "text": "",
            "visualDescription": "a door",
        }
        assert data["metadata"] == {"totalSegments": 2, "exportedAt": "2024-01-02T03:04:05+00:00"}


class TestSubtitles:
    def test_srt(self):
        srt = segments_to_srt(SEGMENTS)
        assert srt.startswith("1\n00:00:00,000 --> 00:00:05,000\nHello there.\n")
        assert "2\n00:01:05,000 --> 00:01:10,000\nHow are you?" in srt

    def test_vtt_visual(self):
        vtt = segments_to_vtt(VISUAL)
        assert vtt.startswith("WEBVTT\n\n00:00:00.000 --> 00:00:04.000\nhi\n")
        assert "00:00:04.000 --> 00:00:08.500" in vtt


class TestExportDispatch:
    def test_txt_picks_renderer(self):
        assert export(SEGMENTS, "txt") == segments_to_text(SEGMENTS)
        assert export(VISUAL, "txt") == visual_segments_to_text(VISUAL)

    def test_rtf_rejected_for_visual(self):
        with pytest.raises(ValueError, match="RTF"):
            export(VISUAL, "rtf")

    def test_json_rejected_for_standard(self):
        with pytest.raises(ValueError, match="JSON"):
            export(SEGMENTS, "json")

    def test_unknown_format(self):
        with pytest.raises(ValueError, match="Unknown export format"):
            export(SEGMENTS, "docx")

    @pytest.mark.parametrize(
        "fmt, visual, ok",
        [("json", True, True), ("json", False, False), ("rtf", True, False), ("rtf", False, True), ("srt", True, True)],
    )
    def test_check_format(self, fmt, visual, ok):
        if ok:
            check_format(fmt, visual)
        else:
            with pytest.raises(ValueError):
                check_format(fmt, visual)
