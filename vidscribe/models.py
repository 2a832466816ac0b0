"""Shared data types used across vidscribe."""

from dataclasses import dataclass


@dataclass
class Segment:
    """A timed span of transcript text (standard mode)."""

    text: str
    start: float
    end: float
    speaker: str | None = None

    def to_dict(self) -> dict:
        data = {"text": self.text, "start": self.start, "end": self.end}
        if self.speaker is not None:
            data["speaker"] = self.speaker
        return data


@dataclass
class VisualSegment:
    """A timed span combining spoken text and an on-screen description."""

    id: str
    timestamp: float
    end_time: float
    text: str = ""
    visual_description: str = ""
    thumbnail_url: str | None = None

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "timestamp": self.timestamp,
            "endTime": self.end_time,
            "text": self.text,
            "visualDescription": self.visual_description,
            "thumbnailUrl": self.thumbnail_url,
        }


@dataclass
class TranscriptionRequest:
    """One outbound transcription attempt. Never persisted."""

    media_bytes: bytes
    mime_type: str = "video/mp4"
    language_hint: str | None = None
    file_name: str = "unknown"
    from_url: bool = False
