"""Orchestrator: drives one transcription attempt through its visible steps.

Two timelines run side by side. ProgressSimulator ticks the cosmetic steps
(uploading, extracting, analyzing, formatting, aligning) on a fixed timer and
does no work. The ``transcribing`` step is the only one bound to real work:
it blocks on the gateway call and the response parser.
"""

import logging
import time
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable

from vidscribe.gateway import GatewayClient
from vidscribe.models import Segment, TranscriptionRequest, VisualSegment
from vidscribe.parsers.standard import parse_transcript
from vidscribe.service import transcribe_standard, transcribe_visual

logger = logging.getLogger(__name__)

REAL_WORK = None

# (step, cosmetic seconds); REAL_WORK marks the gateway call
STANDARD_SCHEDULE: list[tuple[str, float | None]] = [
    ("uploading", 1.5),
    ("extracting", 2.0),
    ("transcribing", REAL_WORK),
    ("formatting", 1.0),
]

VISUAL_SCHEDULE: list[tuple[str, float | None]] = [
    ("uploading", 1.5),
    ("extracting", 2.0),
    ("analyzing", 2.5),
    ("transcribing", REAL_WORK),
    ("aligning", 1.5),
]

URL_UPLOAD_SECONDS = 0.5
COMPLETE_HOLD_SECONDS = 1.0
TICKS = 20


class AppState(str, Enum):
    UPLOAD = "upload"
    PROCESSING = "processing"
    RESULT = "result"


class ProgressSimulator:
    """Scripted progress for one step: TICKS+1 updates spread over ``duration``."""

    def __init__(
        self,
        on_progress: Callable[[str, float], None],
        sleep: Callable[[float], None] = time.sleep,
        ticks: int = TICKS,
    ):
        self.on_progress = on_progress
        self.sleep = sleep
        self.ticks = ticks

    def run(self, step: str, duration: float) -> None:
        interval = duration / self.ticks
        for i in range(self.ticks + 1):
            self.sleep(interval)
            self.on_progress(step, i / self.ticks)


@dataclass
class PipelineStatus:
    state: AppState = AppState.UPLOAD
    step: str = "uploading"
    progress: float = 0.0
    error: str | None = None

    def to_dict(self) -> dict:
        data = {"state": self.state.value, "step": self.step, "progress": round(self.progress, 3)}
        if self.error:
            data["error"] = self.error
        return data


@dataclass
class TranscriptionPipeline:
    """State machine for one session: upload -> processing -> result.

    Any failure while processing returns the machine to ``upload`` with the
    error recorded and re-raises. An in-flight run cannot be cancelled.
    """

    client: GatewayClient
    mode: str = "standard"
    on_progress: Callable[[str, float], None] | None = None
    sleep: Callable[[float], None] = time.sleep
    status: PipelineStatus = field(default_factory=PipelineStatus)
    segments: list = field(default_factory=list)
    transcript: str = ""

    def __post_init__(self):
        if self.mode not in ("standard", "visual"):
            raise ValueError(f"Unknown transcription mode: {self.mode!r}")
        self._simulator = ProgressSimulator(self._progress, sleep=self.sleep)

    @property
    def state(self) -> AppState:
        return self.status.state

    @property
    def schedule(self) -> list[tuple[str, float | None]]:
        return VISUAL_SCHEDULE if self.mode == "visual" else STANDARD_SCHEDULE

    def _progress(self, step: str, frac: float) -> None:
        if step != self.status.step:
            logger.debug("Pipeline step -> %s", step)
        self.status.step = step
        self.status.progress = frac
        if self.on_progress:
            self.on_progress(step, frac)

    def run(self, request: TranscriptionRequest) -> list[Segment] | list[VisualSegment]:
        if self.status.state == AppState.PROCESSING:
            raise RuntimeError("A transcription is already in progress")

        self.status = PipelineStatus(state=AppState.PROCESSING)
        self.segments = []
        self.transcript = ""

        try:
            segments = self._run_steps(request)
        except Exception as e:
            logger.warning("Transcription of %s failed: %s", request.file_name, e)
            self.status = PipelineStatus(state=AppState.UPLOAD, error=str(e))
            self.segments = []
            self.transcript = ""
            raise

        self.segments = segments
        self.status.state = AppState.RESULT
        return segments

    def _run_steps(self, request: TranscriptionRequest) -> list:
        segments: list = []
        for step, seconds in self.schedule:
            if seconds is REAL_WORK:
                self._progress(step, 0.0)
                if self.mode == "visual":
                    segments = transcribe_visual(request, self.client)
                else:
                    self.transcript = transcribe_standard(request, self.client)
                self._progress(step, 1.0)
                continue

            if step == "uploading" and request.from_url:
                seconds = URL_UPLOAD_SECONDS
            self._simulator.run(step, seconds)

        if self.mode == "standard":
            segments = parse_transcript(self.transcript)

        self._progress("complete", 1.0)
        self.sleep(COMPLETE_HOLD_SECONDS)
        return segments

    def reset(self) -> None:
        """Start over: back to ``upload`` with nothing retained."""
        if self.status.state == AppState.PROCESSING:
            raise RuntimeError("Cannot reset while a transcription is in progress")
        self.status = PipelineStatus()
        self.segments = []
        self.transcript = ""

    def edit_text(self, index: int, text: str) -> None:
        """Replace the text of one segment in place (other fields untouched)."""
        if self.status.state != AppState.RESULT:
            raise RuntimeError("No transcript to edit")
        self.segments[index].text = text
