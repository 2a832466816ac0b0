"""Combined speech + on-screen description request.

The system prompt carries one worked example of the expected JSON array.
Dropping it noticeably lowers how often the model answers with bare JSON.
"""

from vidscribe.builders import media_message

DEFAULT_MODEL = "google/gemini-2.5-pro"
DEFAULT_MAX_TOKENS = 8000

SEGMENT_FIELDS = ("timestamp", "endTime", "text", "visualDescription")

EXAMPLE_OUTPUT = """[
  {"timestamp": 0, "endTime": 4, "text": "Hello and welcome to this tutorial.", "visualDescription": "A person sits at a desk with a computer, facing the camera in a well-lit office."},
  {"timestamp": 4, "endTime": 8, "text": "Today we'll learn about video editing.", "visualDescription": "The speaker gestures toward the screen where editing software is visible."}
]"""

SYSTEM_PROMPT = f"""You are an expert video analyst that provides both transcription and visual descriptions.

Your task is to analyze the video and provide a structured output with:
1. Transcribed speech from the audio
2. Visual descriptions of what's happening on screen

Output your analysis as a JSON array of segments. Each segment should have exactly these fields:
- "timestamp": number (seconds from start)
- "endTime": number (seconds when segment ends)
- "text": string (transcribed speech, or empty if no speech)
- "visualDescription": string (description of what's visible on screen)

Create segments every 3-5 seconds, or when there's a significant scene change.
Keep visual descriptions concise but informative (1-2 sentences).
Format speech naturally without filler words.

Example output format:
{EXAMPLE_OUTPUT}

IMPORTANT: Return ONLY the JSON array, no other text."""

USER_PROMPT = (
    "Analyze this video. Transcribe all speech and describe the visual content "
    "for each segment. Return the result as a JSON array."
)


def build_visual_request(
    media_bytes: bytes,
    mime_type: str,
    model: str = DEFAULT_MODEL,
    max_tokens: int = DEFAULT_MAX_TOKENS,
) -> dict:
    """Chat-completion body asking for a JSON array of visual segments."""
    return {
        "model": model,
        "messages": [
            {"role": "system", "content": SYSTEM_PROMPT},
            media_message(USER_PROMPT, media_bytes, mime_type),
        ],
        "max_tokens": max_tokens,
    }
