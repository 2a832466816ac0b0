"""Thin CLI entry point: builds a TranscriptionRequest and runs the pipeline."""

import argparse
import logging
import sys
from pathlib import Path

from dotenv import load_dotenv

from vidscribe.config import load_config
from vidscribe.engine import TranscriptionPipeline
from vidscribe.errors import VidscribeError
from vidscribe.export import FORMATS, check_format, export
from vidscribe.fetch import fetch_video
from vidscribe.gateway import GatewayClient
from vidscribe.media import mime_type_for
from vidscribe.models import TranscriptionRequest


def _load_request(source: str, language: str | None) -> TranscriptionRequest:
    if source.startswith(("http://", "https://")):
        fetched = fetch_video(source)
        return TranscriptionRequest(
            media_bytes=fetched.data,
            mime_type=mime_type_for(fetched.file_name),
            language_hint=language,
            file_name=fetched.file_name,
            from_url=True,
        )

    path = Path(source)
    return TranscriptionRequest(
        media_bytes=path.read_bytes(),
        mime_type=mime_type_for(path.name),
        language_hint=language,
        file_name=path.name,
    )


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(
        prog="vidscribe",
        description="vidscribe: speech and visual transcription of videos via a multimodal AI gateway.",
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    sub = parser.add_subparsers(dest="command")

    tr = sub.add_parser("transcribe", help="Transcribe a video file or URL")
    tr.add_argument("video", help="Input video file or direct http(s) video URL")
    tr.add_argument("--visual", action="store_true", help="Add visual scene descriptions")
    tr.add_argument("--language", "-l", default=None, help="Spoken language code (default: auto-detect)")
    tr.add_argument("--format", "-f", choices=FORMATS, default="txt", help="Output format")
    tr.add_argument("--output", "-o", type=Path, help="Write the transcript here instead of stdout")
    tr.add_argument("--no-timestamps", action="store_true", help="Omit timestamps (or visual captions)")
    # SUPPRESS keeps a top-level -v from being reset by the subcommand default
    tr.add_argument("--verbose", "-v", action="store_true", default=argparse.SUPPRESS, help="Enable debug logging")

    serve = sub.add_parser("serve", help="Launch the web API")
    serve.add_argument("--port", type=int, default=8321, help="Port to listen on")
    serve.add_argument("--host", type=str, default="127.0.0.1", help="Host to bind to")

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
    )
    load_dotenv(override=False)

    if args.command is None:
        parser.print_help()
        sys.exit(0)

    if args.command == "serve":
        from vidscribe.web import create_app
        app = create_app()
        print(f"vidscribe API: http://{args.host}:{args.port}")
        app.run(host=args.host, port=args.port, debug=False)
        return

    try:
        check_format(args.format, visual=args.visual)
    except ValueError as e:
        tr.error(str(e))

    language = None if args.language in (None, "auto") else args.language

    def on_progress(step: str, frac: float) -> None:
        print(f"  [{frac:4.0%}] {step}", file=sys.stderr)

    try:
        req = _load_request(args.video, language)
        pipeline = TranscriptionPipeline(
            client=GatewayClient(load_config()),
            mode="visual" if args.visual else "standard",
            on_progress=on_progress,
        )
        segments = pipeline.run(req)
        content = export(segments, args.format, timestamps=not args.no_timestamps)
    except (VidscribeError, OSError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    if args.output:
        args.output.write_text(content, encoding="utf-8")
        print(f"Done! {len(segments)} segments written to {args.output}", file=sys.stderr)
    else:
        print(content)
