"""Tests for MIME type and language lookups."""

import pytest

from vidscribe.media import (
    LANGUAGE_NAMES,
    extension_of,
    language_name,
    mime_type_for,
    resolve_mime_type,
)


class TestResolveMimeType:
    @pytest.mark.parametrize(
        "ext, expected",
        [
            ("mp4", "video/mp4"),
            ("mov", "video/quicktime"),
            ("avi", "video/x-msvideo"),
            ("mkv", "video/x-matroska"),
            ("webm", "video/webm"),
            ("m4v", "video/x-m4v"),
            ("mp3", "audio/mpeg"),
            ("wav", "audio/wav"),
            ("m4a", "audio/mp4"),
        ],
    )
    def test_known_extensions(self, ext, expected):
        assert resolve_mime_type(ext) == expected

    def test_case_and_dot_insensitive(self):
        assert resolve_mime_type(".MOV") == "video/quicktime"

    @pytest.mark.parametrize("ext", ["flv", "txt", "", None])
    def test_unknown_defaults_to_mp4(self, ext):
        assert resolve_mime_type(ext) == "video/mp4"


class TestFileNames:
    def test_extension_of(self):
        assert extension_of("Clip.Final.WEBM") == "webm"

    def test_missing_extension_defaults_to_mp4(self):
        assert extension_of("recording") == "mp4"
        assert extension_of(None) == "mp4"

    def test_mime_type_for(self):
        assert mime_type_for("talk.mkv") == "video/x-matroska"


class TestLanguageName:
    def test_table_has_eleven_languages(self):
        assert len(LANGUAGE_NAMES) == 11

    def test_known_code(self):
        assert language_name("ja") == "Japanese"

    def test_unknown_code_passes_through(self):
        assert language_name("sv") == "sv"
