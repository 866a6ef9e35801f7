"""Tests for voice journal transcription."""

import pytest
from fastapi import HTTPException

from app.config import settings
from app.main import app
from app.modules.speech.service import MOCK_TRANSCRIPTS, map_provider_error, validate_audio
from app.modules.speech.whisper import get_whisper_provider, resolve_extension

AUDIO = b"\x1aE\xdf\xa3" + b"\x00" * 2048


class _FakeWhisper:
    def __init__(self, transcript="", error=None):
        self.transcript = transcript
        self.error = error

    async def transcribe(self, audio_bytes, filename, content_type=None, language=None):
        if self.error:
            raise self.error
        return self.transcript


def _upload(client, content=AUDIO, content_type="audio/webm", filename="recording.webm"):
    return client.post("/api/speech-to-text", files={"audio": (filename, content, content_type)})


def test_resolve_extension_prefers_filename():
    assert resolve_extension("note.MP3", "audio/webm") == "mp3"


def test_resolve_extension_from_content_type():
    assert resolve_extension("blob", "audio/webm;codecs=opus") == "webm"
    assert resolve_extension("", "audio/x-wav") == "wav"


def test_validate_audio_rejects_non_audio():
    with pytest.raises(HTTPException) as exc:
        validate_audio("image/png", 10)
    assert exc.value.status_code == 400


def test_validate_audio_rejects_oversized(monkeypatch):
    monkeypatch.setattr(settings, "max_audio_bytes", 100)
    with pytest.raises(HTTPException) as exc:
        validate_audio("audio/webm", 101)
    assert exc.value.status_code == 413


@pytest.mark.parametrize("message,status", [
    ("You exceeded your current quota", 429),
    ("Authentication failed: bad key", 503),
    ("network unreachable", 503),
    ("something odd", 500),
])
def test_map_provider_error(message, status):
    assert map_provider_error(RuntimeError(message)).status_code == status


def test_missing_file_is_bad_request(client):
    assert client.post("/api/speech-to-text").status_code == 400


def test_non_audio_upload_is_bad_request(client):
    response = _upload(client, content=b"hello", content_type="text/plain", filename="notes.txt")
    assert response.status_code == 400


def test_mock_transcript_in_development(client, monkeypatch):
    monkeypatch.setattr(settings, "environment", "development")

    body = _upload(client).json()

    assert body["source"] == "mock"
    assert body["transcript"] in MOCK_TRANSCRIPTS


def test_unconfigured_provider_fails_in_production(client, monkeypatch):
    monkeypatch.setattr(settings, "environment", "production")
    assert _upload(client).status_code == 500


def test_whisper_transcript(client):
    app.dependency_overrides[get_whisper_provider] = lambda: _FakeWhisper("Feeling calm today")

    body = _upload(client).json()

    assert body["transcript"] == "Feeling calm today"
    assert body["source"] == "whisper"
    assert body["duration"] > 0


def test_empty_transcript_is_unprocessable(client):
    app.dependency_overrides[get_whisper_provider] = lambda: _FakeWhisper("")
    assert _upload(client).status_code == 422


def test_oversized_upload_is_rejected_before_transcribing(client, monkeypatch):
    app.dependency_overrides[get_whisper_provider] = lambda: _FakeWhisper("Too long")
    monkeypatch.setattr(settings, "max_audio_bytes", 100)

    response = _upload(client, content=b"\x00" * 500)

    assert response.status_code == 413


def test_upload_at_the_limit_is_accepted(client, monkeypatch):
    app.dependency_overrides[get_whisper_provider] = lambda: _FakeWhisper("Short note")
    monkeypatch.setattr(settings, "max_audio_bytes", 100)

    assert _upload(client, content=b"\x00" * 100).json()["transcript"] == "Short note"


def test_unsupported_format_is_bad_request(client):
    app.dependency_overrides[get_whisper_provider] = lambda: _FakeWhisper(error=ValueError("Unsupported audio format: aiff"))
    assert _upload(client, content_type="audio/aiff", filename="clip.aiff").status_code == 400


def test_speech_health(client):
    body = client.get("/api/speech-to-text/health").json()
    assert "audio/webm" in body["supported_formats"]
