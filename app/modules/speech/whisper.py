"""
Whisper speech-to-text provider.

Example:
    whisper = get_whisper_provider()
    if whisper:
        transcript = await whisper.transcribe(audio_bytes, "recording.webm", "audio/webm")
"""

from functools import lru_cache
from typing import Optional

from openai import AsyncOpenAI

from app.config import settings

CONTENT_TYPES = {
    "webm": "audio/webm",
    "mp4": "audio/mp4",
    "mp3": "audio/mpeg",
    "mpeg": "audio/mpeg",
    "mpga": "audio/mpeg",
    "wav": "audio/wav",
    "m4a": "audio/m4a",
    "ogg": "audio/ogg",
    "oga": "audio/ogg",
    "flac": "audio/flac",
}

# MIME subtype -> extension, for browser blobs uploaded without a usable filename
_SUBTYPE_EXTENSIONS = {
    "webm": "webm",
    "mp4": "mp4",
    "mpeg": "mp3",
    "mp3": "mp3",
    "wav": "wav",
    "x-wav": "wav",
    "wave": "wav",
    "ogg": "ogg",
    "m4a": "m4a",
    "x-m4a": "m4a",
    "flac": "flac",
}


class WhisperProvider:
    """OpenAI Whisper transcription over the async client."""

    SUPPORTED_FORMATS = set(CONTENT_TYPES)

    def __init__(self, api_key: str, model: str = "whisper-1", timeout: float = 60.0):
        self.client = AsyncOpenAI(api_key=api_key, timeout=timeout)
        self.model = model

    async def transcribe(
        self,
        audio_bytes: bytes,
        filename: str,
        content_type: Optional[str] = None,
        language: Optional[str] = None,
    ) -> str:
        """
        Transcribe audio to text.

        Raises:
            ValueError: the audio format is not one Whisper accepts
        """
        extension = resolve_extension(filename, content_type)
        if extension not in self.SUPPORTED_FORMATS:
            raise ValueError(
                f"Unsupported audio format: {extension or 'unknown'}. "
                f"Supported formats: {', '.join(sorted(self.SUPPORTED_FORMATS))}"
            )

        name = filename if filename and filename.lower().endswith(f".{extension}") else f"recording.{extension}"
        params = {
            "model": self.model,
            "file": (name, audio_bytes, CONTENT_TYPES[extension]),
            "response_format": "text",
        }
        if language:
            params["language"] = language

        transcript = await self.client.audio.transcriptions.create(**params)
        # response_format="text" returns a plain string
        return transcript.strip() if isinstance(transcript, str) else str(transcript).strip()


def resolve_extension(filename: Optional[str], content_type: Optional[str]) -> str:
    if filename and "." in filename:
        extension = filename.rsplit(".", 1)[-1].lower()
        if extension in CONTENT_TYPES:
            return extension
    if content_type and "/" in content_type:
        subtype = content_type.split(";", 1)[0].split("/", 1)[1].strip().lower()
        return _SUBTYPE_EXTENSIONS.get(subtype, subtype)
    return ""


@lru_cache(maxsize=1)
def _build_whisper(api_key: str, model: str, timeout: float) -> WhisperProvider:
    return WhisperProvider(api_key=api_key, model=model, timeout=timeout)


def get_whisper_provider() -> Optional[WhisperProvider]:
    if not settings.ai_enabled:
        return None
    return _build_whisper(settings.openai_api_key, settings.whisper_model, settings.openai_timeout)
