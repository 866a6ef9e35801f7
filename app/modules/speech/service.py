import logging
import random
from datetime import datetime, timezone
from typing import Optional

import openai
from fastapi import HTTPException

from app.config import settings
from app.modules.speech.schemas import TranscriptionResponse
from app.modules.speech.whisper import WhisperProvider

logger = logging.getLogger(__name__)

MOCK_TRANSCRIPTS = [
    "Today I'm feeling really grateful for all the progress I've made in my wellness journey.",
    "I had an interesting conversation with a friend today that really made me think about my goals.",
    "The meditation session this morning was particularly peaceful and helped center my thoughts.",
    "I'm excited about the new project I'm starting and feel motivated to give it my best effort.",
    "Sometimes it's the small moments that bring the most joy, like watching the sunrise.",
    "I've been reflecting on how much I've grown as a person over the past few months.",
    "Today was challenging, but I managed to stay positive and find silver linings.",
]

# Rough bytes-per-second used for the duration estimate
BYTES_PER_SECOND = 16000


def validate_audio(content_type: Optional[str], size: int) -> None:
    if not content_type or not content_type.lower().startswith("audio/"):
        raise HTTPException(status_code=400, detail="Only audio files are allowed")
    if size == 0:
        raise HTTPException(status_code=400, detail="No audio file provided")
    if size > settings.max_audio_bytes:
        raise HTTPException(
            status_code=413,
            detail=f"Audio file too large (max {settings.max_audio_bytes // (1024 * 1024)}MB)"
        )


def map_provider_error(error: Exception) -> HTTPException:
    """Translate a transcription failure to the status the client should see."""
    message = str(error).lower()
    if isinstance(error, openai.RateLimitError) or "quota" in message:
        return HTTPException(status_code=429, detail="Speech-to-text quota exceeded. Please try again later.")
    if isinstance(error, openai.AuthenticationError) or "authentication" in message:
        return HTTPException(status_code=503, detail="Speech-to-text service authentication failed.")
    if isinstance(error, openai.APIConnectionError) or "network" in message:
        return HTTPException(status_code=503, detail="Network error while processing audio. Please check your connection.")
    return HTTPException(status_code=500, detail="Failed to transcribe audio")


class SpeechService:
    def __init__(self, whisper: Optional[WhisperProvider]):
        self.whisper = whisper

    async def transcribe(self, audio_bytes: bytes, filename: str, content_type: Optional[str]) -> TranscriptionResponse:
        validate_audio(content_type, len(audio_bytes))
        logger.info(f"Processing audio file: {filename}, size: {len(audio_bytes)} bytes")

        source = "whisper"
        try:
            if self.whisper is None:
                raise RuntimeError("Speech-to-text provider is not configured")
            transcript = await self.whisper.transcribe(audio_bytes, filename, content_type)
        except ValueError as e:
            raise HTTPException(status_code=400, detail=str(e))
        except Exception as e:
            if not settings.is_development:
                logger.error(f"Speech-to-text error: {e}")
                raise map_provider_error(e)
            logger.warning(f"Transcription failed, using mock transcript: {e}")
            transcript = random.choice(MOCK_TRANSCRIPTS)
            source = "mock"

        if not transcript:
            raise HTTPException(status_code=422, detail="No speech detected in audio")

        return TranscriptionResponse(
            transcript=transcript,
            duration=len(audio_bytes) / BYTES_PER_SECOND,
            source=source,
            timestamp=datetime.now(timezone.utc)
        )
