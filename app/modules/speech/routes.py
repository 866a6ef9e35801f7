from datetime import datetime, timezone
from fastapi import APIRouter, Depends, File, HTTPException, UploadFile
from app.config import settings
from app.core.dependencies import get_current_user_id
from app.modules.speech.schemas import TranscriptionResponse, SpeechHealthResponse
from app.modules.speech.service import SpeechService
from app.modules.speech.whisper import WhisperProvider, CONTENT_TYPES, get_whisper_provider
from typing import Dict, Optional

router = APIRouter(prefix="/speech-to-text", tags=["speech"])


def get_speech_service(whisper: Optional[WhisperProvider] = Depends(get_whisper_provider)) -> SpeechService:
    return SpeechService(whisper)


@router.post("", response_model=TranscriptionResponse)
async def speech_to_text(
    audio: Optional[UploadFile] = File(None),
    current_user: Dict = Depends(get_current_user_id),
    service: SpeechService = Depends(get_speech_service)
):
    """Transcribe an uploaded voice journal recording (multipart field 'audio')"""
    if audio is None:
        raise HTTPException(status_code=400, detail="No audio file provided")
    # One byte past the limit is enough to reject the upload
    audio_bytes = await audio.read(settings.max_audio_bytes + 1)
    return await service.transcribe(audio_bytes, audio.filename or "", audio.content_type)


@router.get("/health", response_model=SpeechHealthResponse)
async def speech_health():
    return SpeechHealthResponse(
        services={
            "whisper": settings.ai_enabled,
            "fallback_transcription": settings.is_development
        },
        supported_formats=sorted(set(CONTENT_TYPES.values())),
        max_file_size=f"{settings.max_audio_bytes // (1024 * 1024)}MB",
        timestamp=datetime.now(timezone.utc)
    )
