from pydantic import BaseModel
from typing import List, Dict
from datetime import datetime


class TranscriptionResponse(BaseModel):
    transcript: str
    language: str = "en-US"
    duration: float  # rough estimate in seconds
    source: str  # whisper | mock
    timestamp: datetime


class SpeechHealthResponse(BaseModel):
    status: str = "healthy"
    services: Dict[str, bool]
    supported_formats: List[str]
    max_file_size: str
    timestamp: datetime
