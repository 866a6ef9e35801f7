from pydantic import BaseModel, Field
from typing import Optional, Dict
from datetime import datetime


class MeditationCreate(BaseModel):
    type: str = "mindfulness"
    duration: int = Field(gt=0, description="Session length in whole seconds")


class MeditationResponse(BaseModel):
    id: str
    user_id: str
    type: str = "mindfulness"
    duration: int
    created_at: datetime

    class Config:
        from_attributes = True


class MeditationStatsResponse(BaseModel):
    session_count: int
    total_seconds: int
    total_minutes: int
    average_session_length: int
    longest_session: int
    by_type: Dict[str, int]
    last_session_at: Optional[datetime] = None
