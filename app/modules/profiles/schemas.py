from pydantic import BaseModel, field_validator
from typing import Optional, Dict
from datetime import datetime

from app.modules.moods.mapping import MOOD_TYPE_KEYS, PALETTE_COLORS


class ProfileUpdate(BaseModel):
    full_name: Optional[str] = None
    bio: Optional[str] = None
    avatar_url: Optional[str] = None
    mood_colors: Optional[Dict[str, str]] = None
    onboarding_completed: Optional[bool] = None

    @field_validator("mood_colors")
    @classmethod
    def validate_mood_colors(cls, v: Optional[Dict[str, str]]) -> Optional[Dict[str, str]]:
        if v is None:
            return v
        cleaned = {}
        for key, color in v.items():
            if key not in MOOD_TYPE_KEYS:
                raise ValueError(f"Unknown mood type '{key}'. Use one of: {', '.join(MOOD_TYPE_KEYS)}")
            color = color.lower()
            if color not in PALETTE_COLORS:
                raise ValueError(f"Color '{color}' is not in the mood palette")
            cleaned[key] = color
        return cleaned


class ProfileResponse(BaseModel):
    id: str
    email: Optional[str] = None
    full_name: Optional[str] = None
    bio: Optional[str] = None
    avatar_url: Optional[str] = None
    mood_colors: Optional[Dict[str, str]] = None
    onboarding_completed: bool = False
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class ProfileStatsResponse(BaseModel):
    journal_count: int
    meditation_session_count: int
    total_meditation_time: int  # seconds
    total_meditation_minutes: int
    average_session_length: int  # seconds
    recent_activity: int  # journals in the last 30 days
    checkin_count: int
    activity_streak: int
