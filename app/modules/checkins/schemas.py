from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel
from typing import Optional, List, Dict, Any
from datetime import date, datetime

from app.modules.moods.mapping import CHECKIN_MOODS

Level = Optional[int]


class CheckinCreate(BaseModel):
    """Daily check-in body. The web client posts camelCase, snake_case also works."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    user_id: Optional[str] = None
    mood: str
    energy_level: int = Field(ge=1, le=10)
    sleep_quality: int = Field(ge=1, le=10)
    stress_level: int = Field(ge=1, le=10)
    physical_activity: Optional[str] = None
    social_interactions: Optional[str] = None
    emotions: List[str] = []
    daily_goals_progress: Optional[str] = None
    productivity_rating: Level = Field(default=None, ge=1, le=10)
    weather_impact: Optional[str] = None
    gratitude: Optional[str] = None
    notes: Optional[str] = None
    challenges_faced: Optional[str] = None
    wins_celebrated: Optional[str] = None
    motivation_level: Level = Field(default=None, ge=1, le=10)
    focus_level: Level = Field(default=None, ge=1, le=10)
    overall_satisfaction: Level = Field(default=None, ge=1, le=10)

    @field_validator("mood")
    @classmethod
    def validate_mood(cls, v: str) -> str:
        mood = v.strip().lower()
        if mood not in CHECKIN_MOODS:
            raise ValueError(f"mood must be one of: {', '.join(CHECKIN_MOODS)}")
        return mood


class CheckinResponse(BaseModel):
    id: str
    user_id: str
    checkin_date: date
    mood: str
    energy_level: Level = None
    sleep_quality: Level = None
    stress_level: Level = None
    physical_activity: Optional[str] = None
    social_interactions: Optional[str] = None
    emotions: Optional[List[str]] = None
    daily_goals_progress: Optional[str] = None
    productivity_rating: Level = None
    weather_impact: Optional[str] = None
    gratitude: Optional[str] = None
    notes: Optional[str] = None
    challenges_faced: Optional[str] = None
    wins_celebrated: Optional[str] = None
    motivation_level: Level = None
    focus_level: Level = None
    overall_satisfaction: Level = None
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class CheckinSubmitResponse(BaseModel):
    success: bool = True
    message: str
    checkin: CheckinResponse
    insights: Dict[str, Any]
    streak: int


class TodayCheckinResponse(BaseModel):
    success: bool = True
    has_checked_in: bool
    checkin: Optional[CheckinResponse] = None


class CheckinHistoryResponse(BaseModel):
    success: bool = True
    checkins: List[CheckinResponse]
    count: int


class TrendsResponse(BaseModel):
    success: bool = True
    period: str
    days: int
    data_points: int
    current_streak: int
    trends: Optional[Dict[str, Any]] = None


class InsightsResponse(BaseModel):
    success: bool = True
    insights: Dict[str, Any]
    message: Optional[str] = None
