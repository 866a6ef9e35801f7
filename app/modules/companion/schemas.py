from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel
from typing import Optional, List, Any
from datetime import datetime


class CompanionRequest(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    user_id: Optional[str] = None
    current_mood: Optional[str] = None


class AffirmationResponse(BaseModel):
    success: bool = True
    affirmation: str
    source: str
    timestamp: datetime


class CompanionInsight(BaseModel):
    title: str
    message: str
    type: str  # strength | improvement | habit
    icon: str


class CompanionInsightsResponse(BaseModel):
    success: bool = True
    insights: List[CompanionInsight] = []
    source: Optional[str] = None
    message: Optional[str] = None


class MoodRecommendation(BaseModel):
    activity: str
    description: str
    duration: str
    icon: str


class MoodRecommendationsResponse(BaseModel):
    success: bool = True
    mood: str
    mood_type: str
    recommendations: List[MoodRecommendation]
    source: str


class ProgressStats(BaseModel):
    total_journals: int
    total_meditations: int
    streak_days: int


class ProgressSummaryResponse(BaseModel):
    success: bool = True
    summary: str
    trend: str  # improving | stable | needs_attention
    encouragement: str
    source: str
    stats: ProgressStats
    wellbeing_score: Optional[Any] = None
