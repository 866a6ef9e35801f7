from pydantic import BaseModel
from typing import List, Dict


class PaletteColor(BaseModel):
    color: str
    name: str


class MoodTypeInfo(BaseModel):
    key: str
    label: str
    description: str
    emoji: str
    default_color: str


class PaletteResponse(BaseModel):
    mood_types: List[MoodTypeInfo]
    colors: List[PaletteColor]
    checkin_moods: Dict[str, str]  # check-in mood -> mood type


class MoodThemeResponse(BaseModel):
    mood: str
    mood_type: str
    emoji: str
    color: str
    custom: bool


class GrowthStageResponse(BaseModel):
    percentage: float
    stage: str
