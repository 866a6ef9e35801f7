from fastapi import APIRouter, Depends, Query
from app.database.supabase_client import get_supabase
from app.core.dependencies import get_current_user_id
from app.modules.moods import mapping
from app.modules.moods.schemas import PaletteResponse, MoodThemeResponse, GrowthStageResponse
from app.modules.profiles.service import ProfileService
from supabase import Client
from typing import Dict

router = APIRouter(prefix="/moods", tags=["moods"])


@router.get("/palette", response_model=PaletteResponse)
async def get_palette():
    """Mood types, the color picker palette and the check-in mood groups"""
    return PaletteResponse(
        mood_types=mapping.MOOD_TYPES,
        colors=mapping.COLOR_PALETTE,
        checkin_moods={mood: kind for mood, (kind, _) in mapping.CHECKIN_MOODS.items()}
    )


@router.get("/theme", response_model=MoodThemeResponse)
async def get_theme(
    mood: str = Query(..., min_length=1),
    current_user: Dict = Depends(get_current_user_id),
    supabase: Client = Depends(get_supabase)
):
    """Theme color for a mood, honoring the user's custom mood colors"""
    custom_colors = ProfileService(supabase).get_mood_colors(current_user["id"])
    kind = mapping.mood_type(mood)
    return MoodThemeResponse(
        mood=mood.strip().lower(),
        mood_type=kind,
        emoji=mapping.mood_emoji(mood),
        color=mapping.mood_color(mood, custom_colors),
        custom=bool(custom_colors.get(kind))
    )


@router.get("/growth-stage", response_model=GrowthStageResponse)
async def get_growth_stage(percentage: float = Query(...)):
    clamped = max(0.0, min(100.0, percentage))
    return GrowthStageResponse(percentage=clamped, stage=mapping.growth_stage(clamped))
