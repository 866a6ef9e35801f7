from fastapi import APIRouter, Depends
from app.database.supabase_client import get_supabase
from app.modules.profiles.schemas import ProfileUpdate, ProfileResponse, ProfileStatsResponse
from app.modules.profiles.service import ProfileService
from app.core.dependencies import get_current_user_id
from supabase import Client
from typing import Dict

router = APIRouter(prefix="/profiles", tags=["profiles"])


def get_profile_service(supabase: Client = Depends(get_supabase)) -> ProfileService:
    return ProfileService(supabase)


@router.get("/me", response_model=ProfileResponse)
async def get_my_profile(
    current_user: Dict = Depends(get_current_user_id),
    service: ProfileService = Depends(get_profile_service)
):
    """Get the current user's profile"""
    return service.get_profile(current_user)


@router.put("/me", response_model=ProfileResponse)
async def update_my_profile(
    profile_data: ProfileUpdate,
    current_user: Dict = Depends(get_current_user_id),
    service: ProfileService = Depends(get_profile_service)
):
    """Create or update the current user's profile (mood colors must come from the palette)"""
    return service.update_profile(current_user, profile_data)


@router.get("/me/stats", response_model=ProfileStatsResponse)
async def get_my_stats(
    current_user: Dict = Depends(get_current_user_id),
    service: ProfileService = Depends(get_profile_service)
):
    """Journal, meditation and check-in counts plus the activity streak"""
    return service.get_stats(current_user["id"])
