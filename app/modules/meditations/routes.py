from fastapi import APIRouter, Depends, Query
from app.database.supabase_client import get_supabase
from app.modules.meditations.schemas import MeditationCreate, MeditationResponse, MeditationStatsResponse
from app.modules.meditations.service import MeditationService
from app.core.dependencies import get_current_user_id
from supabase import Client
from typing import List, Dict

router = APIRouter(prefix="/meditations", tags=["meditations"])


def get_meditation_service(supabase: Client = Depends(get_supabase)) -> MeditationService:
    return MeditationService(supabase)


@router.post("", response_model=MeditationResponse, status_code=201)
async def create_meditation(
    meditation_data: MeditationCreate,
    current_user: Dict = Depends(get_current_user_id),
    service: MeditationService = Depends(get_meditation_service)
):
    """Save a completed meditation session"""
    return service.create_meditation(meditation_data, current_user["id"])


@router.get("", response_model=List[MeditationResponse])
async def list_meditations(
    limit: int = Query(50, ge=1, le=200),
    offset: int = Query(0, ge=0),
    current_user: Dict = Depends(get_current_user_id),
    service: MeditationService = Depends(get_meditation_service)
):
    return service.list_meditations(current_user["id"], limit=limit, offset=offset)


@router.get("/stats", response_model=MeditationStatsResponse)
async def get_meditation_stats(
    current_user: Dict = Depends(get_current_user_id),
    service: MeditationService = Depends(get_meditation_service)
):
    """Session count, total time and breakdown by meditation type"""
    return service.get_stats(current_user["id"])


@router.delete("/{meditation_id}", status_code=204)
async def delete_meditation(
    meditation_id: str,
    current_user: Dict = Depends(get_current_user_id),
    service: MeditationService = Depends(get_meditation_service)
):
    service.delete_meditation(meditation_id, current_user["id"])
    return None
