from fastapi import APIRouter, Depends, Query
from app.database.supabase_client import get_supabase
from app.modules.checkins.schemas import (
    CheckinCreate, CheckinSubmitResponse, TodayCheckinResponse,
    CheckinHistoryResponse, TrendsResponse, InsightsResponse
)
from app.modules.checkins.service import CheckinService
from app.core.ai import OpenAIProvider, get_ai_provider
from app.core.dependencies import get_current_user_id, check_user_access, get_access_cache
from supabase import Client
from typing import Dict, Optional

router = APIRouter(prefix="/checkin", tags=["checkins"])


def get_checkin_service(supabase: Client = Depends(get_supabase)) -> CheckinService:
    return CheckinService(supabase)


@router.post("", response_model=CheckinSubmitResponse, status_code=201)
async def submit_checkin(
    checkin_data: CheckinCreate,
    current_user: Dict = Depends(get_current_user_id),
    service: CheckinService = Depends(get_checkin_service),
    supabase: Client = Depends(get_supabase)
):
    """Submit today's check-in (409 if one already exists for today)"""
    if checkin_data.user_id:
        check_user_access(checkin_data.user_id, current_user, supabase, allow_admin=False)
    return service.create_checkin(checkin_data, current_user["id"])


@router.get("/today/{user_id}", response_model=TodayCheckinResponse)
async def get_today(
    user_id: str,
    current_user: Dict = Depends(get_current_user_id),
    service: CheckinService = Depends(get_checkin_service),
    supabase: Client = Depends(get_supabase),
    cache: Dict = Depends(get_access_cache)
):
    """Has the user checked in today?"""
    check_user_access(user_id, current_user, supabase, cache=cache)
    return service.get_today_checkin(user_id)


@router.get("/history/{user_id}", response_model=CheckinHistoryResponse)
async def get_history(
    user_id: str,
    limit: int = Query(30, ge=1, le=365),
    offset: int = Query(0, ge=0),
    current_user: Dict = Depends(get_current_user_id),
    service: CheckinService = Depends(get_checkin_service),
    supabase: Client = Depends(get_supabase),
    cache: Dict = Depends(get_access_cache)
):
    """Check-in history, newest first"""
    check_user_access(user_id, current_user, supabase, cache=cache)
    return service.list_history(user_id, limit=limit, offset=offset)


@router.get("/trends/{user_id}", response_model=TrendsResponse)
async def get_trends(
    user_id: str,
    period: str = "week",
    current_user: Dict = Depends(get_current_user_id),
    service: CheckinService = Depends(get_checkin_service),
    supabase: Client = Depends(get_supabase),
    cache: Dict = Depends(get_access_cache)
):
    """Energy, sleep and stress trends for week, month or quarter"""
    check_user_access(user_id, current_user, supabase, cache=cache)
    return service.get_trends(user_id, period)


@router.get("/insights/{user_id}", response_model=InsightsResponse)
async def get_insights(
    user_id: str,
    days: int = 7,
    current_user: Dict = Depends(get_current_user_id),
    service: CheckinService = Depends(get_checkin_service),
    supabase: Client = Depends(get_supabase),
    cache: Dict = Depends(get_access_cache),
    provider: Optional[OpenAIProvider] = Depends(get_ai_provider)
):
    """Insights and recommendations over the last `days` days"""
    check_user_access(user_id, current_user, supabase, cache=cache)
    return await service.get_insights(user_id, days, provider)
