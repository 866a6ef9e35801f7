from fastapi import APIRouter, Depends, Query
from app.database.supabase_client import get_service_supabase
from app.modules.admin.schemas import (
    AdminOverview, JournalWeek, MeditationWeek, UserGrowthWeek, TopUser,
    AdminGrant, AdminUserResponse, AdminUserListResponse
)
from app.modules.admin.service import AdminService
from app.core.dependencies import require_admin
from supabase import Client
from typing import List, Dict

router = APIRouter(prefix="/admin", tags=["admin"])


def get_admin_service(supabase: Client = Depends(get_service_supabase)) -> AdminService:
    return AdminService(supabase)


@router.get("/analytics", response_model=AdminOverview)
async def get_overview(
    admin: Dict = Depends(require_admin),
    service: AdminService = Depends(get_admin_service)
):
    """Platform totals and users active in the last 7 days"""
    return service.get_overview()


@router.get("/analytics/journals", response_model=List[JournalWeek])
async def get_journal_analytics(
    admin: Dict = Depends(require_admin),
    service: AdminService = Depends(get_admin_service)
):
    return service.get_journal_weeks()


@router.get("/analytics/meditations", response_model=List[MeditationWeek])
async def get_meditation_analytics(
    admin: Dict = Depends(require_admin),
    service: AdminService = Depends(get_admin_service)
):
    return service.get_meditation_weeks()


@router.get("/analytics/user-growth", response_model=List[UserGrowthWeek])
async def get_user_growth(
    admin: Dict = Depends(require_admin),
    service: AdminService = Depends(get_admin_service)
):
    """New and cumulative users per week"""
    return service.get_user_growth()


@router.get("/analytics/top-users", response_model=List[TopUser])
async def get_top_users(
    limit: int = Query(10, ge=1, le=100),
    admin: Dict = Depends(require_admin),
    service: AdminService = Depends(get_admin_service)
):
    return service.get_top_users(limit)


@router.get("/users", response_model=AdminUserListResponse)
async def list_admins(
    admin: Dict = Depends(require_admin),
    service: AdminService = Depends(get_admin_service)
):
    return service.list_admins()


@router.post("/users", response_model=AdminUserResponse, status_code=201)
async def grant_admin(
    grant: AdminGrant,
    admin: Dict = Depends(require_admin),
    service: AdminService = Depends(get_admin_service)
):
    """Grant admin access to a user by id or e-mail"""
    return service.grant_admin(grant, admin["id"])
