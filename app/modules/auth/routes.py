from fastapi import APIRouter, Depends, Security
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from app.database.supabase_client import get_supabase
from app.modules.auth.schemas import (
    LoginRequest, RegisterRequest, TokenResponse, RegisterResponse, CurrentUserResponse
)
from app.modules.auth.service import AuthService
from app.modules.profiles.service import ProfileService
from app.core.dependencies import get_current_user_id, is_admin, get_access_cache
from supabase import Client
from typing import Dict

router = APIRouter(prefix="/auth", tags=["auth"])

# Security scheme for JWT Bearer token
security = HTTPBearer()


def get_auth_service(supabase: Client = Depends(get_supabase)) -> AuthService:
    return AuthService(supabase)


def get_current_token(
    credentials: HTTPAuthorizationCredentials = Security(security)
) -> str:
    """Extract JWT token from Authorization header"""
    return credentials.credentials


@router.post("/register", response_model=RegisterResponse, status_code=201)
async def register(
    register_data: RegisterRequest,
    service: AuthService = Depends(get_auth_service)
):
    """Register a new user"""
    return service.register(register_data)


@router.post("/login", response_model=TokenResponse)
async def login(
    login_data: LoginRequest,
    service: AuthService = Depends(get_auth_service)
):
    """Login and get access token"""
    return service.login(login_data)


@router.post("/logout", status_code=200)
async def logout(
    token: str = Depends(get_current_token),
    service: AuthService = Depends(get_auth_service)
):
    """Logout and invalidate token"""
    service.logout(token)
    return {"message": "Logged out successfully"}


@router.get("/me", response_model=CurrentUserResponse)
async def get_current_user(
    current_user: Dict = Depends(get_current_user_id),
    supabase: Client = Depends(get_supabase),
    cache: Dict = Depends(get_access_cache)
):
    """Current user with onboarding state and whether they can open the admin dashboard."""
    profile = ProfileService(supabase).get_profile(current_user)
    return CurrentUserResponse(
        id=current_user["id"],
        email=current_user.get("email"),
        full_name=profile.full_name,
        onboarding_completed=profile.onboarding_completed,
        user_metadata=current_user.get("user_metadata") or {},
        app_metadata=current_user.get("app_metadata") or {},
        is_admin=is_admin(current_user, supabase, cache)
    )
