"""
Core dependencies for route protection and ownership checking
"""

from fastapi import Depends, HTTPException, Request, Security, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from app.config import settings
from app.database.supabase_client import get_supabase
from app.modules.auth.service import AuthService
from supabase import Client
from typing import Dict, Any, Optional
import logging

logger = logging.getLogger(__name__)

security = HTTPBearer()


def _get_request_cache(request: Request) -> Dict[str, Any]:
    """Return request-scoped cache for access data (is_admin)."""
    if not hasattr(request.state, "access_cache"):
        request.state.access_cache = {}
    return request.state.access_cache


def get_auth_service(supabase: Client = Depends(get_supabase)) -> AuthService:
    return AuthService(supabase)


def get_current_user_id(
    credentials: HTTPAuthorizationCredentials = Security(security),
    auth_service: AuthService = Depends(get_auth_service)
) -> dict:
    """Extract current user info from JWT token"""
    token = credentials.credentials
    user_data = auth_service.get_current_user(token)
    return user_data


def is_admin(user_data: dict, supabase: Client, cache: Optional[Dict[str, Any]] = None) -> bool:
    """Check admin_users membership, falling back to the configured admin e-mail list."""
    if cache is not None and "is_admin" in cache:
        return cache["is_admin"]
    email = (user_data.get("email") or "").lower()
    result = False
    if email and email in settings.get_admin_emails_list():
        result = True
    else:
        try:
            admin_result = supabase.table("admin_users")\
                .select("id")\
                .eq("id", user_data["id"])\
                .limit(1)\
                .execute()
            result = bool(admin_result.data)
        except Exception as e:
            logger.error(f"Error checking admin status: {e}")
            result = False
    if cache is not None:
        cache["is_admin"] = result
    return result


def require_admin(
    request: Request,
    user_data: dict = Depends(get_current_user_id),
    supabase: Client = Depends(get_supabase)
) -> dict:
    """Dependency that only lets administrators through"""
    if not is_admin(user_data, supabase, _get_request_cache(request)):
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Admin access required"
        )
    return user_data


def check_user_access(
    target_user_id: str,
    user_data: dict,
    supabase: Client,
    allow_admin: bool = True,
    cache: Optional[Dict[str, Any]] = None
) -> dict:
    """Mirror the row level security policy: a user may only touch rows carrying their own user_id."""
    if target_user_id == user_data["id"]:
        return user_data
    if allow_admin and is_admin(user_data, supabase, cache):
        return user_data
    raise HTTPException(
        status_code=status.HTTP_403_FORBIDDEN,
        detail="You can only access your own wellness data"
    )


def get_access_cache(request: Request) -> Dict[str, Any]:
    """Dependency that returns request-scoped access cache."""
    return _get_request_cache(request)
