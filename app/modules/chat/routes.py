from datetime import datetime, timezone
from fastapi import APIRouter, Depends, Query, Request
from app.database.supabase_client import get_supabase
from app.modules.chat.schemas import ChatRequest, ChatResponse, ChatHistoryResponse
from app.modules.chat.service import ChatService
from app.core.ai import OpenAIProvider, get_ai_provider
from app.core.dependencies import get_current_user_id, check_user_access, get_access_cache
from app.core.rate_limit import limiter
from app.config import settings
from supabase import Client
from typing import Dict, Optional

router = APIRouter(prefix="/chat", tags=["chat"])


def get_chat_service(supabase: Client = Depends(get_supabase)) -> ChatService:
    return ChatService(supabase)


@router.post("", response_model=ChatResponse)
@limiter.limit(settings.chat_rate_limit)
async def chat(
    request: Request,
    chat_request: ChatRequest,
    current_user: Dict = Depends(get_current_user_id),
    service: ChatService = Depends(get_chat_service),
    supabase: Client = Depends(get_supabase),
    provider: Optional[OpenAIProvider] = Depends(get_ai_provider)
):
    """Talk to Elmora. Crisis messages always get the crisis resources response."""
    if chat_request.user_id:
        check_user_access(chat_request.user_id, current_user, supabase, allow_admin=False)
    return await service.chat(chat_request, current_user["id"], provider)


@router.get("/health")
async def chat_health():
    return {
        "status": "healthy",
        "service": "elmora-chat",
        "ai_enabled": settings.ai_enabled,
        "timestamp": datetime.now(timezone.utc).isoformat()
    }


@router.get("/history/{user_id}", response_model=ChatHistoryResponse)
async def get_chat_history(
    user_id: str,
    limit: int = Query(50, ge=1, le=500),
    current_user: Dict = Depends(get_current_user_id),
    service: ChatService = Depends(get_chat_service),
    supabase: Client = Depends(get_supabase),
    cache: Dict = Depends(get_access_cache)
):
    check_user_access(user_id, current_user, supabase, cache=cache)
    return service.get_history(user_id, limit)


@router.delete("/history/{user_id}")
async def delete_chat_history(
    user_id: str,
    current_user: Dict = Depends(get_current_user_id),
    service: ChatService = Depends(get_chat_service),
    supabase: Client = Depends(get_supabase)
):
    """Delete the user's chat history (owner only)"""
    check_user_access(user_id, current_user, supabase, allow_admin=False)
    service.delete_history(user_id)
    return {"success": True, "message": "Chat history deleted successfully"}
