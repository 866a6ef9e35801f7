import logging
from datetime import datetime, timezone
from supabase import Client
from app.config import settings
from app.core.ai import OpenAIProvider
from app.modules.chat.context import load_user_context, build_system_prompt
from app.modules.chat.fallback import CRISIS_RESPONSE, is_crisis, fallback_reply
from app.modules.chat.schemas import ChatRequest, ChatResponse, ChatMessageResponse, ChatHistoryResponse
from fastapi import HTTPException
from typing import Optional, Dict, Any, List

logger = logging.getLogger(__name__)

HISTORY_MESSAGES = 10


def validate_message(message: Optional[str]) -> str:
    if message is None or not message.strip():
        raise HTTPException(status_code=400, detail="Message is required")
    if len(message) > settings.chat_max_message_length:
        raise HTTPException(status_code=400, detail="Message too long")
    return message.strip()


class ChatService:
    def __init__(self, supabase: Client):
        self.supabase = supabase

    def get_or_create_session(self, user_id: str) -> Optional[Dict[str, Any]]:
        """Today's chat session, created on first message. None when storage is unavailable."""
        try:
            start_of_day = datetime.now(timezone.utc).replace(hour=0, minute=0, second=0, microsecond=0)
            existing = self.supabase.table("chat_sessions")\
                .select("*")\
                .eq("user_id", user_id)\
                .gte("created_at", start_of_day.isoformat())\
                .order("created_at", desc=True)\
                .limit(1)\
                .execute()
            if existing.data:
                return existing.data[0]

            created = self.supabase.table("chat_sessions").insert({"user_id": user_id}).execute()
            return created.data[0] if created.data else None
        except Exception as e:
            logger.error(f"Error managing chat session for {user_id}: {e}")
            return None

    def save_message(self, session: Optional[Dict[str, Any]], user_id: str, message: str, is_bot: bool) -> None:
        if not session:
            return
        try:
            self.supabase.table("chat_messages").insert({
                "session_id": session["id"],
                "user_id": user_id,
                "message": message,
                "is_bot": is_bot
            }).execute()
        except Exception as e:
            logger.error(f"Error saving chat message: {e}")

    def _conversation_history(self, session: Optional[Dict[str, Any]]) -> List[Dict[str, str]]:
        if not session:
            return []
        try:
            result = self.supabase.table("chat_messages")\
                .select("message, is_bot, created_at")\
                .eq("session_id", session["id"])\
                .order("created_at", desc=True)\
                .limit(HISTORY_MESSAGES)\
                .execute()
        except Exception as e:
            logger.warning(f"Could not load chat history: {e}")
            return []
        return [
            {"role": "assistant" if row["is_bot"] else "user", "content": row["message"]}
            for row in reversed(result.data or [])
        ]

    async def chat(self, request: ChatRequest, user_id: str, provider: Optional[OpenAIProvider] = None) -> ChatResponse:
        message = validate_message(request.message)
        session = self.get_or_create_session(user_id)
        now = datetime.now(timezone.utc)

        if is_crisis(message):
            logger.warning(f"Crisis keywords detected in chat from user {user_id}")
            self.save_message(session, user_id, message, False)
            self.save_message(session, user_id, CRISIS_RESPONSE, True)
            return ChatResponse(
                response=CRISIS_RESPONSE,
                crisis_detected=True,
                source="crisis",
                timestamp=now
            )

        if provider is not None:
            context = load_user_context(self.supabase, user_id)
            history = self._conversation_history(session)
            try:
                reply = await provider.chat(
                    message,
                    system_prompt=build_system_prompt(context, request.current_mood),
                    conversation_history=history,
                    max_tokens=500,
                    temperature=0.8,
                    presence_penalty=0.6,
                    frequency_penalty=0.3
                )
                if not reply:
                    raise ValueError("Empty AI reply")
                self.save_message(session, user_id, message, False)
                self.save_message(session, user_id, reply, True)
                return ChatResponse(
                    response=reply,
                    source="ai",
                    has_personalized_context=context.has_report,
                    timestamp=now
                )
            except Exception as e:
                logger.warning(f"AI chat failed, using keyword fallback: {e}")

        fallback = fallback_reply(message)
        logger.info(f"Chat fallback for user {user_id}: intent={fallback['intent']} points={fallback['points_awarded']}")
        self.save_message(session, user_id, message, False)
        self.save_message(session, user_id, fallback["response"], True)
        return ChatResponse(
            response=fallback["response"],
            source="fallback",
            intent=fallback["intent"],
            points_awarded=fallback["points_awarded"],
            timestamp=now
        )

    def get_history(self, user_id: str, limit: int = 50) -> ChatHistoryResponse:
        try:
            result = self.supabase.table("chat_messages")\
                .select("*")\
                .eq("user_id", user_id)\
                .order("created_at", desc=True)\
                .limit(limit)\
                .execute()
            return ChatHistoryResponse(data=[ChatMessageResponse(**row) for row in result.data])
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def delete_history(self, user_id: str) -> bool:
        """Delete every message, then every session, of the user"""
        try:
            self.supabase.table("chat_messages")\
                .delete()\
                .eq("user_id", user_id)\
                .execute()
            self.supabase.table("chat_sessions")\
                .delete()\
                .eq("user_id", user_id)\
                .execute()
            return True
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))
