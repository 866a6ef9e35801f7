from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel
from typing import Optional, List
from datetime import datetime


class ChatRequest(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    message: Optional[str] = None
    user_id: Optional[str] = None
    current_mood: Optional[str] = None


class ChatResponse(BaseModel):
    """Serialized in camelCase for the web client (crisisDetected, pointsAwarded...)"""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    success: bool = True
    response: str
    crisis_detected: bool = False
    source: str  # ai | fallback | crisis
    intent: Optional[str] = None
    points_awarded: Optional[int] = None
    has_personalized_context: bool = False
    timestamp: datetime


class ChatMessageResponse(BaseModel):
    id: str
    session_id: Optional[str] = None
    user_id: str
    message: str
    is_bot: bool
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class ChatHistoryResponse(BaseModel):
    success: bool = True
    data: List[ChatMessageResponse]
