from pydantic import BaseModel, field_validator
from typing import Optional
from datetime import datetime


def _clean_content(v: str) -> str:
    v = v.strip()
    if not v:
        raise ValueError("Journal content cannot be empty")
    return v


class JournalCreate(BaseModel):
    content: str
    mood: Optional[str] = None

    @field_validator("content")
    @classmethod
    def validate_content(cls, v: str) -> str:
        return _clean_content(v)


class JournalUpdate(BaseModel):
    content: Optional[str] = None
    mood: Optional[str] = None

    @field_validator("content")
    @classmethod
    def validate_content(cls, v: Optional[str]) -> Optional[str]:
        return _clean_content(v) if v is not None else v


class JournalResponse(BaseModel):
    id: str
    user_id: str
    content: str
    mood: Optional[str] = None
    created_at: datetime
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True
