from pydantic import BaseModel, EmailStr
from typing import Optional, List
from datetime import datetime


class AdminOverview(BaseModel):
    total_users: int
    total_journals: int
    total_meditation_minutes: int
    total_meditation_sessions: int
    active_users_last_7_days: int


class JournalWeek(BaseModel):
    week: str
    journals: int


class MeditationWeek(BaseModel):
    week: str
    sessions: int
    minutes: int


class UserGrowthWeek(BaseModel):
    week: str
    new_users: int
    total_users: int


class TopUser(BaseModel):
    id: str
    name: str
    join_date: Optional[datetime] = None
    journal_entries: int
    meditation_sessions: int
    meditation_minutes: int
    total_activity: int


class AdminGrant(BaseModel):
    user_id: Optional[str] = None
    email: Optional[EmailStr] = None


class AdminUserResponse(BaseModel):
    id: str
    email: Optional[str] = None
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class AdminUserListResponse(BaseModel):
    admins: List[AdminUserResponse]
