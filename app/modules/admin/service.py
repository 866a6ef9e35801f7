import logging
from datetime import datetime, timedelta, timezone
from supabase import Client
from app.modules.admin import analytics
from app.modules.admin.schemas import (
    AdminOverview, JournalWeek, MeditationWeek, UserGrowthWeek, TopUser,
    AdminGrant, AdminUserResponse, AdminUserListResponse
)
from fastapi import HTTPException
from typing import List, Dict, Any, Optional

logger = logging.getLogger(__name__)

# Default PostgREST max-rows
PAGE_SIZE = 1000


class AdminService:
    def __init__(self, supabase: Client):
        # Service-role client: these reads span every user
        self.supabase = supabase

    def _count(self, table: str) -> int:
        result = self.supabase.table(table)\
            .select("id", count="exact")\
            .limit(1)\
            .execute()
        return result.count or 0

    def _rows(self, table: str, columns: str, since: Optional[datetime] = None) -> List[Dict[str, Any]]:
        """Every matching row, fetched page by page past the max-rows cap"""
        rows: List[Dict[str, Any]] = []
        while True:
            query = self.supabase.table(table).select(columns)
            if since is not None:
                query = query.gte("created_at", since.isoformat())
            result = query\
                .order("created_at")\
                .range(len(rows), len(rows) + PAGE_SIZE - 1)\
                .execute()
            if not result.data:
                return rows
            rows.extend(result.data)

    def get_overview(self) -> AdminOverview:
        try:
            now = datetime.now(timezone.utc)
            recent_journals = self._rows("journals", "user_id, created_at", since=now - timedelta(days=7))
            meditations = self._rows("meditations", "user_id, duration, created_at")
            return AdminOverview(**analytics.overview(
                self._count("profiles"), self._count("journals"), self._count("meditations"),
                recent_journals, meditations, now
            ))
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def get_journal_weeks(self) -> List[JournalWeek]:
        try:
            rows = self._rows("journals", "created_at")
            return [JournalWeek(**w) for w in analytics.journal_weeks(rows, datetime.now(timezone.utc))]
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def get_meditation_weeks(self) -> List[MeditationWeek]:
        try:
            rows = self._rows("meditations", "duration, created_at")
            return [MeditationWeek(**w) for w in analytics.meditation_weeks(rows, datetime.now(timezone.utc))]
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def get_user_growth(self) -> List[UserGrowthWeek]:
        try:
            rows = self._rows("profiles", "created_at")
            return [UserGrowthWeek(**w) for w in analytics.user_growth_weeks(rows, datetime.now(timezone.utc))]
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def get_top_users(self, limit: int = analytics.TOP_USERS) -> List[TopUser]:
        try:
            profiles = self._rows("profiles", "id, full_name, email, created_at")
            journals = self._rows("journals", "user_id, created_at")
            meditations = self._rows("meditations", "user_id, duration, created_at")
            return [TopUser(**u) for u in analytics.top_users(profiles, journals, meditations, limit)]
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def list_admins(self) -> AdminUserListResponse:
        try:
            result = self.supabase.table("admin_users")\
                .select("*")\
                .order("created_at")\
                .execute()
            return AdminUserListResponse(admins=[AdminUserResponse(**row) for row in result.data])
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def grant_admin(self, grant: AdminGrant, granted_by: str) -> AdminUserResponse:
        """Add a user to admin_users, looked up by id or by profile e-mail"""
        if not grant.user_id and not grant.email:
            raise HTTPException(status_code=400, detail="Provide user_id or email")
        try:
            user_id = grant.user_id
            email = grant.email
            if not user_id:
                profile = self.supabase.table("profiles")\
                    .select("id, email")\
                    .eq("email", email)\
                    .limit(1)\
                    .execute()
                if not profile.data:
                    raise HTTPException(status_code=404, detail="User not found")
                user_id = profile.data[0]["id"]

            result = self.supabase.table("admin_users").upsert({
                "id": user_id,
                "email": email
            }).execute()

            if not result.data:
                raise HTTPException(status_code=500, detail="Failed to grant admin access")

            logger.info(f"Admin access granted to {user_id} by {granted_by}")
            return AdminUserResponse(**result.data[0])
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))
