import logging
from datetime import date, datetime, timedelta, timezone
from supabase import Client
from app.modules.profiles.schemas import ProfileUpdate, ProfileResponse, ProfileStatsResponse
from app.modules.checkins.analytics import compute_streak, local_date, to_date
from app.modules.checkins.service import checkin_zone, local_today
from fastapi import HTTPException
from typing import Dict, Any, List

logger = logging.getLogger(__name__)

RECENT_ACTIVITY_DAYS = 30
STREAK_WINDOW_DAYS = 120


class ProfileService:
    def __init__(self, supabase: Client):
        self.supabase = supabase

    def get_profile(self, user_data: Dict[str, Any]) -> ProfileResponse:
        """Get the profile row, or a minimal one built from the auth user when none exists yet"""
        try:
            result = self.supabase.table("profiles")\
                .select("*")\
                .eq("id", user_data["id"])\
                .limit(1)\
                .execute()

            if result.data:
                return ProfileResponse(**result.data[0])

            return ProfileResponse(
                id=user_data["id"],
                email=user_data.get("email"),
                full_name=(user_data.get("user_metadata") or {}).get("full_name"),
                created_at=user_data.get("created_at")
            )
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def update_profile(self, user_data: Dict[str, Any], profile_data: ProfileUpdate) -> ProfileResponse:
        """Create or update the caller's profile"""
        try:
            payload = profile_data.model_dump(exclude_none=True)
            payload["id"] = user_data["id"]
            if user_data.get("email"):
                payload["email"] = user_data["email"]
            payload["updated_at"] = datetime.now(timezone.utc).isoformat()

            result = self.supabase.table("profiles").upsert(payload).execute()

            if not result.data:
                raise HTTPException(status_code=500, detail="Failed to update profile")

            return ProfileResponse(**result.data[0])
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def get_mood_colors(self, user_id: str) -> Dict[str, str]:
        """Custom mood colors, empty when unset or unreadable"""
        try:
            result = self.supabase.table("profiles")\
                .select("mood_colors")\
                .eq("id", user_id)\
                .limit(1)\
                .execute()
            if result.data:
                return result.data[0].get("mood_colors") or {}
        except Exception as e:
            logger.warning(f"Could not load mood colors for {user_id}: {e}")
        return {}

    def _activity_dates(self, user_id: str, since: datetime) -> List[date]:
        """Local calendar days with any activity; timestamps are converted to the check-in timezone"""
        tz = checkin_zone()
        dates: List[date] = []
        for table in ("journals", "meditations"):
            result = self.supabase.table(table)\
                .select("created_at")\
                .eq("user_id", user_id)\
                .gte("created_at", since.isoformat())\
                .execute()
            dates.extend(local_date(row["created_at"], tz) for row in result.data or [] if row.get("created_at"))
        checkins = self.supabase.table("daily_checkins")\
            .select("checkin_date")\
            .eq("user_id", user_id)\
            .gte("checkin_date", since.date().isoformat())\
            .execute()
        dates.extend(to_date(row["checkin_date"]) for row in checkins.data or [])
        return dates

    def activity_streak(self, user_id: str) -> int:
        """Consecutive days with a journal, meditation or check-in"""
        try:
            since = datetime.now(timezone.utc) - timedelta(days=STREAK_WINDOW_DAYS)
            return compute_streak(self._activity_dates(user_id, since), local_today())
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def get_stats(self, user_id: str) -> ProfileStatsResponse:
        try:
            journals = self.supabase.table("journals")\
                .select("id, created_at")\
                .eq("user_id", user_id)\
                .execute()
            meditations = self.supabase.table("meditations")\
                .select("duration, created_at")\
                .eq("user_id", user_id)\
                .execute()
            checkins = self.supabase.table("daily_checkins")\
                .select("id")\
                .eq("user_id", user_id)\
                .execute()

            journal_rows = journals.data or []
            meditation_rows = meditations.data or []
            total_time = sum(m.get("duration") or 0 for m in meditation_rows)
            session_count = len(meditation_rows)
            recent_cutoff = (datetime.now(timezone.utc) - timedelta(days=RECENT_ACTIVITY_DAYS)).isoformat()

            return ProfileStatsResponse(
                journal_count=len(journal_rows),
                meditation_session_count=session_count,
                total_meditation_time=total_time,
                total_meditation_minutes=round(total_time / 60),
                average_session_length=round(total_time / session_count) if session_count else 0,
                recent_activity=sum(1 for j in journal_rows if str(j.get("created_at", "")) >= recent_cutoff),
                checkin_count=len(checkins.data or []),
                activity_streak=self.activity_streak(user_id)
            )
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))
