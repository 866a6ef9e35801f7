import logging
from datetime import date, datetime, timedelta, timezone, tzinfo
from typing import Any, Dict, List, Optional
from zoneinfo import ZoneInfo

from fastapi import HTTPException
from supabase import Client

from app.config import settings
from app.core.ai import OpenAIProvider
from app.database.supabase_client import is_unique_violation
from app.modules.checkins import analytics
from app.modules.checkins.insights import immediate_insights, period_insights
from app.modules.checkins.schemas import (
    CheckinCreate, CheckinResponse, CheckinSubmitResponse, TodayCheckinResponse,
    CheckinHistoryResponse, TrendsResponse, InsightsResponse
)

logger = logging.getLogger(__name__)

# Enough history to compute any realistic streak in one query
STREAK_LOOKBACK = 400


def checkin_zone(tz_name: Optional[str] = None) -> tzinfo:
    tz_name = tz_name or settings.checkin_timezone
    return timezone.utc if tz_name.upper() == "UTC" else ZoneInfo(tz_name)


def local_today(tz_name: Optional[str] = None) -> date:
    """Current date in the configured check-in timezone."""
    return datetime.now(checkin_zone(tz_name)).date()


class CheckinService:
    def __init__(self, supabase: Client):
        self.supabase = supabase

    def today(self) -> date:
        return local_today()

    def _find_for_date(self, user_id: str, checkin_date: date) -> Optional[Dict[str, Any]]:
        result = self.supabase.table("daily_checkins")\
            .select("*")\
            .eq("user_id", user_id)\
            .eq("checkin_date", checkin_date.isoformat())\
            .limit(1)\
            .execute()
        return result.data[0] if result.data else None

    def get_today_checkin(self, user_id: str) -> TodayCheckinResponse:
        """Whether the user has already checked in today"""
        try:
            row = self._find_for_date(user_id, self.today())
            return TodayCheckinResponse(
                has_checked_in=row is not None,
                checkin=CheckinResponse(**row) if row else None
            )
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def create_checkin(self, checkin_data: CheckinCreate, user_id: str) -> CheckinSubmitResponse:
        """Store today's check-in; a second one on the same day is a conflict"""
        checkin_date = self.today()
        try:
            if self._find_for_date(user_id, checkin_date):
                raise HTTPException(status_code=409, detail="You have already checked in today")

            payload = checkin_data.model_dump(exclude={"user_id"})
            payload["user_id"] = user_id
            payload["checkin_date"] = checkin_date.isoformat()

            result = self.supabase.table("daily_checkins").insert(payload).execute()
            if not result.data:
                raise HTTPException(status_code=500, detail="Failed to save check-in")

            row = result.data[0]
            logger.info(f"Check-in stored for user {user_id} on {checkin_date}")
            return CheckinSubmitResponse(
                message="Check-in saved successfully",
                checkin=CheckinResponse(**row),
                insights=immediate_insights(row),
                streak=self.current_streak(user_id)
            )
        except HTTPException:
            raise
        except Exception as e:
            if is_unique_violation(e):
                raise HTTPException(status_code=409, detail="You have already checked in today")
            raise HTTPException(status_code=500, detail=str(e))

    def list_history(self, user_id: str, limit: int = 30, offset: int = 0) -> CheckinHistoryResponse:
        """Most recent check-ins first"""
        try:
            result = self.supabase.table("daily_checkins")\
                .select("*")\
                .eq("user_id", user_id)\
                .order("checkin_date", desc=True)\
                .limit(limit)\
                .offset(offset)\
                .execute()
            checkins = [CheckinResponse(**row) for row in result.data]
            return CheckinHistoryResponse(checkins=checkins, count=len(checkins))
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def get_checkins_for_period(self, user_id: str, days: int) -> List[Dict[str, Any]]:
        """Rows for the last `days` days including today, oldest first"""
        start = self.today() - timedelta(days=days - 1)
        try:
            result = self.supabase.table("daily_checkins")\
                .select("*")\
                .eq("user_id", user_id)\
                .gte("checkin_date", start.isoformat())\
                .order("checkin_date")\
                .execute()
            return result.data or []
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def current_streak(self, user_id: str) -> int:
        try:
            result = self.supabase.table("daily_checkins")\
                .select("checkin_date")\
                .eq("user_id", user_id)\
                .order("checkin_date", desc=True)\
                .limit(STREAK_LOOKBACK)\
                .execute()
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))
        return analytics.compute_streak([row["checkin_date"] for row in result.data or []], self.today())

    def get_trends(self, user_id: str, period: str = "week") -> TrendsResponse:
        days = analytics.PERIOD_DAYS.get(period)
        if days is None:
            raise HTTPException(
                status_code=400,
                detail=f"Invalid period '{period}'. Use one of: {', '.join(analytics.PERIOD_DAYS)}"
            )
        checkins = self.get_checkins_for_period(user_id, days)
        return TrendsResponse(
            period=period,
            days=days,
            data_points=len(checkins),
            current_streak=self.current_streak(user_id),
            trends=analytics.build_trends(checkins, settings.trend_slope_threshold)
        )

    async def get_insights(self, user_id: str, days: int = 7, provider: Optional[OpenAIProvider] = None) -> InsightsResponse:
        if days < 1 or days > 365:
            raise HTTPException(status_code=400, detail="days must be between 1 and 365")
        checkins = self.get_checkins_for_period(user_id, days)
        if len(checkins) < settings.insights_min_checkins:
            return InsightsResponse(
                insights={
                    "insights": [],
                    "recommendations": [],
                    "correlations": [],
                    "data_summary": {
                        "total_checkins": len(checkins),
                        "consistency_rate": analytics.consistency_rate(len(checkins), days),
                        "date_range": None,
                    },
                },
                message=f"Complete at least {settings.insights_min_checkins} check-ins to unlock insights"
            )
        result = await period_insights(checkins, days, provider, settings.trend_slope_threshold)
        return InsightsResponse(insights=result)
