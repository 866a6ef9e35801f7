from collections import Counter
from supabase import Client
from app.modules.meditations.schemas import MeditationCreate, MeditationResponse, MeditationStatsResponse
from typing import List
from fastapi import HTTPException


class MeditationService:
    def __init__(self, supabase: Client):
        self.supabase = supabase

    def create_meditation(self, meditation_data: MeditationCreate, user_id: str) -> MeditationResponse:
        """Record a finished meditation session"""
        try:
            result = self.supabase.table("meditations").insert({
                "user_id": user_id,
                "type": meditation_data.type or "mindfulness",
                "duration": meditation_data.duration
            }).execute()

            if not result.data:
                raise HTTPException(status_code=500, detail="Failed to save meditation session")

            return MeditationResponse(**result.data[0])
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def list_meditations(self, user_id: str, limit: int = 50, offset: int = 0) -> List[MeditationResponse]:
        try:
            result = self.supabase.table("meditations")\
                .select("*")\
                .eq("user_id", user_id)\
                .order("created_at", desc=True)\
                .limit(limit)\
                .offset(offset)\
                .execute()
            return [MeditationResponse(**row) for row in result.data]
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def get_stats(self, user_id: str) -> MeditationStatsResponse:
        """Totals over every session the user has recorded"""
        try:
            result = self.supabase.table("meditations")\
                .select("type, duration, created_at")\
                .eq("user_id", user_id)\
                .order("created_at", desc=True)\
                .execute()
            rows = result.data or []
            durations = [row.get("duration") or 0 for row in rows]
            total = sum(durations)
            count = len(rows)
            return MeditationStatsResponse(
                session_count=count,
                total_seconds=total,
                total_minutes=round(total / 60),
                average_session_length=round(total / count) if count else 0,
                longest_session=max(durations, default=0),
                by_type=dict(Counter(row.get("type") or "mindfulness" for row in rows)),
                last_session_at=rows[0]["created_at"] if rows else None
            )
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def delete_meditation(self, meditation_id: str, user_id: str) -> bool:
        try:
            result = self.supabase.table("meditations")\
                .delete()\
                .eq("id", meditation_id)\
                .eq("user_id", user_id)\
                .execute()

            if not result.data:
                raise HTTPException(status_code=404, detail="Meditation session not found")
            return True
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))
