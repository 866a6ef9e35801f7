from datetime import datetime, timezone
from supabase import Client
from app.modules.journals.schemas import JournalCreate, JournalUpdate, JournalResponse
from typing import List
from fastapi import HTTPException


class JournalService:
    def __init__(self, supabase: Client):
        self.supabase = supabase

    def create_journal(self, journal_data: JournalCreate, user_id: str) -> JournalResponse:
        """Create a journal entry"""
        try:
            result = self.supabase.table("journals").insert({
                "user_id": user_id,
                "content": journal_data.content,
                "mood": journal_data.mood
            }).execute()

            if not result.data:
                raise HTTPException(status_code=500, detail="Failed to create journal entry")

            return JournalResponse(**result.data[0])
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def list_journals(self, user_id: str, limit: int = 50, offset: int = 0) -> List[JournalResponse]:
        """List the user's journal entries, newest first"""
        try:
            result = self.supabase.table("journals")\
                .select("*")\
                .eq("user_id", user_id)\
                .order("created_at", desc=True)\
                .limit(limit)\
                .offset(offset)\
                .execute()
            return [JournalResponse(**row) for row in result.data]
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def get_journal(self, journal_id: str, user_id: str) -> JournalResponse:
        try:
            result = self.supabase.table("journals")\
                .select("*")\
                .eq("id", journal_id)\
                .eq("user_id", user_id)\
                .limit(1)\
                .execute()

            if not result.data:
                raise HTTPException(status_code=404, detail="Journal entry not found")

            return JournalResponse(**result.data[0])
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def update_journal(self, journal_id: str, journal_data: JournalUpdate, user_id: str) -> JournalResponse:
        try:
            update_data = journal_data.model_dump(exclude_none=True)
            if not update_data:
                return self.get_journal(journal_id, user_id)
            update_data["updated_at"] = datetime.now(timezone.utc).isoformat()

            # user_id filter keeps users from editing each other's entries
            result = self.supabase.table("journals")\
                .update(update_data)\
                .eq("id", journal_id)\
                .eq("user_id", user_id)\
                .execute()

            if not result.data:
                raise HTTPException(status_code=404, detail="Journal entry not found")

            return JournalResponse(**result.data[0])
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def delete_journal(self, journal_id: str, user_id: str) -> bool:
        try:
            result = self.supabase.table("journals")\
                .delete()\
                .eq("id", journal_id)\
                .eq("user_id", user_id)\
                .execute()

            if not result.data:
                raise HTTPException(status_code=404, detail="Journal entry not found")
            return True
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))
