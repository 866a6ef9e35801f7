from fastapi import APIRouter, Depends, Query
from app.database.supabase_client import get_supabase
from app.modules.journals.schemas import JournalCreate, JournalUpdate, JournalResponse
from app.modules.journals.service import JournalService
from app.core.dependencies import get_current_user_id
from supabase import Client
from typing import List, Dict

router = APIRouter(prefix="/journals", tags=["journals"])


def get_journal_service(supabase: Client = Depends(get_supabase)) -> JournalService:
    return JournalService(supabase)


@router.post("", response_model=JournalResponse, status_code=201)
async def create_journal(
    journal_data: JournalCreate,
    current_user: Dict = Depends(get_current_user_id),
    service: JournalService = Depends(get_journal_service)
):
    """Write a new journal entry"""
    return service.create_journal(journal_data, current_user["id"])


@router.get("", response_model=List[JournalResponse])
async def list_journals(
    limit: int = Query(50, ge=1, le=200),
    offset: int = Query(0, ge=0),
    current_user: Dict = Depends(get_current_user_id),
    service: JournalService = Depends(get_journal_service)
):
    """List your journal entries, newest first"""
    return service.list_journals(current_user["id"], limit=limit, offset=offset)


@router.get("/{journal_id}", response_model=JournalResponse)
async def get_journal(
    journal_id: str,
    current_user: Dict = Depends(get_current_user_id),
    service: JournalService = Depends(get_journal_service)
):
    return service.get_journal(journal_id, current_user["id"])


@router.put("/{journal_id}", response_model=JournalResponse)
async def update_journal(
    journal_id: str,
    journal_data: JournalUpdate,
    current_user: Dict = Depends(get_current_user_id),
    service: JournalService = Depends(get_journal_service)
):
    return service.update_journal(journal_id, journal_data, current_user["id"])


@router.delete("/{journal_id}", status_code=204)
async def delete_journal(
    journal_id: str,
    current_user: Dict = Depends(get_current_user_id),
    service: JournalService = Depends(get_journal_service)
):
    service.delete_journal(journal_id, current_user["id"])
    return None
