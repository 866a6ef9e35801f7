from fastapi import APIRouter, Depends
from app.database.supabase_client import get_supabase
from app.modules.assessments.questions import public_questions, MAX_SCORE
from app.modules.assessments.schemas import (
    AssessmentSubmit, AssessmentResultResponse, ReportRequest, ReportResponse,
    HealthReportListResponse, HealthReportDetailResponse
)
from app.modules.assessments.service import AssessmentService
from app.core.ai import OpenAIProvider, get_ai_provider
from app.core.dependencies import get_current_user_id, check_user_access, get_access_cache
from supabase import Client
from typing import Dict, Optional

router = APIRouter(prefix="/assessments", tags=["assessments"])
report_router = APIRouter(tags=["reports"])


def get_assessment_service(supabase: Client = Depends(get_supabase)) -> AssessmentService:
    return AssessmentService(supabase)


@router.get("/questions")
async def get_questions():
    """The onboarding questions (point values are not exposed)"""
    return {"questions": public_questions(), "max_score": MAX_SCORE}


@router.post("", response_model=AssessmentResultResponse, status_code=201)
async def submit_assessment(
    submission: AssessmentSubmit,
    current_user: Dict = Depends(get_current_user_id),
    service: AssessmentService = Depends(get_assessment_service),
    provider: Optional[OpenAIProvider] = Depends(get_ai_provider)
):
    """Score the assessment and store the result with insights"""
    return await service.submit_assessment(submission, current_user["id"], provider)


@router.get("/latest", response_model=AssessmentResultResponse)
async def get_latest_assessment(
    current_user: Dict = Depends(get_current_user_id),
    service: AssessmentService = Depends(get_assessment_service)
):
    return service.get_latest(current_user["id"])


@report_router.post("/generate-report", response_model=ReportResponse)
async def generate_report(
    request: ReportRequest,
    current_user: Dict = Depends(get_current_user_id),
    service: AssessmentService = Depends(get_assessment_service),
    supabase: Client = Depends(get_supabase),
    provider: Optional[OpenAIProvider] = Depends(get_ai_provider)
):
    """Generate a psychological report from seven free-text answers"""
    if request.user_id:
        check_user_access(request.user_id, current_user, supabase, allow_admin=False)
    return await service.generate_report(request, current_user["id"], provider)


@report_router.get("/reports/{user_id}", response_model=HealthReportListResponse)
async def list_reports(
    user_id: str,
    current_user: Dict = Depends(get_current_user_id),
    service: AssessmentService = Depends(get_assessment_service),
    supabase: Client = Depends(get_supabase),
    cache: Dict = Depends(get_access_cache)
):
    check_user_access(user_id, current_user, supabase, cache=cache)
    return service.list_reports(user_id)


@report_router.get("/report/{report_id}", response_model=HealthReportDetailResponse)
async def get_report(
    report_id: str,
    current_user: Dict = Depends(get_current_user_id),
    service: AssessmentService = Depends(get_assessment_service),
    supabase: Client = Depends(get_supabase),
    cache: Dict = Depends(get_access_cache)
):
    """Get one report; only its owner (or an admin) may read it"""
    response = service.get_report(report_id)
    check_user_access(response.data.user_id, current_user, supabase, cache=cache)
    return response
