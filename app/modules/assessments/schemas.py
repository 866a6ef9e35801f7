from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel
from typing import Optional, List, Dict, Any
from datetime import datetime


class AssessmentAnswer(BaseModel):
    id: str
    choice: str


class AssessmentBasics(BaseModel):
    name: Optional[str] = None
    bio: Optional[str] = None


class AssessmentSubmit(BaseModel):
    answers: List[AssessmentAnswer]
    basics: Optional[AssessmentBasics] = None


class AssessmentResultResponse(BaseModel):
    id: str
    user_id: str
    score: int
    category: str
    percent: int
    breakdown: List[Dict[str, Any]] = []
    insights: List[str] = []
    recommendations: List[str] = []
    created_at: Optional[datetime] = None


class ReportRequest(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    user_id: Optional[str] = None
    answers: List[str]


class ReportData(BaseModel):
    report_id: str
    user_id: str
    report: Dict[str, Any]
    timestamp: Optional[datetime] = None


class ReportResponse(BaseModel):
    success: bool = True
    message: str
    data: ReportData


class HealthReportRecord(BaseModel):
    id: str
    user_id: str
    answers: List[Any] = []
    report: Dict[str, Any] = {}
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class HealthReportListResponse(BaseModel):
    success: bool = True
    data: List[HealthReportRecord]


class HealthReportDetailResponse(BaseModel):
    success: bool = True
    data: HealthReportRecord
