import logging
from supabase import Client
from app.core.ai import OpenAIProvider, require_ai
from app.modules.assessments.questions import (
    AssessmentError, MAX_SCORE, score_assessment, fallback_insights
)
from app.modules.assessments.report import REPORT_QUESTIONS, REPORT_SYSTEM_PROMPT, build_report_prompt
from app.modules.assessments.schemas import (
    AssessmentSubmit, AssessmentResultResponse, ReportRequest, ReportResponse, ReportData,
    HealthReportRecord, HealthReportListResponse, HealthReportDetailResponse
)
from fastapi import HTTPException
from typing import Optional, Dict, Any, List

logger = logging.getLogger(__name__)

INSIGHTS_SYSTEM_PROMPT = (
    "You are a wellness coach analyzing someone's well-being assessment results. "
    "Respond with a JSON object with \"insights\" and \"recommendations\" arrays of short strings."
)


class AssessmentService:
    def __init__(self, supabase: Client):
        self.supabase = supabase

    async def _insights(self, score: int, category: str, basics: Dict[str, Any], provider: Optional[OpenAIProvider]) -> Dict[str, List[str]]:
        if provider is None:
            return fallback_insights(score)
        prompt = (
            f"User Profile:\n- Name: {basics.get('name') or 'Friend'}\n"
            f"- Bio: {basics.get('bio') or 'No bio provided'}\n"
            f"- Assessment Score: {score}/{MAX_SCORE}\n- Category: {category}\n\n"
            f"Based on this {category} score of {score}/{MAX_SCORE}, provide:\n"
            "1. 3-5 personalized insights about their well-being mindset (each 1-2 sentences)\n"
            "2. 3-5 specific, actionable recommendations for improvement (each 1-2 sentences)\n\n"
            "Keep insights positive but realistic. Focus on growth potential."
        )
        try:
            parsed = await provider.chat_json(prompt, system_prompt=INSIGHTS_SYSTEM_PROMPT)
            insights = [str(i) for i in parsed.get("insights") or []]
            recommendations = [str(r) for r in parsed.get("recommendations") or []]
            if not insights or not recommendations:
                raise ValueError("AI returned empty insights")
            return {"insights": insights, "recommendations": recommendations}
        except Exception as e:
            logger.warning(f"AI assessment insights failed, using fallback: {e}")
            return fallback_insights(score)

    async def submit_assessment(self, submission: AssessmentSubmit, user_id: str, provider: Optional[OpenAIProvider] = None) -> AssessmentResultResponse:
        """Score the onboarding assessment, attach insights and store the result"""
        answers = [a.model_dump() for a in submission.answers]
        try:
            result = score_assessment(answers)
        except AssessmentError as e:
            raise HTTPException(status_code=400, detail=str(e))

        basics = submission.basics.model_dump() if submission.basics else {}
        extras = await self._insights(result["score"], result["category"], basics, provider)

        try:
            stored = self.supabase.table("assessment_results").insert({
                "user_id": user_id,
                "answers": [{"id": a["id"], "choice": a["choice"]} for a in answers],
                "score": result["score"],
                "category": result["category"],
                "ai_insights": extras
            }).execute()

            if not stored.data:
                raise HTTPException(status_code=500, detail="Failed to save assessment")

            self._complete_onboarding(user_id)
            row = stored.data[0]
            return AssessmentResultResponse(
                id=row["id"],
                user_id=user_id,
                score=result["score"],
                category=result["category"],
                percent=result["percent"],
                breakdown=result["breakdown"],
                insights=extras["insights"],
                recommendations=extras["recommendations"],
                created_at=row.get("created_at")
            )
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def _complete_onboarding(self, user_id: str) -> None:
        try:
            self.supabase.table("profiles").upsert({
                "id": user_id,
                "onboarding_completed": True
            }).execute()
        except Exception as e:
            logger.warning(f"Could not mark onboarding complete for {user_id}: {e}")

    def get_latest(self, user_id: str) -> AssessmentResultResponse:
        try:
            result = self.supabase.table("assessment_results")\
                .select("*")\
                .eq("user_id", user_id)\
                .order("created_at", desc=True)\
                .limit(1)\
                .execute()

            if not result.data:
                raise HTTPException(status_code=404, detail="No assessment found")

            row = result.data[0]
            score = row.get("score") or 0
            # Stored answers are re-scored to rebuild the breakdown
            try:
                breakdown = score_assessment(row.get("answers") or [])["breakdown"]
            except (AssessmentError, KeyError):
                breakdown = []
            ai_insights = row.get("ai_insights") or {}
            return AssessmentResultResponse(
                id=row["id"],
                user_id=row["user_id"],
                score=score,
                category=row["category"],
                percent=round(score / MAX_SCORE * 100),
                breakdown=breakdown,
                insights=ai_insights.get("insights") or [],
                recommendations=ai_insights.get("recommendations") or [],
                created_at=row.get("created_at")
            )
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    async def generate_report(self, request: ReportRequest, user_id: str, provider: Optional[OpenAIProvider]) -> ReportResponse:
        """Generate and store the AI mental-health report for seven free-text answers"""
        count = len(REPORT_QUESTIONS)
        if len(request.answers) != count:
            raise HTTPException(status_code=400, detail=f"answers must be an array of {count} responses")
        if any(not a or not a.strip() for a in request.answers):
            raise HTTPException(status_code=400, detail=f"All {count} questions must be answered")

        provider = require_ai(provider)
        answers = [a.strip() for a in request.answers]
        logger.info(f"Generating AI report for user {user_id}")
        try:
            report = await provider.chat_json(
                build_report_prompt(answers),
                system_prompt=REPORT_SYSTEM_PROMPT,
                max_tokens=3000
            )
        except Exception as e:
            logger.error(f"Report generation failed: {e}")
            raise HTTPException(status_code=502, detail=f"Failed to generate AI report: {e}")

        try:
            stored = self.supabase.table("health_data").insert({
                "user_id": user_id,
                "answers": answers,
                "report": report
            }).execute()

            if not stored.data:
                raise HTTPException(status_code=500, detail="Failed to store report")

            row = stored.data[0]
            return ReportResponse(
                message="Mental health report generated successfully",
                data=ReportData(
                    report_id=row["id"],
                    user_id=user_id,
                    report=report,
                    timestamp=row.get("created_at")
                )
            )
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=f"Failed to store report: {e}")

    def list_reports(self, user_id: str) -> HealthReportListResponse:
        try:
            result = self.supabase.table("health_data")\
                .select("*")\
                .eq("user_id", user_id)\
                .order("created_at", desc=True)\
                .execute()
            return HealthReportListResponse(data=[HealthReportRecord(**row) for row in result.data])
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def get_report(self, report_id: str) -> HealthReportDetailResponse:
        try:
            result = self.supabase.table("health_data")\
                .select("*")\
                .eq("id", report_id)\
                .limit(1)\
                .execute()

            if not result.data:
                raise HTTPException(status_code=404, detail="Report not found")

            return HealthReportDetailResponse(data=HealthReportRecord(**result.data[0]))
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))
