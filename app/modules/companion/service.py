import logging
from datetime import datetime, timezone
from supabase import Client
from app.core.ai import OpenAIProvider
from app.modules.chat.context import UserContext, load_user_context
from app.modules.checkins.service import local_today
from app.modules.companion import fallback
from app.modules.companion.schemas import (
    AffirmationResponse, CompanionInsight, CompanionInsightsResponse,
    MoodRecommendation, MoodRecommendationsResponse, ProgressStats, ProgressSummaryResponse
)
from app.modules.moods.mapping import mood_type
from app.modules.profiles.service import ProfileService
from fastapi import HTTPException
from typing import Optional, List, Any

logger = logging.getLogger(__name__)

TRENDS = {"improving", "stable", "needs_attention"}


class CompanionService:
    def __init__(self, supabase: Client, provider: Optional[OpenAIProvider] = None):
        self.supabase = supabase
        self.provider = provider

    def _context(self, user_id: str) -> UserContext:
        return load_user_context(self.supabase, user_id)

    async def affirmation(self, user_id: str) -> AffirmationResponse:
        context = self._context(user_id)
        report = context.report
        strengths = [str(s) for s in (report.get("positiveAspects") or [])[:3]]
        now = datetime.now(timezone.utc)

        if self.provider is not None:
            concerns = [c.get("area") for c in (report.get("areasOfConcern") or [])[:2] if isinstance(c, dict)]
            profile = (
                f"Wellbeing Score: {context.wellbeing_score}/100\n"
                f"Strengths: {', '.join(strengths)}\n"
                f"Areas to support: {', '.join(str(c) for c in concerns)}"
            ) if context.has_report else "No assessment data available"
            prompt = (
                f"Based on this user's profile:\n{profile}\n\n"
                "Create ONE powerful, personalized affirmation (1-2 sentences) that acknowledges their "
                "strengths, encourages growth and feels personal, not generic.\n\n"
                "Return ONLY the affirmation text, nothing else."
            )
            try:
                text = await self.provider.chat(prompt, max_tokens=100, temperature=0.9)
                if text:
                    return AffirmationResponse(affirmation=text.strip('"'), source="ai", timestamp=now)
            except Exception as e:
                logger.warning(f"AI affirmation failed, using fallback: {e}")

        return AffirmationResponse(
            affirmation=fallback.daily_affirmation(local_today(), strengths),
            source="fallback",
            timestamp=now
        )

    def _rule_insights(self, context: UserContext) -> List[CompanionInsight]:
        insights = []
        score = context.wellbeing_score
        if isinstance(score, (int, float)):
            insights.append(CompanionInsight(
                title="Wellbeing Baseline",
                message=f"Your latest assessment put your wellbeing at {score}/100. Check in regularly to see how it moves.",
                type="strength" if score >= 60 else "improvement",
                icon="📊"
            ))
        if context.recent_journals:
            insights.append(CompanionInsight(
                title="Reflective Habit",
                message=f"You've written {len(context.recent_journals)} recent journal entries. Reflection builds self-awareness.",
                type="habit",
                icon="📝"
            ))
        else:
            insights.append(CompanionInsight(
                title="Try Journaling",
                message="A few lines a day can help you notice patterns in your mood.",
                type="improvement",
                icon="✍️"
            ))
        if context.meditation_history:
            insights.append(CompanionInsight(
                title="Mindful Minutes",
                message=f"{len(context.meditation_history)} recent meditation sessions, {context.meditation_minutes} minutes in total.",
                type="habit",
                icon="🧘"
            ))
        else:
            insights.append(CompanionInsight(
                title="Start Small with Meditation",
                message="Even a three-minute breathing session can lower stress.",
                type="improvement",
                icon="🌿"
            ))
        return insights

    async def insights(self, user_id: str) -> CompanionInsightsResponse:
        context = self._context(user_id)
        if not context.has_report:
            return CompanionInsightsResponse(
                insights=[],
                message="Complete your health assessment to get personalized insights!"
            )

        if self.provider is not None:
            prompt = (
                "Analyze this user's wellness data and provide 3-4 actionable insights:\n\n"
                f"Profile:\n- Wellbeing Score: {context.wellbeing_score}/100\n"
                f"- Recent Journals: {len(context.recent_journals)} entries\n"
                f"- Meditation: {len(context.meditation_history)} sessions\n\n"
                'Respond with JSON: {"insights": [{"title": "Brief title", "message": "Specific observation '
                'and suggestion", "type": "strength|improvement|habit", "icon": "relevant emoji"}]}'
            )
            try:
                parsed = await self.provider.chat_json(prompt, max_tokens=400)
                items = [CompanionInsight(**item) for item in parsed.get("insights") or []]
                if items:
                    return CompanionInsightsResponse(insights=items, source="ai")
            except Exception as e:
                logger.warning(f"AI insights failed, using fallback: {e}")

        return CompanionInsightsResponse(insights=self._rule_insights(context), source="fallback")

    async def mood_recommendations(self, user_id: str, current_mood: Optional[str]) -> MoodRecommendationsResponse:
        if not current_mood or not current_mood.strip():
            raise HTTPException(status_code=400, detail="Current mood is required")
        mood = current_mood.strip().lower()
        kind = mood_type(mood)

        if self.provider is not None:
            context = self._context(user_id)
            profile = f"\nTheir profile:\n- Wellbeing Score: {context.wellbeing_score}/100" if context.has_report else ""
            prompt = (
                f"User is currently feeling: {mood}\n{profile}\n\n"
                "Provide 3 specific, actionable activities to help them right now.\n\n"
                'Respond with JSON: {"recommendations": [{"activity": "Brief activity name", '
                '"description": "How to do it", "duration": "estimated time", "icon": "emoji"}]}'
            )
            try:
                parsed = await self.provider.chat_json(prompt, max_tokens=350, temperature=0.8)
                items = [MoodRecommendation(**item) for item in parsed.get("recommendations") or []]
                if items:
                    return MoodRecommendationsResponse(mood=mood, mood_type=kind, recommendations=items, source="ai")
            except Exception as e:
                logger.warning(f"AI mood recommendations failed, using fallback: {e}")

        return MoodRecommendationsResponse(
            mood=mood,
            mood_type=kind,
            recommendations=[MoodRecommendation(**a) for a in fallback.mood_activities(kind)],
            source="fallback"
        )

    def _wellbeing_history(self, user_id: str) -> List[float]:
        try:
            result = self.supabase.table("health_data")\
                .select("report, created_at")\
                .eq("user_id", user_id)\
                .order("created_at", desc=True)\
                .limit(5)\
                .execute()
        except Exception as e:
            logger.warning(f"Could not load report history for {user_id}: {e}")
            return []
        scores = []
        for row in result.data or []:
            score: Any = ((row.get("report") or {}).get("overallStatus") or {}).get("wellbeingScore")
            if isinstance(score, (int, float)):
                scores.append(float(score))
        return scores

    async def progress_summary(self, user_id: str) -> ProgressSummaryResponse:
        context = self._context(user_id)
        scores = self._wellbeing_history(user_id)
        stats = ProgressStats(
            total_journals=len(context.recent_journals),
            total_meditations=len(context.meditation_history),
            streak_days=ProfileService(self.supabase).activity_streak(user_id)
        )
        trend = fallback.score_trend(scores)

        if self.provider is not None:
            history = f"\n- Historical Progress: {len(scores)} reports over time" if len(scores) > 1 else ""
            prompt = (
                "Analyze this user's wellness journey:\n\n"
                f"Current Status:\n- Wellbeing Score: {context.wellbeing_score}/100\n"
                f"- Recent Activity: {stats.total_journals} journals, {stats.total_meditations} meditations\n"
                f"- Current streak: {stats.streak_days} days{history}\n\n"
                "Create an encouraging progress summary (2-3 sentences) that highlights positive trends, "
                "acknowledges their commitment and motivates continued practice.\n\n"
                'Respond with JSON: {"summary": "Progress summary text", '
                '"trend": "improving|stable|needs_attention", "encouragement": "One-line motivational message"}'
            )
            try:
                parsed = await self.provider.chat_json(prompt, max_tokens=200)
                if parsed.get("summary") and parsed.get("encouragement"):
                    return ProgressSummaryResponse(
                        summary=str(parsed["summary"]),
                        trend=parsed.get("trend") if parsed.get("trend") in TRENDS else trend,
                        encouragement=str(parsed["encouragement"]),
                        source="ai",
                        stats=stats,
                        wellbeing_score=context.wellbeing_score
                    )
            except Exception as e:
                logger.warning(f"AI progress summary failed, using fallback: {e}")

        activity = stats.total_journals + stats.total_meditations
        if activity:
            summary = (
                f"You've logged {stats.total_journals} recent journal entries and "
                f"{stats.total_meditations} meditation sessions. That consistency is how lasting change happens."
            )
        else:
            summary = "Your journey is just getting started. One journal entry or a short meditation is a great first step."
        encouragement = (
            f"{stats.streak_days} days in a row, keep it going!" if stats.streak_days > 1
            else "Every small step counts. Show up for yourself today."
        )
        return ProgressSummaryResponse(
            summary=summary,
            trend=trend,
            encouragement=encouragement,
            source="fallback",
            stats=stats,
            wellbeing_score=context.wellbeing_score
        )
