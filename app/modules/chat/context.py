"""
User wellness context that personalises the companion: latest health report,
recent journals and meditation history.
"""

import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from supabase import Client

logger = logging.getLogger(__name__)

BASE_PROMPT = """You are Elmora, a warm, empathetic, and supportive AI wellness companion for a mental health and wellbeing platform. Your role is to provide personalized support, encouragement, and guidance.

PERSONALITY:
- Warm, caring, and empathetic friend
- Professional but approachable
- Encouraging and positive while being realistic
- Never judgmental
- Use emojis sparingly but appropriately 🌿💜✨

CAPABILITIES:
- Provide mental health support and coping strategies
- Suggest personalized wellness activities
- Track progress and celebrate wins
- Offer meditation and journaling prompts
- Help with stress, anxiety, and emotional challenges
- Provide crisis resources when needed

IMPORTANT GUIDELINES:
- You are NOT a replacement for professional therapy
- If severe issues are detected, recommend professional help
- Keep responses concise (2-4 sentences usually)
- Be specific and actionable in your advice
- Reference user's history when relevant
"""


@dataclass
class UserContext:
    latest_report: Optional[Dict[str, Any]] = None
    recent_journals: List[Dict[str, Any]] = field(default_factory=list)
    meditation_history: List[Dict[str, Any]] = field(default_factory=list)

    @property
    def has_report(self) -> bool:
        return bool(self.latest_report)

    @property
    def report(self) -> Dict[str, Any]:
        return (self.latest_report or {}).get("report") or {}

    @property
    def wellbeing_score(self) -> Any:
        return (self.report.get("overallStatus") or {}).get("wellbeingScore", "N/A")

    @property
    def meditation_minutes(self) -> int:
        return round(sum(m.get("duration") or 0 for m in self.meditation_history) / 60)


def load_user_context(supabase: Client, user_id: str) -> UserContext:
    """Best effort: any read failure yields an empty context rather than failing the chat."""
    try:
        reports = supabase.table("health_data")\
            .select("*")\
            .eq("user_id", user_id)\
            .order("created_at", desc=True)\
            .limit(1)\
            .execute()
        journals = supabase.table("journals")\
            .select("content, created_at")\
            .eq("user_id", user_id)\
            .order("created_at", desc=True)\
            .limit(5)\
            .execute()
        meditations = supabase.table("meditations")\
            .select("type, duration, created_at")\
            .eq("user_id", user_id)\
            .order("created_at", desc=True)\
            .limit(10)\
            .execute()
        return UserContext(
            latest_report=reports.data[0] if reports.data else None,
            recent_journals=journals.data or [],
            meditation_history=meditations.data or []
        )
    except Exception as e:
        logger.warning(f"Could not load user context for {user_id}: {e}")
        return UserContext()


def _numbered(items: List[str], empty: str) -> str:
    if not items:
        return empty
    return "\n".join(f"{i + 1}. {item}" for i, item in enumerate(items))


def _days_ago(timestamp: Any) -> Optional[int]:
    try:
        created = datetime.fromisoformat(str(timestamp).replace("Z", "+00:00"))
    except ValueError:
        return None
    if created.tzinfo is None:
        created = created.replace(tzinfo=timezone.utc)
    return (datetime.now(timezone.utc) - created).days


def build_system_prompt(context: UserContext, current_mood: Optional[str] = None) -> str:
    prompt = BASE_PROMPT + f"\nCURRENT USER MOOD: {current_mood or 'not specified'}\n"

    if context.has_report:
        report = context.report
        status = report.get("overallStatus") or {}
        traits = report.get("psychologicalTraits") or {}

        def trait(name: str) -> Any:
            return (traits.get(name) or {}).get("score", "N/A")

        strengths = [str(a) for a in (report.get("positiveAspects") or [])[:3]]
        concerns = [
            f"{c.get('area')} ({c.get('severity')})"
            for c in (report.get("areasOfConcern") or [])[:2]
            if isinstance(c, dict)
        ]
        immediate = [
            str(r.get("title"))
            for r in ((report.get("recommendations") or {}).get("immediate") or [])[:2]
            if isinstance(r, dict)
        ]
        prompt += (
            "\nUSER'S PSYCHOLOGICAL PROFILE (from recent assessment):\n"
            f"- Overall Wellbeing Score: {status.get('wellbeingScore', 'N/A')}/100\n"
            f"- Risk Level: {status.get('riskLevel', 'unknown')}\n"
            f"- Summary: {status.get('summary', 'No summary available')}\n\n"
            "KEY TRAITS:\n"
            f"- Resilience: {trait('resilience')}/100\n"
            f"- Emotional Regulation: {trait('emotionalRegulation')}/100\n"
            f"- Stress Management: {trait('stressManagement')}/100\n"
            f"- Growth Mindset: {trait('growthMindset')}/100\n"
            f"- Self-Esteem: {trait('selfEsteem')}/100\n\n"
            f"STRENGTHS TO ENCOURAGE:\n{_numbered(strengths, 'None noted yet')}\n\n"
            f"AREAS TO SUPPORT:\n{_numbered(concerns, 'None noted')}\n\n"
            f"TOP RECOMMENDATIONS:\n{_numbered(immediate, 'None yet')}\n"
        )

    if context.recent_journals:
        days = _days_ago(context.recent_journals[0].get("created_at"))
        last = f"{days} day(s) ago" if days is not None else "recently"
        prompt += f"\nRECENT JOURNALING: Last entry was {last}. Total recent entries: {len(context.recent_journals)}"

    if context.meditation_history:
        prompt += (
            f"\nRECENT MEDITATION: {len(context.meditation_history)} sessions, "
            f"{context.meditation_minutes} minutes total"
        )

    prompt += (
        "\n\nREMEMBER: Use this context to provide highly personalized, relevant advice. "
        "Reference their strengths and gently address concerns. Be their supportive wellness companion! 🌿"
    )
    return prompt
