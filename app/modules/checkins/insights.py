"""
Rule-based insight engine for daily check-ins, optionally refined by OpenAI.
"""

import json
import logging
from typing import Any, Dict, List, Optional, Sequence

from app.core.ai import OpenAIProvider
from app.modules.checkins import analytics
from app.modules.moods.mapping import NEGATIVE_MOODS, POSITIVE_MOODS, mood_emoji, mood_type

logger = logging.getLogger(__name__)

INSIGHTS_SYSTEM_PROMPT = """You are a supportive wellness coach analysing a user's daily check-ins.
You receive pre-computed statistics and a draft analysis. Improve the wording and add any
patterns you see, but never invent numbers. Respond with a single JSON object with the keys
"insights", "recommendations" and "correlations", using exactly the same item fields as the draft.
Do not give medical diagnoses."""


def immediate_insights(checkin: Dict[str, Any]) -> Dict[str, Any]:
    """Quick feedback shown right after a check-in is submitted."""
    insights: List[Dict[str, str]] = []
    sleep = checkin.get("sleep_quality")
    stress = checkin.get("stress_level")
    energy = checkin.get("energy_level")
    mood = (checkin.get("mood") or "").lower()

    if sleep is not None:
        if sleep >= 8:
            insights.append({
                "type": "positive",
                "title": "Great Sleep",
                "message": "You slept well last night. Good rest fuels everything else.",
                "emoji": "😴",
            })
        elif sleep <= 4:
            insights.append({
                "type": "attention",
                "title": "Rough Night",
                "message": "Your sleep was poor. Try winding down earlier tonight.",
                "emoji": "🌙",
            })

    if stress is not None:
        if stress >= 7:
            insights.append({
                "type": "attention",
                "title": "High Stress",
                "message": "Stress is running high today. A short breathing break can help.",
                "emoji": "🧘",
            })
        elif stress <= 3:
            insights.append({
                "type": "positive",
                "title": "Feeling Relaxed",
                "message": "Your stress is low today. Notice what is working for you.",
                "emoji": "🌿",
            })

    if energy is not None:
        if energy >= 8:
            insights.append({
                "type": "positive",
                "title": "High Energy",
                "message": "You have plenty of energy. A good day to tackle something important.",
                "emoji": "⚡",
            })
        elif energy <= 3:
            insights.append({
                "type": "attention",
                "title": "Low Energy",
                "message": "Energy is low today. Be gentle with yourself and keep plans light.",
                "emoji": "🔋",
            })

    if mood in POSITIVE_MOODS:
        insights.append({
            "type": "positive",
            "title": "Positive Mood",
            "message": "You're in a good mood today. Take a moment to savour it.",
            "emoji": mood_emoji(mood),
        })
    elif mood in NEGATIVE_MOODS:
        insights.append({
            "type": "support",
            "title": "Tough Day",
            "message": "It's okay to have hard days. Consider journaling or reaching out to someone.",
            "emoji": "💙",
        })

    if not insights:
        insights.append({
            "type": "neutral",
            "title": "Check-in Complete",
            "message": "Thanks for checking in. Consistency is how patterns become visible.",
            "emoji": "✅",
        })

    return {"insights": insights, "mood_type": mood_type(mood)}


def _average(values: Sequence[float]) -> Optional[float]:
    return sum(values) / len(values) if values else None


def _series(checkins: Sequence[Dict[str, Any]], key: str) -> List[float]:
    return [c[key] for c in checkins if c.get(key) is not None]


def rule_insights(checkins: Sequence[Dict[str, Any]], days: int, threshold: float = analytics.DEFAULT_THRESHOLD) -> Dict[str, Any]:
    """Deterministic period analysis. Checkins must be non-empty."""
    ordered = sorted(checkins, key=lambda c: analytics.to_date(c["checkin_date"]))
    energy = _series(ordered, "energy_level")
    sleep = _series(ordered, "sleep_quality")
    stress = _series(ordered, "stress_level")

    insights: List[Dict[str, str]] = []
    recommendations: List[Dict[str, str]] = []
    correlations: List[Dict[str, Any]] = []

    avg_sleep = _average(sleep)
    if avg_sleep is not None:
        if avg_sleep < 6:
            insights.append({
                "category": "sleep",
                "type": "concern",
                "title": "Sleep Needs Attention",
                "observation": f"Your average sleep quality is {avg_sleep:.1f}/10.",
                "impact": "Poor sleep tends to lower energy and raise stress the next day.",
                "emoji": "😴",
            })
            recommendations.append({
                "title": "Build a Wind-down Routine",
                "description": "Keep a consistent bedtime and put screens away 30 minutes before sleep.",
                "priority": "high",
                "category": "sleep",
                "emoji": "🌙",
            })
        elif avg_sleep >= 7.5:
            insights.append({
                "category": "sleep",
                "type": "strength",
                "title": "Solid Sleep",
                "observation": f"Your average sleep quality is {avg_sleep:.1f}/10.",
                "impact": "Good sleep is supporting your energy and mood.",
                "emoji": "🛌",
            })

    avg_stress = _average(stress)
    if avg_stress is not None:
        stress_trend = analytics.stress_direction(analytics.linear_slope(stress), threshold)
        if avg_stress >= 7 or stress_trend == "increasing":
            insights.append({
                "category": "stress",
                "type": "concern",
                "title": "Stress Is Building",
                "observation": f"Average stress is {avg_stress:.1f}/10 and the trend is {stress_trend}.",
                "impact": "Sustained stress makes it harder to focus and rest.",
                "emoji": "😣",
            })
            recommendations.append({
                "title": "Schedule Short Resets",
                "description": "Take a five-minute breathing or meditation break between tasks.",
                "priority": "high",
                "category": "stress",
                "emoji": "🧘",
            })
        elif avg_stress <= 4:
            insights.append({
                "category": "stress",
                "type": "strength",
                "title": "Stress Under Control",
                "observation": f"Average stress is a manageable {avg_stress:.1f}/10.",
                "impact": "Low stress leaves room for focus and creativity.",
                "emoji": "🌿",
            })

    avg_energy = _average(energy)
    if avg_energy is not None:
        energy_trend = analytics.trend_direction(analytics.linear_slope(energy), threshold)
        if energy_trend == "declining" or avg_energy < 5:
            insights.append({
                "category": "energy",
                "type": "concern",
                "title": "Energy Dipping",
                "observation": f"Average energy is {avg_energy:.1f}/10 and the trend is {energy_trend}.",
                "impact": "Low energy often follows poor sleep or too little movement.",
                "emoji": "🔋",
            })
            recommendations.append({
                "title": "Move a Little Every Day",
                "description": "A 15-minute walk or light stretch can lift energy noticeably.",
                "priority": "medium",
                "category": "energy",
                "emoji": "🚶",
            })
        elif energy_trend == "improving":
            insights.append({
                "category": "energy",
                "type": "strength",
                "title": "Energy Rising",
                "observation": f"Your energy has been improving, averaging {avg_energy:.1f}/10.",
                "impact": "Whatever you've been doing lately is paying off.",
                "emoji": "⚡",
            })

    pattern = analytics.mood_distribution(ordered)
    dominant = pattern["dominant"]
    negative = sum(n for m, n in pattern["distribution"].items() if m in NEGATIVE_MOODS)
    if ordered and negative / len(ordered) >= 0.5:
        insights.append({
            "category": "mood",
            "type": "concern",
            "title": "Difficult Stretch",
            "observation": f"Most recent check-ins were low moods, most often '{dominant}'.",
            "impact": "Persistent low mood is worth paying attention to.",
            "emoji": "💙",
        })
        recommendations.append({
            "title": "Reach Out",
            "description": "Talk to someone you trust, and consider professional support if this continues.",
            "priority": "high",
            "category": "mood",
            "emoji": "🤝",
        })
    else:
        insights.append({
            "category": "mood",
            "type": "observation",
            "title": "Mood Pattern",
            "observation": f"Your most common mood was '{dominant}' across {pattern['variety']} different moods.",
            "impact": "Tracking mood helps you notice what lifts you up.",
            "emoji": mood_emoji(dominant),
        })

    all_energy = [c.get("energy_level") for c in ordered]
    pairs = [
        ("sleep quality", "energy", [c.get("sleep_quality") for c in ordered], all_energy),
        ("stress", "energy", [c.get("stress_level") for c in ordered], all_energy),
    ]
    for label_a, label_b, xs, ys in pairs:
        described = analytics.describe_correlation(analytics.pearson(xs, ys), label_a, label_b)
        if described["strength"] >= 0.4:
            correlations.append({
                "factor1": label_a,
                "factor2": label_b,
                "relationship": described["direction"],
                "strength": described["strength"],
                "insight": described["interpretation"],
            })

    rate = analytics.consistency_rate(len({analytics.to_date(c["checkin_date"]) for c in ordered}), days)
    if rate < 50:
        recommendations.append({
            "title": "Check In More Often",
            "description": "Daily check-ins make your trends and insights much more accurate.",
            "priority": "low",
            "category": "habits",
            "emoji": "📅",
        })

    return {
        "insights": insights,
        "recommendations": recommendations,
        "correlations": correlations,
        "data_summary": {
            "total_checkins": len(ordered),
            "consistency_rate": rate,
            "date_range": {
                "from": str(analytics.to_date(ordered[0]["checkin_date"])),
                "to": str(analytics.to_date(ordered[-1]["checkin_date"])),
            },
        },
    }


async def period_insights(
    checkins: Sequence[Dict[str, Any]],
    days: int,
    provider: Optional[OpenAIProvider] = None,
    threshold: float = analytics.DEFAULT_THRESHOLD,
) -> Dict[str, Any]:
    """Rule analysis, rewritten by the model when one is configured."""
    result = rule_insights(checkins, days, threshold)
    if provider is None:
        return result

    prompt = (
        f"Statistics for the last {days} days:\n"
        f"{json.dumps(analytics.build_trends(checkins, threshold), default=str)}\n\n"
        f"Draft analysis:\n"
        f"{json.dumps({k: result[k] for k in ('insights', 'recommendations', 'correlations')})}"
    )
    try:
        refined = await provider.chat_json(prompt, system_prompt=INSIGHTS_SYSTEM_PROMPT, max_tokens=1200)
        for key in ("insights", "recommendations", "correlations"):
            if not isinstance(refined.get(key), list):
                raise ValueError(f"AI insights missing '{key}' list")
        result.update({key: refined[key] for key in ("insights", "recommendations", "correlations")})
    except Exception as e:
        logger.warning(f"AI insight generation failed, using rule-based insights: {e}")
    return result
