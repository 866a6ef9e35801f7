"""
Deterministic companion content used when no AI provider is configured.
"""

from datetime import date
from typing import Dict, List, Optional

from app.modules.moods.mapping import AMAZING, MID, SAD

AFFIRMATIONS = [
    "You are growing every day, even on the days it doesn't feel like it.",
    "Your feelings are valid, and you have the strength to move through them.",
    "Small steps still move you forward. Today's effort matters.",
    "You deserve the same kindness you so easily give to others.",
    "Every breath is a fresh start. You are allowed to begin again.",
    "You have overcome hard days before, and you will do it again.",
    "Taking care of yourself is not selfish. It is necessary.",
]

MOOD_ACTIVITIES: Dict[str, List[Dict[str, str]]] = {
    SAD: [
        {"activity": "Box Breathing", "description": "Breathe in for 4, hold for 4, out for 4, hold for 4. Repeat five times.", "duration": "3 minutes", "icon": "🫁"},
        {"activity": "Kind Note to Self", "description": "Write three sentences to yourself as you would to a friend having a hard day.", "duration": "5 minutes", "icon": "💌"},
        {"activity": "Gentle Walk", "description": "Step outside and notice five things you can see and hear.", "duration": "10 minutes", "icon": "🚶"},
    ],
    MID: [
        {"activity": "Mindful Check-in", "description": "Close your eyes and scan your body from head to toe, noticing any tension.", "duration": "5 minutes", "icon": "🧘"},
        {"activity": "Gratitude List", "description": "Write down three things that went okay today, however small.", "duration": "5 minutes", "icon": "📝"},
        {"activity": "Focus Sprint", "description": "Start one 25-minute Pomodoro on a task you've been putting off.", "duration": "25 minutes", "icon": "🍅"},
    ],
    AMAZING: [
        {"activity": "Savor the Moment", "description": "Journal about what made today good so you can return to it later.", "duration": "5 minutes", "icon": "✨"},
        {"activity": "Share the Energy", "description": "Send an encouraging message to someone you care about.", "duration": "2 minutes", "icon": "💜"},
        {"activity": "Stretch Goal", "description": "Use this energy on a meaningful goal and take the first concrete step.", "duration": "15 minutes", "icon": "🎯"},
    ],
}


def daily_affirmation(today: date, strengths: Optional[List[str]] = None) -> str:
    """Same affirmation all day, rotating daily."""
    affirmation = AFFIRMATIONS[today.toordinal() % len(AFFIRMATIONS)]
    if strengths:
        return f"{affirmation} Remember your strength: {strengths[0]}"
    return affirmation


def mood_activities(mood_type: str) -> List[Dict[str, str]]:
    return [dict(a) for a in MOOD_ACTIVITIES.get(mood_type, MOOD_ACTIVITIES[MID])]


def score_trend(scores: List[float]) -> str:
    """Compare the newest wellbeing score against the previous one."""
    if len(scores) < 2:
        return "stable"
    latest, previous = scores[0], scores[1]
    if latest - previous >= 5:
        return "improving"
    if previous - latest >= 5:
        return "needs_attention"
    return "stable"
