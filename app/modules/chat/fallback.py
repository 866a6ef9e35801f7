"""
Keyword companion used when no AI provider is configured or the provider fails,
plus the crisis check that always runs before any reply is generated.
"""

import random
from typing import Dict, List, Optional

CRISIS_KEYWORDS = ["suicide", "kill myself", "end my life", "want to die", "self harm", "hurt myself"]

CRISIS_RESPONSE = """I'm really concerned about what you're sharing with me. Please know that you're not alone, and there are people who can help right now.

🆘 **Crisis Resources:**
- **National Suicide Prevention Lifeline**: 988 (call or text)
- **Crisis Text Line**: Text HOME to 741741
- **International Association for Suicide Prevention**: https://www.iasp.info/resources/Crisis_Centres/

Please reach out to these resources or a trusted person immediately. Your life matters, and things can get better with proper support. 💜"""

# Checked in this order; the first intent with a matching keyword wins
INTENT_KEYWORDS = [
    ("mood", ["feel", "mood", "emotion"]),
    ("journal", ["journal", "write", "thoughts"]),
    ("meditation", ["meditat", "relax", "breathe", "mindful"]),
    ("goals", ["goal", "objective", "target", "achieve"]),
    ("rewards", ["reward", "celebrate", "accomplish", "progress"]),
]

INTENT_POINTS = {
    "mood": 2,
    "journal": 3,
    "meditation": 3,
    "goals": 2,
}

FALLBACK_RESPONSES: Dict[str, List[str]] = {
    "mood": [
        "I understand how you're feeling. Remember that all emotions are valid and temporary. What would help you feel a bit better right now?",
        "Thank you for sharing how you feel with me. Your emotional awareness is a sign of strength. How can I support you today?",
        "I hear you. It's important to acknowledge our feelings. What's one small thing that might bring you comfort today?",
    ],
    "journal": [
        "Journaling is a wonderful way to process thoughts and emotions. What's been on your mind lately that you'd like to explore?",
        "Let's start with a simple prompt: What are three things you're grateful for today, no matter how small?",
        "Writing can be very therapeutic. Would you like to reflect on something specific, or shall I give you a gentle prompt to begin?",
    ],
    "meditation": [
        "Let's take a moment to center ourselves. Find a comfortable position and take three deep breaths with me. Breathe in... and out...",
        "Meditation can bring such peace. Would you like to try a brief mindfulness exercise, or would you prefer a guided relaxation?",
        "Let's practice some mindfulness together. Close your eyes if you feel comfortable, and focus on your breath for a moment.",
    ],
    "goals": [
        "Goals give us direction and purpose. What's something you've been wanting to work towards?",
        "I'm here to help you with your goals. What would you like to focus on - setting new goals or checking progress on existing ones?",
        "Every step towards your goals matters, no matter how small. What's one goal that's important to you right now?",
    ],
    "rewards": [
        "You've been doing great work on your wellness journey! What accomplishment would you like to celebrate today?",
        "Recognizing your progress is so important. What positive changes have you noticed in yourself lately?",
        "You deserve acknowledgment for the effort you're putting in. What reward would feel meaningful to you right now?",
    ],
    "general": [
        "I'm here to support your wellness journey. Whether it's checking in on your mood, journaling, meditation, goals, or celebrating your progress - what would be most helpful right now?",
        "As your wellness companion, I'm here to listen and support you. What's on your heart today?",
        "Every moment you spend focusing on your well-being is valuable. How can I best support you in this moment?",
    ],
}


def is_crisis(message: str) -> bool:
    lowered = message.lower()
    return any(keyword in lowered for keyword in CRISIS_KEYWORDS)


def detect_intent(message: str) -> str:
    lowered = message.lower()
    for intent, keywords in INTENT_KEYWORDS:
        if any(keyword in lowered for keyword in keywords):
            return intent
    return "general"


def points_for(intent: str) -> int:
    return INTENT_POINTS.get(intent, 1)


def fallback_reply(message: str, rng: Optional[random.Random] = None) -> Dict[str, object]:
    """Canned reply for the detected intent with the engagement points it earns."""
    intent = detect_intent(message)
    choices = FALLBACK_RESPONSES.get(intent, FALLBACK_RESPONSES["general"])
    picker = rng or random
    return {
        "intent": intent,
        "response": picker.choice(choices),
        "points_awarded": points_for(intent),
    }
