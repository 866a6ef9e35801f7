"""
The ten-question onboarding assessment and its scoring rubric.

Every question has four options A-D worth 0-3 points; the best answer is
always the growth-oriented one. The total (0-30) places the user in one of
five categories, each with a fixed set of insights and recommendations used
when no AI provider is available.
"""

from typing import Any, Dict, Iterable, List

OPTION_KEYS = ("A", "B", "C", "D")

QUESTIONS: List[Dict[str, Any]] = [
    {
        "id": "Q1",
        "text": "When you make a mistake or face a setback, how do you typically respond?",
        "options": [
            {"key": "A", "label": "I feel like giving up and think I'm not good enough.", "points": 0},
            {"key": "B", "label": "I feel disappointed but try to learn from it and adjust my approach.", "points": 2},
            {"key": "C", "label": "I see it as a learning opportunity and plan what to do differently.", "points": 3},
            {"key": "D", "label": "I ignore it and blame outside factors instead.", "points": 1},
        ],
    },
    {
        "id": "Q2",
        "text": "When someone offers you critical feedback, what is your usual reaction?",
        "options": [
            {"key": "A", "label": "I take it personally and feel upset or defensive.", "points": 0},
            {"key": "B", "label": "It stings, but I try to see if there's something useful in it.", "points": 2},
            {"key": "C", "label": "I appreciate the perspective and consider how to improve.", "points": 3},
            {"key": "D", "label": "I dismiss it, thinking they must be wrong or didn't understand me.", "points": 1},
        ],
    },
    {
        "id": "Q3",
        "text": "When you feel angry or upset, how do you typically react?",
        "options": [
            {"key": "A", "label": "I might lash out or say things I don't mean.", "points": 0},
            {"key": "B", "label": "I keep it inside and try to distract myself.", "points": 1},
            {"key": "C", "label": "I pause to figure out why I'm upset and try to calm myself (e.g., deep breaths).", "points": 3},
            {"key": "D", "label": "I talk to someone I trust or do something to release the emotion.", "points": 2},
        ],
    },
    {
        "id": "Q4",
        "text": "When you're under a lot of stress or have many tasks, how do you handle it?",
        "options": [
            {"key": "A", "label": "I feel overwhelmed and have trouble getting started.", "points": 0},
            {"key": "B", "label": "I work non-stop without taking breaks until it's done.", "points": 2},
            {"key": "C", "label": "I make a plan, take short breaks, and tackle tasks step by step.", "points": 3},
            {"key": "D", "label": "I procrastinate or avoid thinking about the tasks.", "points": 1},
        ],
    },
    {
        "id": "Q5",
        "text": "Which statement best describes your view of abilities?",
        "options": [
            {"key": "A", "label": "People are born with certain abilities and can't change much.", "points": 0},
            {"key": "B", "label": "You can improve with effort, but only to an extent.", "points": 2},
            {"key": "C", "label": "With practice and learning, most people (including me) can grow a lot.", "points": 3},
            {"key": "D", "label": "I haven't really thought about it; I just try things without judging.", "points": 1},
        ],
    },
    {
        "id": "Q6",
        "text": "When something important doesn't go your way (job/test), how do you react?",
        "options": [
            {"key": "A", "label": "I dwell on it and feel down for a long time.", "points": 0},
            {"key": "B", "label": "I'm upset, but I eventually accept it and try to move on.", "points": 2},
            {"key": "C", "label": "I bounce back quickly and start planning what to do next.", "points": 3},
            {"key": "D", "label": "I blame myself or others and replay what went wrong.", "points": 1},
        ],
    },
    {
        "id": "Q7",
        "text": "When you receive praise or a compliment, how do you respond?",
        "options": [
            {"key": "A", "label": "I feel uncomfortable and often doubt it's true.", "points": 0},
            {"key": "B", "label": "I say thank you but usually downplay it.", "points": 2},
            {"key": "C", "label": "I feel proud and use it as motivation to keep going.", "points": 3},
            {"key": "D", "label": "I attribute it to luck or others' help, not my efforts.", "points": 1},
        ],
    },
    {
        "id": "Q8",
        "text": "When starting something new or challenging, what's your approach?",
        "options": [
            {"key": "A", "label": "I avoid it because I might fail.", "points": 0},
            {"key": "B", "label": "I try only if I feel fully prepared.", "points": 2},
            {"key": "C", "label": "I start small, expect to learn, and improve as I go.", "points": 3},
            {"key": "D", "label": "I wait for someone else to show me exactly what to do.", "points": 1},
        ],
    },
    {
        "id": "Q9",
        "text": "How consistent are you with daily self-care (sleep, hydration, movement, reflection)?",
        "options": [
            {"key": "A", "label": "Rarely consistent; I usually forget or skip it.", "points": 0},
            {"key": "B", "label": "On and off; consistent for a few days, then drop it.", "points": 2},
            {"key": "C", "label": "Fairly consistent; I keep simple routines most days.", "points": 3},
            {"key": "D", "label": "I only do it when I feel overwhelmed.", "points": 1},
        ],
    },
    {
        "id": "Q10",
        "text": "When you feel stuck emotionally, what do you do first?",
        "options": [
            {"key": "A", "label": "Ignore it and hope it passes.", "points": 0},
            {"key": "B", "label": "Distract myself with screens or work.", "points": 1},
            {"key": "C", "label": "Use a coping tool (breathing, journaling, short walk) to reset.", "points": 3},
            {"key": "D", "label": "Vent without reflecting or seeking solutions.", "points": 2},
        ],
    },
]

MAX_SCORE = len(QUESTIONS) * 3

_POINTS = {q["id"]: {o["key"]: o["points"] for o in q["options"]} for q in QUESTIONS}


class AssessmentError(ValueError):
    """Raised for a missing answer or an unknown choice."""


def category_from_score(score: int) -> str:
    if score >= 25:
        return "Growth Champion"
    if score >= 19:
        return "Resilient Builder"
    if score >= 13:
        return "Balanced Explorer"
    if score >= 7:
        return "Emerging Mindset"
    return "Overwhelmed — Needs Support"


def score_assessment(answers: Iterable[Dict[str, str]]) -> Dict[str, Any]:
    """
    Score answers of the form {"id": "Q1", "choice": "C"}.

    A later answer for the same question replaces an earlier one.
    """
    by_id: Dict[str, str] = {}
    for answer in answers:
        by_id[answer["id"]] = answer["choice"]

    total = 0
    breakdown = []
    for question in QUESTIONS:
        qid = question["id"]
        if qid not in by_id:
            raise AssessmentError(f"Missing answer for {qid}")
        choice = by_id[qid]
        points = _POINTS[qid].get(choice)
        if points is None:
            raise AssessmentError(f"Invalid choice {choice} for {qid}")
        total += points
        breakdown.append({"id": qid, "choice": choice, "points": points})

    return {
        "score": total,
        "category": category_from_score(total),
        "percent": round(total / MAX_SCORE * 100),
        "breakdown": breakdown,
    }


_FALLBACK_BANDS = [
    (25, {
        "insights": [
            "You demonstrate exceptional emotional intelligence and growth mindset.",
            "Your resilience skills are well-developed and serve you in challenges.",
            "You have strong self-awareness and regulation capabilities.",
            "You consistently view setbacks as learning opportunities.",
        ],
        "recommendations": [
            "Continue your excellent practices and consider mentoring others.",
            "Explore advanced mindfulness or leadership development opportunities.",
            "Challenge yourself with new growth-oriented goals.",
        ],
    }),
    (19, {
        "insights": [
            "You show good emotional regulation and learning orientation.",
            "Your resilience is developing well with room for growth.",
            "You're building strong foundations for personal development.",
            "You generally handle feedback and challenges constructively.",
        ],
        "recommendations": [
            "Practice daily reflection to strengthen self-awareness.",
            "Set challenging but achievable goals to build confidence.",
            "Consider journaling to track your growth journey.",
        ],
    }),
    (13, {
        "insights": [
            "You're developing important emotional intelligence skills.",
            "Your growth mindset is emerging and can be strengthened.",
            "You show potential for significant improvement with practice.",
            "You're beginning to see challenges as opportunities.",
        ],
        "recommendations": [
            "Develop a consistent daily mindfulness or meditation practice.",
            "Focus on reframing challenges as learning opportunities.",
            "Build a support network of growth-minded individuals.",
        ],
    }),
    (7, {
        "insights": [
            "You're at the beginning of your emotional growth journey.",
            "Building basic resilience skills will be valuable for you.",
            "Small, consistent steps can lead to meaningful progress.",
            "You have potential that can be unlocked with the right approach.",
        ],
        "recommendations": [
            "Start with basic stress management techniques like deep breathing.",
            "Practice positive self-talk and challenge negative thoughts.",
            "Set small, achievable daily goals to build momentum.",
        ],
    }),
    (0, {
        "insights": [
            "You may be feeling overwhelmed and could benefit from support.",
            "Remember that growth is a journey, and every step matters.",
            "Your current challenges don't define your potential.",
            "With the right support, significant improvement is possible.",
        ],
        "recommendations": [
            "Consider working with a counselor or coach for personalized support.",
            "Focus on basic self-care: sleep, nutrition, and gentle movement.",
            "Start with one small positive change each week.",
        ],
    }),
]


def fallback_insights(score: int) -> Dict[str, List[str]]:
    for floor, content in _FALLBACK_BANDS:
        if score >= floor:
            return {"insights": list(content["insights"]), "recommendations": list(content["recommendations"])}
    return {"insights": [], "recommendations": []}


def public_questions() -> List[Dict[str, Any]]:
    """Questions without the point values."""
    return [
        {
            "id": q["id"],
            "text": q["text"],
            "options": [{"key": o["key"], "label": o["label"]} for o in q["options"]],
        }
        for q in QUESTIONS
    ]
