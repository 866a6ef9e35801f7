"""
Prompt construction for the free-text mental-health report.
"""

from typing import List

REPORT_QUESTIONS = [
    "When you make a mistake or face a setback, how do you typically respond?",
    "When someone offers you critical feedback, what is your usual reaction?",
    "When you feel angry or upset, how do you typically react?",
    "When you're under a lot of stress or have many tasks to do, how do you handle it?",
    "Which statement best describes your view of your personal abilities?",
    "When something important doesn't go the way you hoped (like not getting a job or failing a test), how do you usually react?",
    "When you receive praise or a compliment for something you did, how do you feel or respond?",
]

REPORT_SYSTEM_PROMPT = (
    "You are an expert clinical psychologist providing detailed, empathetic mental health "
    "assessments. Always respond with valid JSON only. Do not include any markdown formatting, "
    "code blocks, or explanatory text - only pure JSON."
)

_TRAIT = """{
      "score": <number 0-100>,
      "analysis": "Detailed analysis",
      "strengths": ["strength1", "strength2"],
      "concerns": ["concern1", "concern2"]
    }"""

REPORT_FORMAT = """{
  "overallStatus": {
    "summary": "Brief overall mental health status (2-3 sentences)",
    "wellbeingScore": <number 0-100>,
    "riskLevel": "low/moderate/high"
  },
  "psychologicalTraits": {
    "resilience": %(trait)s,
    "emotionalRegulation": %(trait)s,
    "stressManagement": %(trait)s,
    "growthMindset": %(trait)s,
    "selfEsteem": %(trait)s,
    "emotionalIntelligence": %(trait)s
  },
  "detailedAnalysis": {
    "copingStrategies": "How the person copes with challenges",
    "emotionalPatterns": "Emotional response patterns",
    "behavioralTendencies": "Behavioral habits and tendencies",
    "cognitivePatterns": "Thought patterns and beliefs"
  },
  "areasOfConcern": [
    {"area": "Area name", "severity": "mild/moderate/severe", "description": "Explanation", "indicators": ["indicator1"]}
  ],
  "recommendations": {
    "immediate": [{"title": "Title", "description": "Actionable step", "priority": "high/medium/low"}],
    "shortTerm": [{"title": "Title", "description": "For the next 1-3 months", "priority": "high/medium/low"}],
    "longTerm": [{"title": "Title", "description": "Ongoing development", "priority": "high/medium/low"}],
    "professionalHelp": {"recommended": true, "reason": "Why, if recommended", "type": "therapist/counselor/psychiatrist/support group"}
  },
  "resources": [
    {"type": "book/app/technique/exercise", "name": "Resource name", "description": "How it helps", "link": "URL if applicable"}
  ],
  "positiveAspects": ["Strengths and positive patterns observed"]
}""" % {"trait": _TRAIT}


def build_report_prompt(answers: List[str]) -> str:
    qa_context = "\n\n".join(
        f"Question {i + 1}: {question}\nAnswer: {answer}"
        for i, (question, answer) in enumerate(zip(REPORT_QUESTIONS, answers))
    )
    return (
        "You are an expert clinical psychologist specializing in mental health assessment. "
        "Based on the following responses to a psychological questionnaire, provide a "
        "comprehensive mental health analysis.\n\n"
        f"{qa_context}\n\n"
        "Please analyze these responses and provide a detailed psychological report in the "
        f"following JSON format:\n\n{REPORT_FORMAT}\n\n"
        "Be empathetic, thorough, and provide actionable insights. Focus on both strengths and "
        "areas for growth. Ensure all scores reflect the actual responses given."
    )
