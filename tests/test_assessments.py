"""Tests for onboarding assessment scoring and AI health reports."""

import pytest

from app.core.ai import get_ai_provider
from app.main import app
from app.modules.assessments.questions import (
    AssessmentError, MAX_SCORE, QUESTIONS, category_from_score, fallback_insights, score_assessment
)
from app.modules.assessments.report import REPORT_QUESTIONS

from conftest import OTHER_USER_ID, USER_ID


def _answers(choice="C"):
    return [{"id": q["id"], "choice": choice} for q in QUESTIONS]


# ─────────────────────────────────────────────────────────────────
# Scoring
# ─────────────────────────────────────────────────────────────────


def test_best_answers_score_maximum():
    result = score_assessment(_answers("C"))
    assert result["score"] == MAX_SCORE == 30
    assert result["category"] == "Growth Champion"
    assert result["percent"] == 100


def test_worst_answers_score_zero():
    result = score_assessment(_answers("A"))
    assert result["score"] == 0
    assert result["category"] == "Overwhelmed — Needs Support"


@pytest.mark.parametrize("score,category", [
    (25, "Growth Champion"),
    (24, "Resilient Builder"),
    (19, "Resilient Builder"),
    (18, "Balanced Explorer"),
    (13, "Balanced Explorer"),
    (12, "Emerging Mindset"),
    (7, "Emerging Mindset"),
    (6, "Overwhelmed — Needs Support"),
])
def test_category_boundaries(score, category):
    assert category_from_score(score) == category


def test_later_duplicate_answer_wins():
    answers = _answers("A") + [{"id": "Q1", "choice": "C"}]
    assert score_assessment(answers)["score"] == 3


def test_missing_answer_is_rejected():
    with pytest.raises(AssessmentError, match="Q10"):
        score_assessment(_answers()[:-1])


def test_unknown_choice_is_rejected():
    answers = _answers()
    answers[0]["choice"] = "E"
    with pytest.raises(AssessmentError):
        score_assessment(answers)


def test_fallback_insights_follow_score_band():
    top = fallback_insights(28)
    low = fallback_insights(3)
    assert top["insights"] and top["recommendations"]
    assert top != low


# ─────────────────────────────────────────────────────────────────
# Assessment API
# ─────────────────────────────────────────────────────────────────


def test_questions_hide_points(client):
    body = client.get("/api/assessments/questions").json()
    assert len(body["questions"]) == 10
    assert "points" not in body["questions"][0]["options"][0]


def test_submit_assessment_stores_result_and_completes_onboarding(client, fake_db):
    response = client.post("/api/assessments", json={"answers": _answers("B"), "basics": {"name": "Sam"}})

    assert response.status_code == 201
    body = response.json()
    assert body["category"] in {"Resilient Builder", "Balanced Explorer"}
    assert body["insights"]
    assert fake_db.tables["assessment_results"][0]["user_id"] == USER_ID
    assert fake_db.tables["profiles"][0]["onboarding_completed"] is True


def test_submit_incomplete_assessment_is_bad_request(client):
    response = client.post("/api/assessments", json={"answers": _answers()[:3]})
    assert response.status_code == 400


def test_latest_assessment_missing(client):
    assert client.get("/api/assessments/latest").status_code == 404


# ─────────────────────────────────────────────────────────────────
# Reports
# ─────────────────────────────────────────────────────────────────

SEVEN_ANSWERS = [f"Answer {i}" for i in range(1, len(REPORT_QUESTIONS) + 1)]


class _ReportProvider:
    async def chat_json(self, *args, **kwargs):
        return {"overallStatus": {"wellbeingScore": 64, "riskLevel": "low", "summary": "Doing okay"}}


class _BrokenReportProvider:
    async def chat_json(self, *args, **kwargs):
        raise ValueError("No JSON object found in AI response")


def test_report_requires_seven_answers(client):
    response = client.post("/api/generate-report", json={"answers": SEVEN_ANSWERS[:5]})
    assert response.status_code == 400


def test_report_rejects_blank_answer(client):
    answers = SEVEN_ANSWERS[:-1] + ["   "]
    response = client.post("/api/generate-report", json={"answers": answers})
    assert response.status_code == 400


def test_report_without_ai_is_unavailable(client):
    response = client.post("/api/generate-report", json={"answers": SEVEN_ANSWERS})
    assert response.status_code == 503


def test_report_ai_failure_is_bad_gateway(client):
    app.dependency_overrides[get_ai_provider] = lambda: _BrokenReportProvider()
    response = client.post("/api/generate-report", json={"answers": SEVEN_ANSWERS})
    assert response.status_code == 502


def test_report_is_generated_stored_and_readable(client, fake_db):
    app.dependency_overrides[get_ai_provider] = lambda: _ReportProvider()

    response = client.post("/api/generate-report", json={"userId": USER_ID, "answers": SEVEN_ANSWERS})

    assert response.status_code == 200
    data = response.json()["data"]
    assert data["report"]["overallStatus"]["wellbeingScore"] == 64
    assert fake_db.tables["health_data"][0]["answers"] == SEVEN_ANSWERS

    listed = client.get(f"/api/reports/{USER_ID}").json()
    assert [r["id"] for r in listed["data"]] == [data["report_id"]]

    single = client.get(f"/api/report/{data['report_id']}").json()
    assert single["data"]["user_id"] == USER_ID


def test_report_of_another_user_is_forbidden(client, fake_db):
    fake_db.seed("health_data", {"id": "report-1", "user_id": OTHER_USER_ID, "answers": [], "report": {}})
    assert client.get("/api/report/report-1").status_code == 403


def test_unknown_report_is_not_found(client):
    assert client.get("/api/report/missing").status_code == 404
