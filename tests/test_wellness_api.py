"""API tests for journals, meditations, profiles and the companion endpoints."""

from datetime import datetime, time, timedelta, timezone
from zoneinfo import ZoneInfo

from app.config import settings
from app.modules.checkins.service import local_today
from app.modules.companion.fallback import AFFIRMATIONS, MOOD_ACTIVITIES, score_trend

from conftest import OTHER_USER_ID, USER_ID, make_checkin


# ─────────────────────────────────────────────────────────────────
# Journals
# ─────────────────────────────────────────────────────────────────


def test_journal_crud(client):
    created = client.post("/api/journals", json={"content": "  Grateful for tea  ", "mood": "calm"})
    assert created.status_code == 201
    journal = created.json()
    assert journal["content"] == "Grateful for tea"

    assert len(client.get("/api/journals").json()) == 1

    updated = client.put(f"/api/journals/{journal['id']}", json={"content": "Grateful for coffee"})
    assert updated.json()["content"] == "Grateful for coffee"

    assert client.delete(f"/api/journals/{journal['id']}").status_code == 204
    assert client.get(f"/api/journals/{journal['id']}").status_code == 404


def test_empty_journal_is_rejected(client):
    assert client.post("/api/journals", json={"content": "   "}).status_code == 422


def test_other_users_journal_is_invisible(client, fake_db):
    fake_db.seed("journals", {"id": "j-1", "user_id": OTHER_USER_ID, "content": "private"})

    assert client.get("/api/journals/j-1").status_code == 404
    assert client.delete("/api/journals/j-1").status_code == 404
    assert fake_db.tables["journals"][0]["content"] == "private"


# ─────────────────────────────────────────────────────────────────
# Meditations
# ─────────────────────────────────────────────────────────────────


def test_meditation_stats(client):
    client.post("/api/meditations", json={"duration": 300})
    client.post("/api/meditations", json={"duration": 900, "type": "breathing"})

    stats = client.get("/api/meditations/stats").json()

    assert stats["session_count"] == 2
    assert stats["total_seconds"] == 1200
    assert stats["total_minutes"] == 20
    assert stats["longest_session"] == 900
    assert stats["by_type"] == {"mindfulness": 1, "breathing": 1}


def test_meditation_needs_positive_duration(client):
    assert client.post("/api/meditations", json={"duration": 0}).status_code == 422


# ─────────────────────────────────────────────────────────────────
# Profiles
# ─────────────────────────────────────────────────────────────────


def test_profile_falls_back_to_auth_user(client):
    body = client.get("/api/profiles/me").json()
    assert body["id"] == USER_ID
    assert body["full_name"] == "Test User"
    assert body["onboarding_completed"] is False


def test_profile_stats_streak_spans_all_activity(client, fake_db):
    today = local_today()
    fake_db.seed("daily_checkins", make_checkin((today - timedelta(days=1)).isoformat()))
    client.post("/api/journals", json={"content": "today"})
    client.post("/api/meditations", json={"duration": 120})

    stats = client.get("/api/profiles/me/stats").json()

    assert stats["journal_count"] == 1
    assert stats["meditation_session_count"] == 1
    assert stats["checkin_count"] == 1
    assert stats["activity_streak"] == 2


def test_activity_streak_uses_local_days_behind_utc(client, fake_db, monkeypatch):
    monkeypatch.setattr(settings, "checkin_timezone", "Pacific/Pago_Pago")
    zone = ZoneInfo("Pacific/Pago_Pago")
    today = local_today()
    yesterday = today - timedelta(days=1)
    fake_db.seed(
        "daily_checkins",
        *(make_checkin((today - timedelta(days=n)).isoformat()) for n in [0] + list(range(2, 11)))
    )
    # 22:00 local yesterday is already today in UTC
    evening = datetime.combine(yesterday, time(22, 0), tzinfo=zone).astimezone(timezone.utc)
    fake_db.seed("journals", {"user_id": USER_ID, "content": "late entry", "created_at": evening.isoformat()})

    stats = client.get("/api/profiles/me/stats").json()

    assert evening.date() == today
    assert stats["activity_streak"] == 11


# ─────────────────────────────────────────────────────────────────
# Companion
# ─────────────────────────────────────────────────────────────────


def test_affirmation_fallback_is_stable_for_the_day(client):
    first = client.post("/api/affirmation", json={}).json()
    second = client.post("/api/affirmation", json={"userId": USER_ID}).json()

    assert first["source"] == "fallback"
    assert first["affirmation"] == second["affirmation"]
    assert first["affirmation"] in AFFIRMATIONS


def test_companion_insights_need_a_report(client):
    body = client.post("/api/insights", json={}).json()
    assert body["insights"] == []
    assert "assessment" in body["message"]


def test_companion_insights_from_report(client, fake_db):
    fake_db.seed("health_data", {"user_id": USER_ID, "report": {"overallStatus": {"wellbeingScore": 48}}})

    body = client.post("/api/insights", json={}).json()

    assert body["source"] == "fallback"
    assert body["insights"][0]["type"] == "improvement"


def test_mood_recommendations_require_mood(client):
    assert client.post("/api/mood-recommendations", json={}).status_code == 400


def test_mood_recommendations_fallback(client):
    body = client.post("/api/mood-recommendations", json={"currentMood": "Anxious"}).json()
    assert body["mood_type"] == "sad"
    assert [r["activity"] for r in body["recommendations"]] == [a["activity"] for a in MOOD_ACTIVITIES["sad"]]


def test_companion_for_another_user_is_forbidden(client):
    assert client.post("/api/affirmation", json={"userId": OTHER_USER_ID}).status_code == 403


def test_progress_summary_trend_and_streak(client, fake_db):
    fake_db.seed(
        "health_data",
        {"user_id": USER_ID, "report": {"overallStatus": {"wellbeingScore": 50}}},
        {"user_id": USER_ID, "report": {"overallStatus": {"wellbeingScore": 62}}},
    )
    fake_db.seed("daily_checkins", make_checkin(local_today().isoformat()))

    body = client.post("/api/progress-summary", json={}).json()

    assert body["trend"] == "improving"
    assert body["stats"]["streak_days"] == 1
    assert body["wellbeing_score"] == 62


def test_score_trend_thresholds():
    assert score_trend([70]) == "stable"
    assert score_trend([70, 65]) == "improving"
    assert score_trend([60, 65]) == "needs_attention"
    assert score_trend([64, 61]) == "stable"
