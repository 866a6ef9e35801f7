"""API tests for daily check-ins: one per day, ownership and analytics endpoints."""

from datetime import datetime, timedelta
from zoneinfo import ZoneInfo

from app.config import settings
from app.modules.checkins.service import CheckinService, local_today

from conftest import OTHER_USER_ID, USER_ID, make_checkin

CHECKIN_BODY = {
    "mood": "happy",
    "energyLevel": 8,
    "sleepQuality": 9,
    "stressLevel": 2,
    "emotions": ["grateful"],
    "gratitude": "Sunny morning walk",
}


def test_submit_checkin_returns_insights_and_streak(client, fake_db):
    yesterday = (local_today() - timedelta(days=1)).isoformat()
    fake_db.seed("daily_checkins", make_checkin(yesterday))

    response = client.post("/api/checkin", json=CHECKIN_BODY)

    assert response.status_code == 201
    body = response.json()
    assert body["success"] is True
    assert body["checkin"]["checkin_date"] == local_today().isoformat()
    assert body["checkin"]["user_id"] == USER_ID
    assert body["streak"] == 2
    assert body["insights"]["mood_type"] == "amazing"


def test_checkin_date_follows_configured_timezone(client, fake_db, monkeypatch):
    monkeypatch.setattr(settings, "checkin_timezone", "Pacific/Kiritimati")
    today = datetime.now(ZoneInfo("Pacific/Kiritimati")).date()
    fake_db.seed("daily_checkins", make_checkin((today - timedelta(days=1)).isoformat()))

    body = client.post("/api/checkin", json=CHECKIN_BODY).json()

    assert body["checkin"]["checkin_date"] == today.isoformat()
    assert body["streak"] == 2


def test_second_checkin_same_day_conflicts(client):
    assert client.post("/api/checkin", json=CHECKIN_BODY).status_code == 201

    response = client.post("/api/checkin", json=CHECKIN_BODY)

    assert response.status_code == 409


def test_unique_violation_on_insert_is_a_conflict(client, fake_db, monkeypatch):
    # Simulates two concurrent submissions both passing the existence check
    fake_db.seed("daily_checkins", make_checkin(local_today().isoformat()))
    monkeypatch.setattr(CheckinService, "_find_for_date", lambda self, user_id, day: None)

    response = client.post("/api/checkin", json=CHECKIN_BODY)

    assert response.status_code == 409


def test_checkin_rejects_unknown_mood(client):
    response = client.post("/api/checkin", json={**CHECKIN_BODY, "mood": "ecstatic"})
    assert response.status_code == 422


def test_checkin_rejects_out_of_range_levels(client):
    response = client.post("/api/checkin", json={**CHECKIN_BODY, "stressLevel": 11})
    assert response.status_code == 422


def test_checkin_for_another_user_is_forbidden(client):
    response = client.post("/api/checkin", json={**CHECKIN_BODY, "userId": OTHER_USER_ID})
    assert response.status_code == 403


def test_today_before_and_after_checkin(client):
    before = client.get(f"/api/checkin/today/{USER_ID}").json()
    assert before["has_checked_in"] is False

    client.post("/api/checkin", json=CHECKIN_BODY)

    after = client.get(f"/api/checkin/today/{USER_ID}").json()
    assert after["has_checked_in"] is True
    assert after["checkin"]["mood"] == "happy"


def test_reading_another_users_history_is_forbidden(client):
    response = client.get(f"/api/checkin/history/{OTHER_USER_ID}")
    assert response.status_code == 403


def test_admin_may_read_another_users_history(admin_client, fake_db):
    fake_db.seed("daily_checkins", make_checkin("2026-10-01", user_id=OTHER_USER_ID))

    response = admin_client.get(f"/api/checkin/history/{OTHER_USER_ID}")

    assert response.status_code == 200
    assert response.json()["count"] == 1


def test_history_is_newest_first(client, fake_db):
    fake_db.seed(
        "daily_checkins",
        make_checkin("2026-10-01"),
        make_checkin("2026-10-03"),
        make_checkin("2026-10-02"),
    )

    body = client.get(f"/api/checkin/history/{USER_ID}", params={"limit": 2}).json()

    assert [c["checkin_date"] for c in body["checkins"]] == ["2026-10-03", "2026-10-02"]


def test_trends_reject_unknown_period(client):
    response = client.get(f"/api/checkin/trends/{USER_ID}", params={"period": "decade"})
    assert response.status_code == 400


def test_trends_for_week(client, fake_db):
    today = local_today()
    for offset, energy in enumerate([3, 5, 7]):
        day = today - timedelta(days=2 - offset)
        fake_db.seed("daily_checkins", make_checkin(day.isoformat(), energy_level=energy))

    body = client.get(f"/api/checkin/trends/{USER_ID}").json()

    assert body["days"] == 7
    assert body["data_points"] == 3
    assert body["current_streak"] == 3
    assert body["trends"]["energy_trend"]["direction"] == "improving"


def test_insights_need_minimum_checkins(client, fake_db):
    fake_db.seed("daily_checkins", make_checkin(local_today().isoformat()))

    body = client.get(f"/api/checkin/insights/{USER_ID}").json()

    assert body["insights"]["insights"] == []
    assert "at least" in body["message"]


def test_insights_reject_bad_day_count(client):
    response = client.get(f"/api/checkin/insights/{USER_ID}", params={"days": 0})
    assert response.status_code == 400


def test_insights_rule_based_without_ai(client, fake_db):
    today = local_today()
    for offset in range(4):
        fake_db.seed("daily_checkins", make_checkin((today - timedelta(days=offset)).isoformat(), sleep_quality=3))

    body = client.get(f"/api/checkin/insights/{USER_ID}", params={"days": 7}).json()

    assert body["insights"]["data_summary"]["total_checkins"] == 4
    assert any(i["category"] == "sleep" for i in body["insights"]["insights"])
