"""Tests for the admin dashboard analytics and admin management."""

from datetime import datetime, timedelta, timezone

from app.modules.admin import analytics

from conftest import OTHER_USER_ID, USER_ID

NOW = datetime(2026, 10, 19, 15, 30, tzinfo=timezone.utc)


def _at(days_ago: int, hour: int = 9) -> str:
    return (NOW.replace(hour=hour, minute=0) - timedelta(days=days_ago)).isoformat()


def test_week_windows_are_twelve_weeks_oldest_first():
    windows = analytics.week_windows(NOW)
    assert len(windows) == 12
    assert windows[-1][0] == "10/19"
    assert windows[-1][1] == datetime(2026, 10, 19, tzinfo=timezone.utc)
    assert windows[0][1] == datetime(2026, 10, 19, tzinfo=timezone.utc) - timedelta(days=77)


def test_journal_weeks_bucket_by_created_at():
    rows = [
        {"created_at": NOW.replace(hour=1).isoformat()},
        {"created_at": _at(3)},
        {"created_at": _at(200)},
        {"created_at": None},
    ]
    weeks = analytics.journal_weeks(rows, NOW)
    assert weeks[-2]["journals"] == 1
    assert weeks[-1]["journals"] == 1
    assert sum(w["journals"] for w in weeks) == 2


def test_meditation_weeks_sum_minutes():
    rows = [{"created_at": _at(1), "duration": 600}, {"created_at": _at(2), "duration": 330}]
    week = analytics.meditation_weeks(rows, NOW)[-2]
    assert week == {"week": week["week"], "sessions": 2, "minutes": 10 + 6}


def test_user_growth_is_cumulative():
    rows = [{"created_at": _at(70)}, {"created_at": _at(20)}, {"created_at": _at(2)}]
    weeks = analytics.user_growth_weeks(rows, NOW)
    assert [w["total_users"] for w in weeks][-1] == 3
    assert all(a["total_users"] <= b["total_users"] for a, b in zip(weeks, weeks[1:]))


def test_overview_counts_active_users():
    journals = [{"user_id": USER_ID, "created_at": _at(1)}]
    meditations = [
        {"user_id": OTHER_USER_ID, "created_at": _at(30), "duration": 1200},
        {"user_id": USER_ID, "created_at": _at(2), "duration": 600},
    ]
    result = analytics.overview(5, 40, 2, journals, meditations, NOW)
    assert result == {
        "total_users": 5,
        "total_journals": 40,
        "total_meditation_minutes": 30,
        "total_meditation_sessions": 2,
        "active_users_last_7_days": 1,
    }


def test_top_users_skip_inactive_and_rank_by_activity():
    profiles = [
        {"id": USER_ID, "full_name": "Ada"},
        {"id": OTHER_USER_ID, "email": "bo@example.com"},
        {"id": "idle", "full_name": "Idle"},
    ]
    journals = [{"user_id": OTHER_USER_ID}, {"user_id": OTHER_USER_ID}]
    meditations = [{"user_id": USER_ID, "duration": 120}]
    ranked = analytics.top_users(profiles, journals, meditations)
    assert [u["name"] for u in ranked] == ["bo@example.com", "Ada"]
    assert ranked[1]["meditation_minutes"] == 2


def test_admin_routes_require_admin(client):
    assert client.get("/api/admin/analytics").status_code == 403


def test_admin_overview(admin_client, fake_db):
    fake_db.seed("profiles", {"id": USER_ID}, {"id": OTHER_USER_ID})
    fake_db.seed("journals", {"user_id": USER_ID, "content": "hi"})

    body = admin_client.get("/api/admin/analytics").json()

    assert body["total_users"] == 2
    assert body["total_journals"] == 1
    assert body["active_users_last_7_days"] == 1


def test_admin_totals_count_past_the_row_cap(admin_client, fake_db):
    fake_db.max_rows = 2
    fake_db.seed("profiles", *({"id": f"user-{i}", "full_name": f"User {i}"} for i in range(5)))
    fake_db.seed("journals", *({"user_id": f"user-{i}", "content": "hi"} for i in range(3)))
    fake_db.seed("meditations", *({"user_id": f"user-{i}", "duration": 60} for i in range(5)))

    body = admin_client.get("/api/admin/analytics").json()

    assert body["total_users"] == 5
    assert body["total_journals"] == 3
    assert body["total_meditation_sessions"] == 5
    assert body["total_meditation_minutes"] == 5
    assert body["active_users_last_7_days"] == 5


def test_admin_charts_and_ranking_read_every_page(admin_client, fake_db):
    fake_db.max_rows = 2
    fake_db.seed("profiles", *({"id": f"user-{i}", "full_name": f"User {i}"} for i in range(5)))
    fake_db.seed("journals", *({"user_id": f"user-{i}", "content": "hi"} for i in range(5)))

    journal_weeks = admin_client.get("/api/admin/analytics/journals").json()
    growth = admin_client.get("/api/admin/analytics/user-growth").json()
    top = admin_client.get("/api/admin/analytics/top-users").json()

    assert sum(w["journals"] for w in journal_weeks) == 5
    assert growth[-1]["total_users"] == 5
    assert len(top) == 5


def test_admin_weekly_charts(admin_client):
    assert len(admin_client.get("/api/admin/analytics/journals").json()) == 12
    assert len(admin_client.get("/api/admin/analytics/meditations").json()) == 12
    assert len(admin_client.get("/api/admin/analytics/user-growth").json()) == 12


def test_grant_admin_by_email(admin_client, fake_db):
    fake_db.seed("profiles", {"id": OTHER_USER_ID, "email": "bo@example.com"})

    response = admin_client.post("/api/admin/users", json={"email": "bo@example.com"})

    assert response.status_code == 201
    assert response.json()["id"] == OTHER_USER_ID
    assert len(admin_client.get("/api/admin/users").json()["admins"]) == 2


def test_grant_admin_needs_a_target(admin_client):
    assert admin_client.post("/api/admin/users", json={}).status_code == 400


def test_grant_admin_unknown_email(admin_client):
    response = admin_client.post("/api/admin/users", json={"email": "nobody@example.com"})
    assert response.status_code == 404
