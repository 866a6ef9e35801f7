"""Tests for mood theming and the focus timer."""

import pytest

from app.modules.moods import mapping
from app.modules.pomodoro import timer


# ─────────────────────────────────────────────────────────────────
# Mood mapping
# ─────────────────────────────────────────────────────────────────


@pytest.mark.parametrize("mood,kind", [
    ("happy", "amazing"),
    ("Excited", "amazing"),
    ("tired", "mid"),
    ("overwhelmed", "sad"),
    ("sad", "sad"),
    ("unknown", "mid"),
    (None, "mid"),
])
def test_mood_type(mood, kind):
    assert mapping.mood_type(mood) == kind


def test_mood_color_prefers_custom_color():
    assert mapping.mood_color("anxious", {"sad": "#5b21b6"}) == "#5b21b6"
    assert mapping.mood_color("anxious", {"amazing": "#10b981"}) == "#1e3a8a"


@pytest.mark.parametrize("percentage,stage", [
    (0, "seed"),
    (-10, "seed"),
    (1, "sprout"),
    (25, "sprout"),
    (26, "small-plant"),
    (50, "small-plant"),
    (75, "growing"),
    (99, "blooming"),
    (100, "full-bloom"),
    (140, "full-bloom"),
])
def test_growth_stage(percentage, stage):
    assert mapping.growth_stage(percentage) == stage


def test_default_colors_are_in_palette():
    for mood_type in mapping.MOOD_TYPES:
        assert mood_type["default_color"] in mapping.PALETTE_COLORS


def test_palette_endpoint(client):
    body = client.get("/api/moods/palette").json()
    assert [m["key"] for m in body["mood_types"]] == ["sad", "mid", "amazing"]
    assert body["checkin_moods"]["calm"] == "mid"


def test_theme_uses_profile_colors(client, fake_db, current_user):
    fake_db.seed("profiles", {"id": current_user["id"], "mood_colors": {"amazing": "#c026d3"}})

    body = client.get("/api/moods/theme", params={"mood": "happy"}).json()

    assert body["color"] == "#c026d3"
    assert body["custom"] is True
    assert body["emoji"] == "😊"


def test_growth_stage_endpoint_clamps(client):
    body = client.get("/api/moods/growth-stage", params={"percentage": 120}).json()
    assert body == {"percentage": 100.0, "stage": "full-bloom"}


def test_profile_rejects_color_outside_palette(client):
    response = client.put("/api/profiles/me", json={"mood_colors": {"sad": "#000000"}})
    assert response.status_code == 422


def test_profile_saves_palette_color(client, fake_db):
    response = client.put("/api/profiles/me", json={"mood_colors": {"sad": "#5B21B6"}})

    assert response.status_code == 200
    assert response.json()["mood_colors"] == {"sad": "#5b21b6"}


# ─────────────────────────────────────────────────────────────────
# Focus timer
# ─────────────────────────────────────────────────────────────────


def test_new_state_is_paused_focus():
    state = timer.new_state(25)
    assert state.phase == "focus"
    assert state.time_remaining == 1500
    assert state.is_running is False


def test_tick_counts_down_only_while_running():
    state = timer.new_state(25)
    paused, completed = timer.tick(state, 60, 25, 5)
    assert paused.time_remaining == 1500
    assert completed is None

    running, _ = timer.tick(timer.start(state), 60, 25, 5)
    assert running.time_remaining == 1440


def test_focus_completion_switches_to_break_and_stops():
    state = timer.start(timer.PomodoroState(phase="focus", time_remaining=10, session_count=2, total_focus_minutes=50))

    after, completed = timer.tick(state, 30, 25, 5)

    assert completed == "focus"
    assert after.phase == "break"
    assert after.time_remaining == 300
    assert after.is_running is False
    assert after.session_count == 3
    assert after.total_focus_minutes == 75


def test_break_completion_returns_to_focus_without_counting():
    state = timer.start(timer.PomodoroState(phase="break", time_remaining=5, session_count=3))

    after, completed = timer.tick(state, 5, 25, 5)

    assert completed == "break"
    assert after.phase == "focus"
    assert after.time_remaining == 1500
    assert after.session_count == 3


def test_plant_progress_caps_at_full_bloom():
    assert timer.plant_progress(1) == 20
    assert timer.plant_progress(7) == 100
    assert timer.plant_stage(5) == "full-bloom"
    assert timer.plant_stage(0) == "seed"


def test_pomodoro_flow_over_api(client):
    started = client.post("/api/pomodoro/start", json={}).json()
    assert started["state"]["is_running"] is True

    state = {**started["state"], "time_remaining": 1}
    ticked = client.post("/api/pomodoro/tick", json={"state": state, "elapsed_seconds": 1}).json()

    assert ticked["completed_phase"] == "focus"
    assert ticked["state"]["phase"] == "break"
    assert ticked["progress"] == 20
    assert ticked["growth_stage"] == "sprout"

    reset = client.post("/api/pomodoro/reset").json()
    assert reset["state"]["session_count"] == 0
