"""
Focus/break interval timer.

The server keeps no timer state: the client sends its current state and gets
the next one back. A running timer stops itself at every phase change, so a
new phase always starts paused and needs an explicit start.
"""

from typing import Literal, Optional, Tuple

from pydantic import BaseModel, Field

from app.modules.moods.mapping import growth_stage

FOCUS = "focus"
BREAK = "break"

PROGRESS_PER_SESSION = 20


class PomodoroState(BaseModel):
    phase: Literal["focus", "break"] = FOCUS
    time_remaining: int = Field(ge=0)  # seconds
    is_running: bool = False
    session_count: int = Field(default=0, ge=0)
    total_focus_minutes: int = Field(default=0, ge=0)


def new_state(focus_minutes: int) -> PomodoroState:
    return PomodoroState(phase=FOCUS, time_remaining=focus_minutes * 60)


def start(state: PomodoroState) -> PomodoroState:
    return state.model_copy(update={"is_running": True})


def pause(state: PomodoroState) -> PomodoroState:
    return state.model_copy(update={"is_running": False})


def reset(focus_minutes: int) -> PomodoroState:
    return new_state(focus_minutes)


def tick(
    state: PomodoroState,
    elapsed_seconds: int,
    focus_minutes: int,
    break_minutes: int,
) -> Tuple[PomodoroState, Optional[str]]:
    """
    Advance a running timer by elapsed_seconds.

    Returns the new state and the phase that just completed, if any. Time
    beyond the end of a phase is dropped because the timer stops there.
    """
    if not state.is_running or elapsed_seconds <= 0:
        return state, None

    remaining = state.time_remaining - elapsed_seconds
    if remaining > 0:
        return state.model_copy(update={"time_remaining": remaining}), None

    if state.phase == FOCUS:
        return state.model_copy(update={
            "phase": BREAK,
            "time_remaining": break_minutes * 60,
            "is_running": False,
            "session_count": state.session_count + 1,
            "total_focus_minutes": state.total_focus_minutes + focus_minutes,
        }), FOCUS

    return state.model_copy(update={
        "phase": FOCUS,
        "time_remaining": focus_minutes * 60,
        "is_running": False,
    }), BREAK


def plant_progress(session_count: int) -> int:
    return min(100, session_count * PROGRESS_PER_SESSION)


def plant_stage(session_count: int) -> str:
    return growth_stage(plant_progress(session_count))
