from fastapi import APIRouter, Depends
from app.config import settings
from app.core.dependencies import get_current_user_id
from app.modules.pomodoro import timer
from app.modules.pomodoro.schemas import PomodoroCommand, PomodoroTick, PomodoroResponse
from typing import Dict, Optional

router = APIRouter(prefix="/pomodoro", tags=["pomodoro"])


def _respond(state: timer.PomodoroState, completed_phase: Optional[str] = None) -> PomodoroResponse:
    return PomodoroResponse(
        state=state,
        completed_phase=completed_phase,
        progress=timer.plant_progress(state.session_count),
        growth_stage=timer.plant_stage(state.session_count),
        focus_minutes=settings.pomodoro_focus_minutes,
        break_minutes=settings.pomodoro_break_minutes
    )


@router.post("/start", response_model=PomodoroResponse)
async def start_timer(
    command: PomodoroCommand,
    current_user: Dict = Depends(get_current_user_id)
):
    """Start (or resume) the timer; without a state a fresh focus session begins"""
    state = command.state or timer.new_state(settings.pomodoro_focus_minutes)
    return _respond(timer.start(state))


@router.post("/pause", response_model=PomodoroResponse)
async def pause_timer(
    command: PomodoroCommand,
    current_user: Dict = Depends(get_current_user_id)
):
    state = command.state or timer.new_state(settings.pomodoro_focus_minutes)
    return _respond(timer.pause(state))


@router.post("/reset", response_model=PomodoroResponse)
async def reset_timer(
    current_user: Dict = Depends(get_current_user_id)
):
    return _respond(timer.reset(settings.pomodoro_focus_minutes))


@router.post("/tick", response_model=PomodoroResponse)
async def tick_timer(
    body: PomodoroTick,
    current_user: Dict = Depends(get_current_user_id)
):
    """Advance a running timer; reports the phase that completed, if any"""
    state, completed = timer.tick(
        body.state,
        body.elapsed_seconds,
        settings.pomodoro_focus_minutes,
        settings.pomodoro_break_minutes
    )
    return _respond(state, completed)
