from pydantic import BaseModel, Field
from typing import Optional

from app.modules.pomodoro.timer import PomodoroState


class PomodoroCommand(BaseModel):
    state: Optional[PomodoroState] = None


class PomodoroTick(BaseModel):
    state: PomodoroState
    elapsed_seconds: int = Field(default=1, ge=0)


class PomodoroResponse(BaseModel):
    state: PomodoroState
    completed_phase: Optional[str] = None
    progress: int
    growth_stage: str
    focus_minutes: int
    break_minutes: int
