"""Immutable session, task, and snapshot types shared by the focus core."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Literal, Optional

from .constants import MODE_BREAK, MODE_FOCUS

FocusMode = Literal["focus", "break"]
AmbientProfile = Literal["off", "white", "rain", "forest"]


def duration_seconds(mode: str, focus_minutes: int, break_minutes: int) -> int:
    """Return the full countdown length of ``mode`` in seconds."""
    if mode == MODE_BREAK:
        return break_minutes * 60
    return focus_minutes * 60


def other_mode(mode: str) -> FocusMode:
    return MODE_BREAK if mode == MODE_FOCUS else MODE_FOCUS


def format_clock(total_seconds: int) -> str:
    """Format a countdown as ``MM:SS``; minutes may exceed 59."""
    minutes, seconds = divmod(max(0, int(total_seconds)), 60)
    return f"{minutes:02d}:{seconds:02d}"


@dataclass(frozen=True)
class Task:
    id: str
    title: str
    done: bool = False

    def to_dict(self) -> dict[str, Any]:
        return {"id": self.id, "title": self.title, "done": self.done}


@dataclass(frozen=True)
class SessionState:
    """Immutable countdown snapshot exposed to the driver and UI publishers."""
    mode: FocusMode
    seconds_left: int
    focus_minutes: int
    break_minutes: int
    completed_sessions: int
    running: bool

    @property
    def duration_seconds(self) -> int:
        return duration_seconds(self.mode, self.focus_minutes, self.break_minutes)

    @property
    def progress(self) -> float:
        total = self.duration_seconds
        if not total:
            return 0.0
        return min(max((total - self.seconds_left) / total, 0.0), 1.0)

    @property
    def clock(self) -> str:
        return format_clock(self.seconds_left)


@dataclass(frozen=True)
class AmbientState:
    profile: AmbientProfile
    volume: int


@dataclass(frozen=True)
class PersistedSnapshot:
    """Everything written to the key-value store as one unit."""
    focus_minutes: int
    break_minutes: int
    mode: FocusMode
    seconds_left: int
    completed_sessions: int
    tasks: tuple[Task, ...]
    ambient: AmbientProfile
    volume: int

    def to_dict(self) -> dict[str, Any]:
        return {
            "focusMinutes": self.focus_minutes,
            "breakMinutes": self.break_minutes,
            "mode": self.mode,
            "secondsLeft": self.seconds_left,
            "completedSessions": self.completed_sessions,
            "tasks": [task.to_dict() for task in self.tasks],
            "ambient": self.ambient,
            "volume": self.volume,
        }

    def session_state(self, *, running: bool = False) -> SessionState:
        return SessionState(
            mode=self.mode,
            seconds_left=self.seconds_left,
            focus_minutes=self.focus_minutes,
            break_minutes=self.break_minutes,
            completed_sessions=self.completed_sessions,
            running=running,
        )


@dataclass(frozen=True)
class FocusActionResult:
    """Result envelope returned after applying a timer command."""
    action: str
    accepted: bool
    reason: str
    state: SessionState


@dataclass(frozen=True)
class FocusTick:
    """Tick payload emitted once per elapsed second while running."""
    state: SessionState
    completed_mode: Optional[FocusMode] = None

    @property
    def completed(self) -> bool:
        return self.completed_mode is not None
