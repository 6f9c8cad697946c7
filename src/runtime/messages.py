"""Status and notification text builders for focus/break flows."""

from __future__ import annotations

from focus import SessionState, format_clock
from focus.constants import MODE_BREAK, MODE_FOCUS

_MODE_LABELS = {
    MODE_FOCUS: "Focus session",
    MODE_BREAK: "Break",
}


def format_duration(seconds: int) -> str:
    """Format a duration in seconds as `MM:SS`."""
    return format_clock(seconds)


def status_message(state: SessionState) -> str:
    """Build a one-line status for the current countdown."""
    label = _MODE_LABELS.get(state.mode, "Focus session")
    remaining = format_duration(state.seconds_left)
    if state.running:
        return f"{label} running ({remaining} left)"
    if state.seconds_left < state.duration_seconds:
        return f"{label} paused ({remaining} left)"
    return f"{label} ready ({remaining})"


def phase_completed_message(completed_mode: str, state: SessionState) -> str:
    """Build the notice shown when a phase runs out."""
    if completed_mode == MODE_FOCUS:
        return (
            f"Focus session {state.completed_sessions} complete. "
            f"Take a {state.break_minutes} minute break."
        )
    return f"Break over. Next focus session: {state.focus_minutes} minutes."
