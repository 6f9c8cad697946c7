"""Web UI websocket event and command constants."""

from __future__ import annotations

# Websocket event types
EVENT_HELLO = "hello"
EVENT_FOCUS_STATE = "focus_state"
EVENT_PHASE_COMPLETED = "phase_completed"
EVENT_ERROR = "error"

# Inbound command names
COMMAND_START = "start"
COMMAND_PAUSE = "pause"
COMMAND_TOGGLE = "toggle"
COMMAND_TICK = "tick"
COMMAND_SET_MODE = "set_mode"
COMMAND_SET_FOCUS_DURATION = "set_focus_duration"
COMMAND_SET_BREAK_DURATION = "set_break_duration"
COMMAND_APPLY_PRESET = "apply_preset"
COMMAND_RESET = "reset"
COMMAND_FULL_WIPE = "full_wipe"
COMMAND_SET_AMBIENT_PROFILE = "set_ambient_profile"
COMMAND_SET_VOLUME = "set_volume"
COMMAND_ADD_TASK = "add_task"
COMMAND_TOGGLE_TASK = "toggle_task"
COMMAND_REMOVE_TASK = "remove_task"
COMMAND_SYNC = "sync"
COMMAND_SHUTDOWN = "shutdown"

STICKY_EVENT_TYPES: frozenset[str] = frozenset(
    {
        EVENT_FOCUS_STATE,
        EVENT_PHASE_COMPLETED,
    }
)

STICKY_EVENT_ORDER: tuple[str, ...] = (
    EVENT_PHASE_COMPLETED,
    EVENT_FOCUS_STATE,
)
