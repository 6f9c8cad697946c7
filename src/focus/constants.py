"""Mode, profile, limit, action, and reason constants used by the focus core."""

from __future__ import annotations

STORAGE_KEY = "deep-focus-state-v1"

MODE_FOCUS = "focus"
MODE_BREAK = "break"
MODES: tuple[str, ...] = (MODE_FOCUS, MODE_BREAK)

PROFILE_OFF = "off"
PROFILE_WHITE = "white"
PROFILE_RAIN = "rain"
PROFILE_FOREST = "forest"
AMBIENT_PROFILES: tuple[str, ...] = (
    PROFILE_OFF,
    PROFILE_WHITE,
    PROFILE_RAIN,
    PROFILE_FOREST,
)

FOCUS_MINUTES_MIN = 5
FOCUS_MINUTES_MAX = 120
BREAK_MINUTES_MIN = 1
BREAK_MINUTES_MAX = 45
VOLUME_MIN = 0
VOLUME_MAX = 100
COMPLETED_SESSIONS_MAX = 100_000

DEFAULT_FOCUS_MINUTES = 25
DEFAULT_BREAK_MINUTES = 5
DEFAULT_MODE = MODE_FOCUS
DEFAULT_COMPLETED_SESSIONS = 0
DEFAULT_AMBIENT = PROFILE_OFF
DEFAULT_VOLUME = 40

# name -> (focus minutes, break minutes)
DEFAULT_PRESETS: dict[str, tuple[int, int]] = {
    "standard": (25, 5),
    "deep_work": (50, 10),
    "sprint": (15, 3),
}

ACTION_START = "start"
ACTION_PAUSE = "pause"
ACTION_TOGGLE = "toggle"
ACTION_SET_MODE = "set_mode"
ACTION_SET_FOCUS_DURATION = "set_focus_duration"
ACTION_SET_BREAK_DURATION = "set_break_duration"
ACTION_RESET = "reset"
ACTION_APPLY_PRESET = "apply_preset"
ACTION_HYDRATE = "hydrate"

ACTION_SYNC = "sync"
ACTION_TICK = "tick"
ACTION_COMPLETED = "completed"

REASON_STARTED = "started"
REASON_PAUSED = "paused"
REASON_ALREADY_RUNNING = "already_running"
REASON_NOT_RUNNING = "not_running"
REASON_MODE_SET = "mode_set"
REASON_INVALID_MODE = "invalid_mode"
REASON_DURATION_SET = "duration_set"
REASON_RESET = "reset"
REASON_PRESET_APPLIED = "preset_applied"
REASON_HYDRATED = "hydrated"

REASON_TICK = "tick"
REASON_COMPLETED = "completed"
REASON_STARTUP = "startup"
