"""Sanitization and clamping for externally supplied session state."""

from __future__ import annotations

import math
from typing import Any, Mapping

from .constants import (
    AMBIENT_PROFILES,
    BREAK_MINUTES_MAX,
    BREAK_MINUTES_MIN,
    COMPLETED_SESSIONS_MAX,
    DEFAULT_AMBIENT,
    DEFAULT_BREAK_MINUTES,
    DEFAULT_COMPLETED_SESSIONS,
    DEFAULT_FOCUS_MINUTES,
    DEFAULT_MODE,
    DEFAULT_VOLUME,
    FOCUS_MINUTES_MAX,
    FOCUS_MINUTES_MIN,
    MODE_BREAK,
    MODE_FOCUS,
    VOLUME_MAX,
    VOLUME_MIN,
)
from .types import PersistedSnapshot, Task, duration_seconds


def default_snapshot() -> PersistedSnapshot:
    """Return the snapshot used when nothing valid is stored."""
    return PersistedSnapshot(
        focus_minutes=DEFAULT_FOCUS_MINUTES,
        break_minutes=DEFAULT_BREAK_MINUTES,
        mode=DEFAULT_MODE,
        seconds_left=DEFAULT_FOCUS_MINUTES * 60,
        completed_sessions=DEFAULT_COMPLETED_SESSIONS,
        tasks=(),
        ambient=DEFAULT_AMBIENT,
        volume=DEFAULT_VOLUME,
    )


def sanitize(raw: Any) -> PersistedSnapshot:
    """Coerce any decoded value into a snapshot that satisfies every invariant.

    Never raises. Missing or malformed fields fall back to their defaults and
    numeric fields are clamped into range. ``seconds_left`` is bounded by the
    duration of the sanitized mode, not the raw one.
    """
    if not isinstance(raw, Mapping):
        return default_snapshot()

    mode = MODE_BREAK if raw.get("mode") == MODE_BREAK else MODE_FOCUS
    focus_minutes = clamp_number(
        raw.get("focusMinutes"),
        FOCUS_MINUTES_MIN,
        FOCUS_MINUTES_MAX,
        DEFAULT_FOCUS_MINUTES,
    )
    break_minutes = clamp_number(
        raw.get("breakMinutes"),
        BREAK_MINUTES_MIN,
        BREAK_MINUTES_MAX,
        DEFAULT_BREAK_MINUTES,
    )
    max_seconds = duration_seconds(mode, focus_minutes, break_minutes)
    ambient = raw.get("ambient")

    return PersistedSnapshot(
        focus_minutes=focus_minutes,
        break_minutes=break_minutes,
        mode=mode,
        seconds_left=clamp_number(raw.get("secondsLeft"), 0, max_seconds, max_seconds),
        completed_sessions=clamp_number(
            raw.get("completedSessions"),
            0,
            COMPLETED_SESSIONS_MAX,
            DEFAULT_COMPLETED_SESSIONS,
        ),
        tasks=sanitize_tasks(raw.get("tasks")),
        ambient=ambient if ambient in AMBIENT_PROFILES else DEFAULT_AMBIENT,
        volume=clamp_number(raw.get("volume"), VOLUME_MIN, VOLUME_MAX, DEFAULT_VOLUME),
    )


def sanitize_tasks(raw: Any) -> tuple[Task, ...]:
    if not isinstance(raw, (list, tuple)):
        return ()

    tasks: list[Task] = []
    for entry in raw:
        if not isinstance(entry, Mapping):
            continue
        task_id = entry.get("id")
        title = entry.get("title")
        if not isinstance(task_id, str) or not isinstance(title, str):
            continue
        tasks.append(Task(id=task_id, title=title, done=bool(entry.get("done"))))
    return tuple(tasks)


def clamp_number(value: Any, minimum: int, maximum: int, fallback: int) -> int:
    """Clamp a numeric value into ``[minimum, maximum]`` or return ``fallback``.

    Booleans, non-numbers, and NaN count as missing.
    """
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return fallback
    if isinstance(value, float) and math.isnan(value):
        return fallback
    return int(min(max(value, minimum), maximum))


def clamp_focus_minutes(value: Any) -> int:
    return clamp_number(
        _as_number(value),
        FOCUS_MINUTES_MIN,
        FOCUS_MINUTES_MAX,
        FOCUS_MINUTES_MIN,
    )


def clamp_break_minutes(value: Any) -> int:
    return clamp_number(
        _as_number(value),
        BREAK_MINUTES_MIN,
        BREAK_MINUTES_MAX,
        BREAK_MINUTES_MIN,
    )


def clamp_volume(value: Any, fallback: int = DEFAULT_VOLUME) -> int:
    return clamp_number(_as_number(value), VOLUME_MIN, VOLUME_MAX, fallback)


def _as_number(value: Any) -> Any:
    # Form inputs may arrive as strings.
    if isinstance(value, str):
        try:
            return float(value.strip())
        except ValueError:
            return None
    return value
