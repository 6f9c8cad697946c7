"""In-memory focus/break countdown state machine with persisted state."""

from __future__ import annotations

import logging
from typing import Any, Optional

from .constants import (
    ACTION_APPLY_PRESET,
    ACTION_HYDRATE,
    ACTION_PAUSE,
    ACTION_RESET,
    ACTION_SET_BREAK_DURATION,
    ACTION_SET_FOCUS_DURATION,
    ACTION_SET_MODE,
    ACTION_START,
    ACTION_TOGGLE,
    MODE_BREAK,
    MODE_FOCUS,
    MODES,
    REASON_ALREADY_RUNNING,
    REASON_DURATION_SET,
    REASON_HYDRATED,
    REASON_INVALID_MODE,
    REASON_MODE_SET,
    REASON_NOT_RUNNING,
    REASON_PAUSED,
    REASON_PRESET_APPLIED,
    REASON_RESET,
    REASON_STARTED,
)
from .store import PersistenceStore
from .types import (
    FocusActionResult,
    FocusMode,
    FocusTick,
    PersistedSnapshot,
    SessionState,
    duration_seconds,
    other_mode,
)
from .validator import clamp_break_minutes, clamp_focus_minutes


class FocusTimer:
    """Focus/break countdown driven by external one-second ticks.

    State is hydrated from ``store`` on construction and written back through
    it after every accepted transition and every tick.
    """

    def __init__(
        self,
        store: PersistenceStore,
        *,
        logger: Optional[logging.Logger] = None,
    ):
        self._store = store
        self._logger = logger or logging.getLogger("focus")
        self._running = False
        self._load(store.load())

    @property
    def running(self) -> bool:
        return self._running

    def snapshot(self) -> SessionState:
        return SessionState(
            mode=self._mode,
            seconds_left=self._seconds_left,
            focus_minutes=self._focus_minutes,
            break_minutes=self._break_minutes,
            completed_sessions=self._completed_sessions,
            running=self._running,
        )

    def start(self) -> FocusActionResult:
        if self._running:
            return self._result(ACTION_START, False, REASON_ALREADY_RUNNING)

        self._running = True
        self._logger.info(
            "Countdown started: mode=%s remaining=%ss",
            self._mode,
            self._seconds_left,
        )
        return self._commit(ACTION_START, REASON_STARTED)

    def pause(self) -> FocusActionResult:
        if not self._running:
            return self._result(ACTION_PAUSE, False, REASON_NOT_RUNNING)

        self._running = False
        self._logger.info(
            "Countdown paused: mode=%s remaining=%ss",
            self._mode,
            self._seconds_left,
        )
        return self._commit(ACTION_PAUSE, REASON_PAUSED)

    def toggle(self) -> FocusActionResult:
        result = self.pause() if self._running else self.start()
        return FocusActionResult(
            action=ACTION_TOGGLE,
            accepted=result.accepted,
            reason=result.reason,
            state=result.state,
        )

    def tick(self) -> Optional[FocusTick]:
        """Advance the countdown by one second; ``None`` while idle.

        Reaching zero flips to the other mode with a full countdown and keeps
        running. Only an expiring focus phase counts as a completed session.
        """
        if not self._running:
            return None

        if self._seconds_left > 1:
            self._seconds_left -= 1
            self._persist()
            return FocusTick(state=self.snapshot())

        finished = self._mode
        self._mode = other_mode(finished)
        self._seconds_left = self._duration(self._mode)
        if finished == MODE_FOCUS:
            self._completed_sessions += 1
        self._logger.info(
            "Phase completed: %s -> %s (completed_sessions=%d)",
            finished,
            self._mode,
            self._completed_sessions,
        )
        self._persist()
        return FocusTick(state=self.snapshot(), completed_mode=finished)

    def set_mode(self, mode: Any) -> FocusActionResult:
        if mode not in MODES:
            return self._result(ACTION_SET_MODE, False, REASON_INVALID_MODE)

        self._mode = mode
        self._running = False
        self._seconds_left = self._duration(mode)
        self._logger.info("Mode set: %s", mode)
        return self._commit(ACTION_SET_MODE, REASON_MODE_SET)

    def set_focus_duration(self, minutes: Any) -> FocusActionResult:
        self._focus_minutes = clamp_focus_minutes(minutes)
        if not self._running and self._mode == MODE_FOCUS:
            self._seconds_left = self._duration(MODE_FOCUS)
        return self._commit(ACTION_SET_FOCUS_DURATION, REASON_DURATION_SET)

    def set_break_duration(self, minutes: Any) -> FocusActionResult:
        self._break_minutes = clamp_break_minutes(minutes)
        if not self._running and self._mode == MODE_BREAK:
            self._seconds_left = self._duration(MODE_BREAK)
        return self._commit(ACTION_SET_BREAK_DURATION, REASON_DURATION_SET)

    def reset(self) -> FocusActionResult:
        self._mode = MODE_FOCUS
        self._running = False
        self._seconds_left = self._duration(MODE_FOCUS)
        self._logger.info("Countdown reset")
        return self._commit(ACTION_RESET, REASON_RESET)

    def apply_preset(self, focus_minutes: Any, break_minutes: Any) -> FocusActionResult:
        self._focus_minutes = clamp_focus_minutes(focus_minutes)
        self._break_minutes = clamp_break_minutes(break_minutes)
        self._mode = MODE_FOCUS
        self._running = False
        self._seconds_left = self._duration(MODE_FOCUS)
        self._logger.info(
            "Preset applied: focus=%dm break=%dm",
            self._focus_minutes,
            self._break_minutes,
        )
        return self._commit(ACTION_APPLY_PRESET, REASON_PRESET_APPLIED)

    def hydrate(self, snapshot: PersistedSnapshot) -> FocusActionResult:
        """Replace the whole session state, stopping any running countdown."""
        self._running = False
        self._load(snapshot)
        return self._commit(ACTION_HYDRATE, REASON_HYDRATED)

    def _load(self, snapshot: PersistedSnapshot) -> None:
        self._mode: FocusMode = snapshot.mode
        self._seconds_left = snapshot.seconds_left
        self._focus_minutes = snapshot.focus_minutes
        self._break_minutes = snapshot.break_minutes
        self._completed_sessions = snapshot.completed_sessions

    def _duration(self, mode: str) -> int:
        return duration_seconds(mode, self._focus_minutes, self._break_minutes)

    def _persist(self) -> None:
        self._store.update(
            focus_minutes=self._focus_minutes,
            break_minutes=self._break_minutes,
            mode=self._mode,
            seconds_left=self._seconds_left,
            completed_sessions=self._completed_sessions,
        )

    def _commit(self, action: str, reason: str) -> FocusActionResult:
        self._persist()
        return self._result(action, True, reason)

    def _result(self, action: str, accepted: bool, reason: str) -> FocusActionResult:
        return FocusActionResult(
            action=action,
            accepted=accepted,
            reason=reason,
            state=self.snapshot(),
        )
