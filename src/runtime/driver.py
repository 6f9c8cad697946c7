"""Command surface that coordinates the timer, tasks, ambient sound, and ticks."""

from __future__ import annotations

import dataclasses
import logging
import time
from dataclasses import dataclass
from typing import Any, Callable, Mapping, Optional

from ambient import AmbientStatus, AmbientSynthesizer
from focus import (
    AmbientState,
    FocusActionResult,
    FocusTick,
    FocusTimer,
    PersistenceStore,
    SessionState,
    Task,
    TaskList,
    default_snapshot,
)
from focus.constants import (
    AMBIENT_PROFILES,
    DEFAULT_PRESETS,
    PROFILE_OFF,
)
from focus.validator import clamp_volume

from .scheduler import RepeatingTask


class UnknownPresetError(ValueError):
    """Raised when a preset is requested by a name that is not configured."""


@dataclass(frozen=True)
class FocusView:
    """Combined session, ambient, and task state returned by every command."""
    session: SessionState
    ambient: AmbientState
    ambient_status: AmbientStatus
    tasks: tuple[Task, ...]
    action: str = ""
    accepted: bool = True
    reason: str = ""


class FocusDriver:
    """Applies driver commands in order and keeps the tick scheduler in step.

    The scheduler is installed whenever the timer is running and cancelled
    whenever it is not, so there is never more than one pending tick source.
    """

    def __init__(
        self,
        *,
        store: PersistenceStore,
        synthesizer: AmbientSynthesizer,
        presets: Optional[Mapping[str, tuple[int, int]]] = None,
        on_tick: Optional[Callable[[FocusTick, FocusView], None]] = None,
        clock: Callable[[], float] = time.monotonic,
        logger: Optional[logging.Logger] = None,
    ):
        self._logger = logger or logging.getLogger("runtime")
        self._store = store
        self._timer = FocusTimer(store, logger=logging.getLogger("focus"))
        self._tasks = TaskList(store, logger=logging.getLogger("focus.tasks"))
        self._synthesizer = synthesizer
        self._presets = dict(presets if presets is not None else DEFAULT_PRESETS)
        self._on_tick = on_tick
        self._scheduler = RepeatingTask(self._scheduled_tick, interval_seconds=1.0, clock=clock)

        loaded = store.current
        self._ambient_profile = loaded.ambient
        self._volume = loaded.volume
        self._shut_down = False

    @property
    def scheduler(self) -> RepeatingTask:
        return self._scheduler

    @property
    def presets(self) -> dict[str, tuple[int, int]]:
        return dict(self._presets)

    def set_tick_handler(
        self,
        handler: Optional[Callable[[FocusTick, FocusView], None]],
    ) -> None:
        self._on_tick = handler

    def view(self) -> FocusView:
        return FocusView(
            session=self._timer.snapshot(),
            ambient=AmbientState(profile=self._ambient_profile, volume=self._volume),
            ambient_status=self._synthesizer.status,
            tasks=self._tasks.tasks,
        )

    def poll(self) -> int:
        """Fire any due ticks; called by the runtime loop between commands."""
        return self._scheduler.poll()

    def start(self) -> FocusView:
        return self._apply(self._timer.start())

    def pause(self) -> FocusView:
        return self._apply(self._timer.pause())

    def toggle(self) -> FocusView:
        return self._apply(self._timer.toggle())

    def tick(self) -> FocusView:
        tick = self._advance()
        view = self.view()
        if tick is not None and self._on_tick is not None:
            self._on_tick(tick, view)
        return view

    def set_mode(self, mode: Any) -> FocusView:
        return self._apply(self._timer.set_mode(mode))

    def set_focus_duration(self, minutes: Any) -> FocusView:
        return self._apply(self._timer.set_focus_duration(minutes))

    def set_break_duration(self, minutes: Any) -> FocusView:
        return self._apply(self._timer.set_break_duration(minutes))

    def apply_preset(
        self,
        focus_minutes: Any = None,
        break_minutes: Any = None,
        *,
        preset: Optional[str] = None,
    ) -> FocusView:
        if preset is not None:
            try:
                focus_minutes, break_minutes = self._presets[preset]
            except KeyError:
                raise UnknownPresetError(f"Unknown preset: {preset}") from None
        return self._apply(self._timer.apply_preset(focus_minutes, break_minutes))

    def reset(self) -> FocusView:
        return self._apply(self._timer.reset())

    def full_wipe(self) -> FocusView:
        """Clear storage and return every holder to its defaults."""
        self._scheduler.cancel()
        self._store.clear()
        defaults = default_snapshot()
        result = self._timer.hydrate(defaults)
        self._tasks.replace(defaults.tasks)
        self._volume = defaults.volume
        self._synthesizer.set_profile(defaults.ambient, defaults.volume)
        self._ambient_profile = defaults.ambient
        self._persist_ambient()
        self._logger.info("All focus data wiped")
        return self._apply(result)

    def set_ambient_profile(self, profile: Any) -> FocusView:
        normalized = profile if profile in AMBIENT_PROFILES else PROFILE_OFF
        self._synthesizer.set_profile(normalized, self._volume)
        self._ambient_profile = normalized
        self._persist_ambient()
        return self.view()

    def set_volume(self, volume: Any) -> FocusView:
        self._volume = clamp_volume(volume, self._volume)
        self._synthesizer.set_volume(self._volume)
        self._persist_ambient()
        return self.view()

    def restore_ambient(self) -> FocusView:
        """Start the persisted ambient profile, if any, after process start."""
        if self._ambient_profile != PROFILE_OFF:
            self._synthesizer.set_profile(self._ambient_profile, self._volume)
        return self.view()

    def add_task(self, title: Any) -> FocusView:
        self._tasks.add(title)
        return self.view()

    def toggle_task(self, task_id: Any) -> FocusView:
        self._tasks.toggle(task_id)
        return self.view()

    def remove_task(self, task_id: Any) -> FocusView:
        self._tasks.remove(task_id)
        return self.view()

    def shutdown(self) -> None:
        """Stop ticking and release the audio device; later calls do nothing."""
        if self._shut_down:
            return
        self._shut_down = True
        self._scheduler.cancel()
        self._synthesizer.teardown()
        self._logger.info("Focus driver shut down")

    def _scheduled_tick(self) -> None:
        self.tick()

    def _advance(self) -> Optional[FocusTick]:
        tick = self._timer.tick()
        self._sync_scheduler()
        if tick is not None:
            self._logger.debug(
                "Tick: mode=%s remaining=%ss",
                tick.state.mode,
                tick.state.seconds_left,
            )
        return tick

    def _apply(self, result: FocusActionResult) -> FocusView:
        self._sync_scheduler()
        return dataclasses.replace(
            self.view(),
            action=result.action,
            accepted=result.accepted,
            reason=result.reason,
        )

    def _sync_scheduler(self) -> None:
        if self._timer.running:
            self._scheduler.start()
        else:
            self._scheduler.cancel()

    def _persist_ambient(self) -> None:
        self._store.update(ambient=self._ambient_profile, volume=self._volume)
