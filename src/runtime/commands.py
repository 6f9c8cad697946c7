"""Dispatcher that maps inbound UI commands onto focus driver operations."""

from __future__ import annotations

import logging
from typing import Any, Callable, Mapping, Optional

from contracts.ui_protocol import (
    COMMAND_ADD_TASK,
    COMMAND_APPLY_PRESET,
    COMMAND_FULL_WIPE,
    COMMAND_PAUSE,
    COMMAND_REMOVE_TASK,
    COMMAND_RESET,
    COMMAND_SET_AMBIENT_PROFILE,
    COMMAND_SET_BREAK_DURATION,
    COMMAND_SET_FOCUS_DURATION,
    COMMAND_SET_MODE,
    COMMAND_SET_VOLUME,
    COMMAND_SHUTDOWN,
    COMMAND_START,
    COMMAND_SYNC,
    COMMAND_TICK,
    COMMAND_TOGGLE,
    COMMAND_TOGGLE_TASK,
)

from .driver import FocusDriver, FocusView


class UnknownCommandError(ValueError):
    """Raised when an inbound message names a command that does not exist."""


def _argument(message: Mapping[str, Any], *names: str) -> Any:
    for name in names:
        if name in message:
            return message[name]
    return None


class CommandDispatcher:
    """Routes ``{"command": name, ...}`` messages to the focus driver.

    Every command except ``shutdown`` returns the resulting :class:`FocusView`.
    ``shutdown`` returns ``None`` and leaves the actual teardown to the caller.
    """

    def __init__(self, driver: FocusDriver, logger: Optional[logging.Logger] = None):
        self._driver = driver
        self._logger = logger or logging.getLogger("runtime")
        self._handlers: dict[str, Callable[[Mapping[str, Any]], Optional[FocusView]]] = {
            COMMAND_START: lambda _: driver.start(),
            COMMAND_PAUSE: lambda _: driver.pause(),
            COMMAND_TOGGLE: lambda _: driver.toggle(),
            COMMAND_TICK: lambda _: driver.tick(),
            COMMAND_SYNC: lambda _: driver.view(),
            COMMAND_SET_MODE: lambda m: driver.set_mode(_argument(m, "mode")),
            COMMAND_SET_FOCUS_DURATION: lambda m: driver.set_focus_duration(
                _argument(m, "minutes", "focus_minutes")
            ),
            COMMAND_SET_BREAK_DURATION: lambda m: driver.set_break_duration(
                _argument(m, "minutes", "break_minutes")
            ),
            COMMAND_APPLY_PRESET: self._apply_preset,
            COMMAND_RESET: lambda _: driver.reset(),
            COMMAND_FULL_WIPE: lambda _: driver.full_wipe(),
            COMMAND_SET_AMBIENT_PROFILE: lambda m: driver.set_ambient_profile(
                _argument(m, "profile", "ambient")
            ),
            COMMAND_SET_VOLUME: lambda m: driver.set_volume(_argument(m, "volume")),
            COMMAND_ADD_TASK: lambda m: driver.add_task(_argument(m, "title")),
            COMMAND_TOGGLE_TASK: lambda m: driver.toggle_task(_argument(m, "id", "task_id")),
            COMMAND_REMOVE_TASK: lambda m: driver.remove_task(_argument(m, "id", "task_id")),
            COMMAND_SHUTDOWN: lambda _: None,
        }

    @property
    def command_names(self) -> tuple[str, ...]:
        return tuple(sorted(self._handlers))

    def handle(self, message: Mapping[str, Any]) -> Optional[FocusView]:
        raw_name = message.get("command")
        if not isinstance(raw_name, str):
            raise UnknownCommandError("Command message is missing a 'command' name")
        name = raw_name.strip().lower()
        handler = self._handlers.get(name)
        if handler is None:
            raise UnknownCommandError(f"Unknown command: {raw_name}")

        self._logger.debug("Dispatching command %s", name)
        return handler(message)

    def _apply_preset(self, message: Mapping[str, Any]) -> FocusView:
        preset = _argument(message, "preset", "name")
        if isinstance(preset, str) and preset.strip():
            return self._driver.apply_preset(preset=preset.strip())
        return self._driver.apply_preset(
            _argument(message, "focus", "focus_minutes"),
            _argument(message, "rest", "break", "break_minutes"),
        )
