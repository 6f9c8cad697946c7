"""Tick handlers that publish countdown updates and phase completion notices."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from focus import FocusTick
from focus.constants import (
    ACTION_COMPLETED,
    ACTION_TICK,
    REASON_COMPLETED,
    REASON_TICK,
)

from .driver import FocusView
from .messages import phase_completed_message
from .ui import RuntimeUIPublisher


@dataclass(frozen=True)
class TickDependencies:
    """Dependencies required for processing focus tick events."""
    logger: logging.Logger
    ui: RuntimeUIPublisher


class TickProcessor:
    """Handles tick side effects such as UI updates and completion notices."""
    def __init__(self, dependencies: TickDependencies):
        self._dependencies = dependencies

    def handle_tick(self, tick: FocusTick, view: FocusView) -> None:
        deps = self._dependencies
        if tick.completed:
            state = tick.state
            message = phase_completed_message(tick.completed_mode, state)
            deps.logger.info(message)
            deps.ui.publish_phase_completed(
                completed_mode=tick.completed_mode,
                next_mode=state.mode,
                completed_sessions=state.completed_sessions,
                message=message,
            )
            deps.ui.publish_focus_state(
                view,
                action=ACTION_COMPLETED,
                accepted=True,
                reason=REASON_COMPLETED,
            )
            return

        deps.ui.publish_focus_state(
            view,
            action=ACTION_TICK,
            accepted=True,
            reason=REASON_TICK,
        )
