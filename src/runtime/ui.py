from __future__ import annotations

from typing import Any, Optional, Protocol

from contracts.ui_protocol import EVENT_ERROR, EVENT_FOCUS_STATE, EVENT_PHASE_COMPLETED

from .driver import FocusView
from .messages import status_message


class UIServerLike(Protocol):
    def publish(self, event_type: str, **payload: Any) -> None:
        ...


def focus_state_payload(view: FocusView) -> dict[str, Any]:
    """Flatten a :class:`FocusView` into the websocket ``focus_state`` payload."""
    session = view.session
    payload: dict[str, Any] = {
        "mode": session.mode,
        "running": session.running,
        "seconds_left": session.seconds_left,
        "duration_seconds": session.duration_seconds,
        "clock": session.clock,
        "progress": round(session.progress, 4),
        "focus_minutes": session.focus_minutes,
        "break_minutes": session.break_minutes,
        "completed_sessions": session.completed_sessions,
        "ambient": view.ambient.profile,
        "volume": view.ambient.volume,
        "ambient_status": view.ambient_status,
        "tasks": [task.to_dict() for task in view.tasks],
        "message": status_message(session),
    }
    if view.action:
        payload["action"] = view.action
        payload["accepted"] = view.accepted
    if view.reason:
        payload["reason"] = view.reason
    return payload


class RuntimeUIPublisher:
    def __init__(self, ui_server: Optional[UIServerLike]):
        self._ui_server = ui_server

    def publish(self, event_type: str, **payload: Any) -> None:
        if self._ui_server:
            self._ui_server.publish(event_type, **payload)

    def publish_focus_state(self, view: FocusView, **extra: Any) -> None:
        payload = focus_state_payload(view)
        payload.update(extra)
        self.publish(EVENT_FOCUS_STATE, **payload)

    def publish_phase_completed(
        self,
        *,
        completed_mode: str,
        next_mode: str,
        completed_sessions: int,
        message: str,
    ) -> None:
        self.publish(
            EVENT_PHASE_COMPLETED,
            completed_mode=completed_mode,
            next_mode=next_mode,
            completed_sessions=completed_sessions,
            message=message,
        )

    def publish_error(self, message: str, **payload: Any) -> None:
        self.publish(EVENT_ERROR, message=message, **payload)
