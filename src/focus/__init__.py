from .service import FocusTimer
from .store import (
    InMemoryKeyValueStore,
    JsonFileKeyValueStore,
    KeyValueStore,
    PersistenceStore,
)
from .tasks import TaskList
from .types import (
    AmbientState,
    FocusActionResult,
    FocusMode,
    FocusTick,
    PersistedSnapshot,
    SessionState,
    Task,
    format_clock,
)
from .validator import default_snapshot, sanitize

__all__ = [
    "AmbientState",
    "FocusActionResult",
    "FocusMode",
    "FocusTick",
    "FocusTimer",
    "InMemoryKeyValueStore",
    "JsonFileKeyValueStore",
    "KeyValueStore",
    "PersistedSnapshot",
    "PersistenceStore",
    "SessionState",
    "Task",
    "TaskList",
    "default_snapshot",
    "format_clock",
    "sanitize",
]
