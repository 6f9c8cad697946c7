"""Ordered task list that round-trips through the persisted snapshot."""

from __future__ import annotations

import logging
import random
import time
from typing import Callable, Iterable, Optional

from .store import PersistenceStore
from .types import Task


def _default_task_id() -> str:
    return f"{int(time.time() * 1000)}-{random.randrange(100_000)}"


class TaskList:
    """Newest-first task list persisted through the shared snapshot store."""

    def __init__(
        self,
        store: PersistenceStore,
        *,
        id_factory: Callable[[], str] = _default_task_id,
        logger: Optional[logging.Logger] = None,
    ):
        self._store = store
        self._id_factory = id_factory
        self._logger = logger or logging.getLogger("focus.tasks")
        self._tasks: tuple[Task, ...] = store.current.tasks

    @property
    def tasks(self) -> tuple[Task, ...]:
        return self._tasks

    def add(self, title: str) -> Optional[Task]:
        cleaned = title.strip() if isinstance(title, str) else ""
        if not cleaned:
            return None

        task = Task(id=self._id_factory(), title=cleaned, done=False)
        self._set((task, *self._tasks))
        self._logger.info("Task added: id=%s", task.id)
        return task

    def toggle(self, task_id: str) -> bool:
        if not any(task.id == task_id for task in self._tasks):
            return False
        self._set(
            tuple(
                Task(id=task.id, title=task.title, done=not task.done)
                if task.id == task_id
                else task
                for task in self._tasks
            )
        )
        return True

    def remove(self, task_id: str) -> bool:
        remaining = tuple(task for task in self._tasks if task.id != task_id)
        if len(remaining) == len(self._tasks):
            return False
        self._set(remaining)
        self._logger.info("Task removed: id=%s", task_id)
        return True

    def replace(self, tasks: Iterable[Task]) -> None:
        self._set(tuple(tasks))

    def _set(self, tasks: tuple[Task, ...]) -> None:
        self._tasks = tasks
        self._store.update(tasks=tasks)
