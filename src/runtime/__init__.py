"""Runtime engine exports."""

from .loop import RuntimeBootstrap, RuntimeEngine, RuntimeHooks

__all__ = ["RuntimeBootstrap", "RuntimeEngine", "RuntimeHooks"]
