"""Runtime orchestration loop for inbound commands and timer ticks."""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from queue import Empty, Queue
from typing import Any, Callable, Mapping, Optional

from focus.constants import ACTION_SYNC, REASON_STARTUP
from server.service import UIServer

from .commands import CommandDispatcher, UnknownCommandError
from .driver import FocusDriver
from .ticks import TickDependencies, TickProcessor
from .ui import RuntimeUIPublisher

COMMAND_POLL_TIMEOUT_SECONDS = 0.25


@dataclass(frozen=True)
class RuntimeHooks:
    """Injectable lifecycle hooks used by runtime startup and shutdown flow."""
    setup_signal_handlers: Callable[["RuntimeEngine"], None]


@dataclass(frozen=True)
class RuntimeBootstrap:
    """Dependency bundle required to construct the runtime engine."""
    logger: logging.Logger
    driver: FocusDriver
    ui_server: Optional[UIServer]
    command_queue: Queue[Mapping[str, Any]]
    hooks: Optional[RuntimeHooks] = None


class RuntimeEngine:
    """Main runtime loop; the only thread that mutates focus state."""
    def __init__(self, bootstrap: RuntimeBootstrap):
        self._bootstrap = bootstrap
        self._logger = bootstrap.logger
        self._driver = bootstrap.driver
        self._commands = bootstrap.command_queue
        self._stop_requested = threading.Event()

        self._ui = RuntimeUIPublisher(bootstrap.ui_server)
        self._dispatcher = CommandDispatcher(self._driver, logger=self._logger)
        self._tick_processor = TickProcessor(
            TickDependencies(logger=self._logger, ui=self._ui)
        )
        self._driver.set_tick_handler(self._tick_processor.handle_tick)

    @property
    def dispatcher(self) -> CommandDispatcher:
        return self._dispatcher

    def submit(self, message: Mapping[str, Any]) -> None:
        """Queue a command for the loop thread; safe to call from any thread."""
        self._commands.put(message)

    def request_stop(self) -> None:
        self._stop_requested.set()

    def run(self) -> int:
        try:
            hooks = self._bootstrap.hooks
            if hooks is not None:
                hooks.setup_signal_handlers(self)

            self._publish_startup_sync()
            self._ui.publish_focus_state(self._driver.restore_ambient())
            self._logger.info("Ready! Waiting for commands ...")

            while not self._stop_requested.is_set():
                self._driver.poll()

                message = self._poll_command()
                if message is None:
                    continue
                self._handle_command(message)

            return 0
        except KeyboardInterrupt:
            self._logger.info("Shutdown requested by keyboard interrupt.")
            return 0
        except Exception as error:
            self._logger.error("Unexpected error: %s", error, exc_info=True)
            return 1
        finally:
            self._shutdown()

    def _publish_startup_sync(self) -> None:
        self._ui.publish_focus_state(
            self._driver.view(),
            action=ACTION_SYNC,
            accepted=True,
            reason=REASON_STARTUP,
        )

    def _poll_command(self) -> Optional[Mapping[str, Any]]:
        timeout = COMMAND_POLL_TIMEOUT_SECONDS
        until_due = self._driver.scheduler.seconds_until_due()
        if until_due is not None:
            timeout = min(timeout, until_due)
        try:
            if timeout <= 0:
                return self._commands.get_nowait()
            return self._commands.get(timeout=timeout)
        except Empty:
            return None

    def _handle_command(self, message: Any) -> None:
        if not isinstance(message, Mapping):
            self._logger.warning("Ignoring non-object command: %r", message)
            self._ui.publish_error("Command must be a JSON object")
            return

        try:
            view = self._dispatcher.handle(message)
        except (UnknownCommandError, ValueError) as error:
            self._logger.warning("Command rejected: %s", error)
            self._ui.publish_error(str(error), command=message.get("command"))
            return

        if view is None:
            self._logger.info("Shutdown requested by command.")
            self._stop_requested.set()
            return
        self._ui.publish_focus_state(view)

    def _shutdown(self) -> None:
        self._logger.info("Stopping focus driver...")
        try:
            self._driver.shutdown()
        except Exception as error:
            self._logger.error("Error stopping focus driver: %s", error, exc_info=True)

        ui_server = self._bootstrap.ui_server
        if ui_server is not None:
            self._logger.info("Stopping UI server...")
            try:
                ui_server.stop(timeout_seconds=5.0)
            except Exception as error:
                self._logger.error("Error stopping UI server: %s", error, exc_info=True)
