import logging
import signal
import sys
from queue import Queue
from typing import Any, Mapping, Optional

from ambient import AmbientAudioConfig, AmbientConfigurationError, AmbientSynthesizer
from app_config import AppConfigurationError, load_app_config, resolve_config_path
from focus import InMemoryKeyValueStore, JsonFileKeyValueStore, KeyValueStore, PersistenceStore
from runtime import RuntimeBootstrap, RuntimeEngine, RuntimeHooks
from runtime.driver import FocusDriver
from server import ServerConfigurationError, UIServer, UIServerConfig


def setup_logging(level: int = logging.INFO) -> logging.Logger:
    """Configure logging for the application."""
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    return logging.getLogger("deep_focus")


def setup_signal_handlers(engine: RuntimeEngine) -> None:
    """Set up graceful shutdown on SIGTERM and SIGINT."""

    def signal_handler(signum: int, frame) -> None:
        signal_name = signal.Signals(signum).name
        logging.getLogger("deep_focus").info("%s received, stopping...", signal_name)
        engine.request_stop()

    signal.signal(signal.SIGTERM, signal_handler)
    signal.signal(signal.SIGINT, signal_handler)


def main() -> int:
    """Run the focus timer runtime until a shutdown command or signal."""
    logger = setup_logging(level=logging.INFO)

    try:
        config_path = resolve_config_path()
        app_config = load_app_config()
        if app_config.source_file:
            logger.info("Loaded runtime config: %s", config_path)
        else:
            logger.info("No config file at %s; using defaults", config_path)
        audio_config = AmbientAudioConfig.from_settings(app_config.audio)
        ui_server_config = UIServerConfig.from_settings(app_config.ui_server)
    except (AppConfigurationError, AmbientConfigurationError, ServerConfigurationError) as error:
        logger.error("Configuration error: %s", error)
        return 1

    backend: KeyValueStore
    if app_config.storage.enabled:
        backend = JsonFileKeyValueStore(app_config.storage.path)
        logger.info("Persisting focus state to %s", app_config.storage.path)
    else:
        backend = InMemoryKeyValueStore()
        logger.info("Persistence disabled; focus state is kept in memory only")

    store = PersistenceStore(backend, logger=logging.getLogger("focus.store"))
    synthesizer = AmbientSynthesizer(audio_config, logger=logging.getLogger("ambient"))
    driver = FocusDriver(
        store=store,
        synthesizer=synthesizer,
        presets=app_config.presets.presets,
        logger=logging.getLogger("runtime"),
    )

    command_queue: "Queue[Mapping[str, Any]]" = Queue()

    # Optional UI server for websocket commands + state events
    ui_server: Optional[UIServer] = None
    if ui_server_config.enabled:
        try:
            ui_server = UIServer(
                config=ui_server_config,
                on_command=command_queue.put,
                logger=logging.getLogger("ui_server"),
            )
            logger.info("Starting UI server...")
            ui_server.start(timeout_seconds=5.0)
            logger.info(
                "UI server ready at http://%s:%d",
                ui_server.host,
                ui_server.port,
            )
        except Exception as error:
            logger.error("UI server startup failed: %s", error)
            logger.warning("Continuing without UI server.")
            ui_server = None

    engine = RuntimeEngine(
        RuntimeBootstrap(
            logger=logging.getLogger("runtime"),
            driver=driver,
            ui_server=ui_server,
            command_queue=command_queue,
            hooks=RuntimeHooks(setup_signal_handlers=setup_signal_handlers),
        )
    )
    return engine.run()


if __name__ == "__main__":
    sys.exit(main())
