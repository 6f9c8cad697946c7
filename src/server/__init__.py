"""UI server module for websocket commands, focus events, and health checks."""

from .config import ServerConfigurationError, UIServerConfig
from .events import CommandMessageError
from .service import UIServer

__all__ = [
    "CommandMessageError",
    "ServerConfigurationError",
    "UIServerConfig",
    "UIServer",
]
