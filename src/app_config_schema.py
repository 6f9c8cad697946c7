"""Dataclass schema objects used by runtime configuration loading."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from focus.constants import DEFAULT_PRESETS

DEFAULT_CONFIG_FILE = "config.toml"
DEFAULT_STORAGE_FILE = "deep_focus_state.json"


class AppConfigurationError(Exception):
    """Raised when application configuration fails."""


@dataclass(frozen=True)
class StorageSettings:
    """Persisted focus state location from `[storage]`."""
    enabled: bool = True
    path: str = DEFAULT_STORAGE_FILE


@dataclass(frozen=True)
class AudioSettings:
    """Ambient sound output settings from `[audio]`."""
    enabled: bool = True
    output_device: Optional[int] = None
    sample_rate_hz: int = 0
    blocksize: int = 1024
    noise_buffer_seconds: float = 2.0


@dataclass(frozen=True)
class UIServerSettings:
    """Built-in UI server settings from `[ui_server]`."""
    enabled: bool = True
    host: str = "127.0.0.1"
    port: int = 8765
    index_file: str = ""


@dataclass(frozen=True)
class PresetSettings:
    """Named focus/break presets from `[presets]`."""
    presets: dict[str, tuple[int, int]] = field(
        default_factory=lambda: dict(DEFAULT_PRESETS)
    )


@dataclass(frozen=True)
class AppConfig:
    """Complete typed runtime configuration loaded from `config.toml`."""
    storage: StorageSettings
    audio: AudioSettings
    ui_server: UIServerSettings
    presets: PresetSettings
    source_file: str
