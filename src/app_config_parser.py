"""Typed parser for config.toml sections into immutable app settings."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Mapping

from app_config_schema import (
    DEFAULT_STORAGE_FILE,
    AppConfig,
    AppConfigurationError,
    AudioSettings,
    PresetSettings,
    StorageSettings,
    UIServerSettings,
)
from focus.constants import DEFAULT_PRESETS


def parse_app_config(
    raw: Mapping[str, Any],
    *,
    base_dir: Path,
    source_file: str,
) -> AppConfig:
    """Parse raw TOML mappings into strongly typed application settings."""
    storage = _parse_storage_settings(_section(raw, "storage"), base_dir=base_dir)
    audio = _parse_audio_settings(_section(raw, "audio"))
    ui_server = _parse_ui_server_settings(_section(raw, "ui_server"), base_dir=base_dir)
    presets = _parse_preset_settings(_section(raw, "presets"))

    return AppConfig(
        storage=storage,
        audio=audio,
        ui_server=ui_server,
        presets=presets,
        source_file=source_file,
    )


def _parse_storage_settings(
    section: Mapping[str, Any],
    *,
    base_dir: Path,
) -> StorageSettings:
    path = _as_str(section.get("path", DEFAULT_STORAGE_FILE), "storage.path")
    return StorageSettings(
        enabled=_as_bool(section.get("enabled", True), "storage.enabled"),
        path=_resolve_path(base_dir, path or DEFAULT_STORAGE_FILE),
    )


def _parse_audio_settings(section: Mapping[str, Any]) -> AudioSettings:
    sample_rate_hz = _as_int(section.get("sample_rate_hz", 0), "audio.sample_rate_hz")
    if sample_rate_hz < 0:
        raise AppConfigurationError("audio.sample_rate_hz must be >= 0.")
    blocksize = _as_int(section.get("blocksize", 1024), "audio.blocksize")
    if blocksize <= 0:
        raise AppConfigurationError("audio.blocksize must be > 0.")
    noise_buffer_seconds = _as_float(
        section.get("noise_buffer_seconds", 2.0),
        "audio.noise_buffer_seconds",
    )
    if noise_buffer_seconds <= 0:
        raise AppConfigurationError("audio.noise_buffer_seconds must be > 0.")

    return AudioSettings(
        enabled=_as_bool(section.get("enabled", True), "audio.enabled"),
        output_device=(
            _as_int(section.get("output_device"), "audio.output_device")
            if "output_device" in section
            else None
        ),
        sample_rate_hz=sample_rate_hz,
        blocksize=blocksize,
        noise_buffer_seconds=noise_buffer_seconds,
    )


def _parse_ui_server_settings(
    section: Mapping[str, Any],
    *,
    base_dir: Path,
) -> UIServerSettings:
    index_file = _as_str(section.get("index_file", ""), "ui_server.index_file")
    return UIServerSettings(
        enabled=_as_bool(section.get("enabled", True), "ui_server.enabled"),
        host=_as_str(section.get("host", "127.0.0.1"), "ui_server.host"),
        port=_as_int(section.get("port", 8765), "ui_server.port"),
        index_file=_resolve_path(base_dir, index_file) if index_file else "",
    )


def _parse_preset_settings(section: Mapping[str, Any]) -> PresetSettings:
    presets = dict(DEFAULT_PRESETS)
    for name, value in section.items():
        presets[str(name)] = _as_preset(value, f"presets.{name}")
    return PresetSettings(presets=presets)


def _section(root: Mapping[str, Any], name: str) -> Mapping[str, Any]:
    raw = root.get(name, {})
    if raw is None:
        return {}
    if not isinstance(raw, Mapping):
        raise AppConfigurationError(f"[{name}] must be a table.")
    return raw


def _as_str(value: Any, field: str) -> str:
    if value is None:
        return ""
    if isinstance(value, str):
        return value.strip()
    raise AppConfigurationError(f"{field} must be a string.")


def _as_bool(value: Any, field: str) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in ("true", "1", "yes", "on"):
            return True
        if lowered in ("false", "0", "no", "off"):
            return False
    raise AppConfigurationError(f"{field} must be a boolean.")


def _as_int(value: Any, field: str) -> int:
    if isinstance(value, bool):
        raise AppConfigurationError(f"{field} must be an integer.")
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        try:
            return int(value.strip())
        except ValueError as error:
            raise AppConfigurationError(f"{field} must be an integer.") from error
    raise AppConfigurationError(f"{field} must be an integer.")


def _as_float(value: Any, field: str) -> float:
    if isinstance(value, bool):
        raise AppConfigurationError(f"{field} must be a float.")
    if isinstance(value, (int, float)):
        return float(value)
    if isinstance(value, str):
        try:
            return float(value.strip())
        except ValueError as error:
            raise AppConfigurationError(f"{field} must be a float.") from error
    raise AppConfigurationError(f"{field} must be a float.")


def _as_preset(value: Any, field: str) -> tuple[int, int]:
    if not isinstance(value, (list, tuple)) or len(value) != 2:
        raise AppConfigurationError(
            f"{field} must be a [focus_minutes, break_minutes] pair."
        )
    focus_minutes = _as_int(value[0], field)
    break_minutes = _as_int(value[1], field)
    if focus_minutes <= 0 or break_minutes <= 0:
        raise AppConfigurationError(f"{field} minutes must be > 0.")
    return focus_minutes, break_minutes


def _resolve_path(base_dir: Path, raw: str) -> str:
    if not raw:
        return ""
    path = Path(raw).expanduser()
    if not path.is_absolute():
        path = (base_dir / path).resolve()
    return str(path)
