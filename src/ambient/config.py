"""Configuration model for ambient noise synthesis and output selection."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .errors import AmbientConfigurationError


@dataclass(frozen=True)
class AmbientAudioConfig:
    """Validated output-device and noise-buffer settings."""
    enabled: bool = True
    output_device_index: Optional[int] = None
    sample_rate_hz: Optional[int] = None
    blocksize: int = 1024
    noise_buffer_seconds: float = 2.0

    def __post_init__(self) -> None:
        if self.blocksize <= 0:
            raise AmbientConfigurationError(
                f"audio.blocksize must be greater than zero, got: {self.blocksize}"
            )
        if self.noise_buffer_seconds <= 0:
            raise AmbientConfigurationError(
                "audio.noise_buffer_seconds must be greater than zero, "
                f"got: {self.noise_buffer_seconds}"
            )
        if self.sample_rate_hz is not None and self.sample_rate_hz <= 0:
            raise AmbientConfigurationError(
                f"audio.sample_rate_hz must be positive, got: {self.sample_rate_hz}"
            )

    @classmethod
    def from_settings(cls, settings) -> "AmbientAudioConfig":
        sample_rate = getattr(settings, "sample_rate_hz", 0) or None
        return cls(
            enabled=bool(settings.enabled),
            output_device_index=settings.output_device,
            sample_rate_hz=sample_rate,
            blocksize=settings.blocksize,
            noise_buffer_seconds=settings.noise_buffer_seconds,
        )
