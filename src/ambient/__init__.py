"""Public exports for procedural ambient sound components."""

from .config import AmbientAudioConfig
from .errors import AmbientConfigurationError, AmbientDeviceError, AmbientError
from .filters import BiquadStage, FilterSpec, PROFILE_CHAINS, build_chain
from .graph import AudioGraph, GainStage, NoiseSource, generate_noise_buffer
from .service import (
    STATUS_DEGRADED,
    STATUS_OFF,
    STATUS_PLAYING,
    AmbientStatus,
    AmbientSynthesizer,
)

__all__ = [
    "AmbientAudioConfig",
    "AmbientConfigurationError",
    "AmbientDeviceError",
    "AmbientError",
    "AmbientStatus",
    "AmbientSynthesizer",
    "AudioGraph",
    "BiquadStage",
    "FilterSpec",
    "GainStage",
    "NoiseSource",
    "PROFILE_CHAINS",
    "STATUS_DEGRADED",
    "STATUS_OFF",
    "STATUS_PLAYING",
    "build_chain",
    "generate_noise_buffer",
]
