"""Noise source, gain stage, and the owned signal graph rendered by the device."""

from __future__ import annotations

import threading
from typing import Optional, Sequence

import numpy as np

from .filters import BiquadStage


def generate_noise_buffer(
    sample_rate_hz: int,
    seconds: float,
    rng: Optional[np.random.Generator] = None,
) -> np.ndarray:
    """Return independent uniform samples in ``[-1, 1]`` for one loop period."""
    frames = max(1, int(round(sample_rate_hz * seconds)))
    generator = rng if rng is not None else np.random.default_rng()
    return generator.uniform(-1.0, 1.0, frames).astype(np.float32)


class NoiseSource:
    """Seamlessly looping playback of a fixed noise buffer."""

    def __init__(self, buffer: np.ndarray):
        if buffer.ndim != 1 or len(buffer) == 0:
            raise ValueError("Noise buffer must be a non-empty mono array")
        self.buffer = buffer
        self._position = 0

    def read(self, frames: int) -> np.ndarray:
        indices = (self._position + np.arange(frames)) % len(self.buffer)
        self._position = (self._position + frames) % len(self.buffer)
        return self.buffer[indices].astype(np.float64)


class GainStage:
    """Output gain that ramps linearly to a new target over one block."""

    def __init__(self, gain: float):
        self._current = float(gain)
        self._target = float(gain)

    @property
    def gain(self) -> float:
        return self._target

    def set_gain(self, gain: float) -> None:
        self._target = float(gain)

    def process(self, block: np.ndarray) -> np.ndarray:
        target = self._target
        if target == self._current:
            return block * target

        ramp = np.linspace(self._current, target, len(block), endpoint=True)
        self._current = target
        return block * ramp


class AudioGraph:
    """One source, zero or more filter stages, and one gain stage.

    ``render`` is called from the audio callback thread; ``start`` and
    ``stop`` are called from the owning synthesizer.
    """

    def __init__(
        self,
        profile: str,
        source: NoiseSource,
        stages: Sequence[BiquadStage],
        gain: GainStage,
    ):
        self.profile = profile
        self.source = source
        self.stages = tuple(stages)
        self.gain = gain
        self._lock = threading.Lock()
        self._playing = False
        self._stopped = False
        self.started_at: Optional[float] = None

    @property
    def is_playing(self) -> bool:
        return self._playing

    @property
    def is_stopped(self) -> bool:
        return self._stopped

    def start(self, when: float) -> None:
        with self._lock:
            if self._stopped:
                raise RuntimeError("A stopped audio graph cannot be restarted")
            self.started_at = when
            self._playing = True

    def stop(self) -> None:
        with self._lock:
            self._playing = False
            self._stopped = True

    def set_volume(self, volume_percent: int) -> None:
        self.gain.set_gain(volume_percent / 100.0)

    def render(self, frames: int) -> np.ndarray:
        with self._lock:
            if not self._playing:
                return np.zeros(frames, dtype=np.float32)
            block = self.source.read(frames)
            for stage in self.stages:
                block = stage.process(block)
            block = self.gain.process(block)
        return np.clip(block, -1.0, 1.0).astype(np.float32)
