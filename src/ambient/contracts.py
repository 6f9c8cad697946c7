"""Protocols describing the audio output device used by the synthesizer."""

from __future__ import annotations

from typing import Literal, Protocol

from .graph import AudioGraph

DeviceState = Literal["suspended", "running", "closed"]

DEVICE_SUSPENDED = "suspended"
DEVICE_RUNNING = "running"
DEVICE_CLOSED = "closed"


class AudioOutputLike(Protocol):
    """Output device that renders at most one connected graph."""

    @property
    def sample_rate_hz(self) -> int: ...

    @property
    def state(self) -> DeviceState: ...

    @property
    def current_time(self) -> float: ...

    def resume(self) -> None: ...

    def connect(self, graph: AudioGraph) -> None: ...

    def disconnect(self, graph: AudioGraph) -> None: ...

    def close(self) -> None: ...
