"""Sounddevice-backed output device that renders the connected ambient graph."""

from __future__ import annotations

import logging
import threading
from typing import Optional

import numpy as np
import sounddevice as sd

from .contracts import DEVICE_CLOSED, DEVICE_RUNNING, DEVICE_SUSPENDED, DeviceState
from .errors import AmbientDeviceError
from .graph import AudioGraph


class SoundDeviceOutput:
    """Mono ``OutputStream`` that pulls blocks from a single connected graph.

    The stream is opened stopped (suspended) and only started by ``resume``.
    While nothing is connected the callback writes silence.
    """

    def __init__(
        self,
        *,
        output_device_index: Optional[int] = None,
        sample_rate_hz: Optional[int] = None,
        blocksize: int = 1024,
        logger: Optional[logging.Logger] = None,
    ):
        self._logger = logger or logging.getLogger("ambient.output")
        self._lock = threading.Lock()
        self._graph: Optional[AudioGraph] = None
        self._closed = False

        try:
            if not sample_rate_hz:
                info = sd.query_devices(output_device_index, "output")
                sample_rate_hz = int(info["default_samplerate"])
            self._stream = sd.OutputStream(
                samplerate=sample_rate_hz,
                blocksize=blocksize,
                channels=1,
                dtype="float32",
                device=output_device_index,
                callback=self._callback,
            )
        except Exception as error:
            raise AmbientDeviceError(f"Failed to open audio output: {error}") from error

        self._sample_rate_hz = int(self._stream.samplerate)
        self._logger.info(
            "Audio output opened: device=%s sample_rate=%dHz blocksize=%d",
            output_device_index if output_device_index is not None else "default",
            self._sample_rate_hz,
            blocksize,
        )

    @property
    def sample_rate_hz(self) -> int:
        return self._sample_rate_hz

    @property
    def state(self) -> DeviceState:
        if self._closed:
            return DEVICE_CLOSED
        if self._stream.active:
            return DEVICE_RUNNING
        return DEVICE_SUSPENDED

    @property
    def current_time(self) -> float:
        try:
            return float(self._stream.time)
        except Exception as error:
            raise AmbientDeviceError(f"Audio output clock unavailable: {error}") from error

    def resume(self) -> None:
        if self._closed:
            raise AmbientDeviceError("Audio output is closed")
        if self._stream.active:
            return
        try:
            self._stream.start()
        except Exception as error:
            raise AmbientDeviceError(f"Failed to resume audio output: {error}") from error
        self._logger.debug("Audio output resumed")

    def connect(self, graph: AudioGraph) -> None:
        with self._lock:
            if self._graph is not None and self._graph is not graph:
                raise AmbientDeviceError("Another audio graph is already connected")
            self._graph = graph

    def disconnect(self, graph: AudioGraph) -> None:
        with self._lock:
            if self._graph is graph:
                self._graph = None

    def close(self) -> None:
        if self._closed:
            return
        with self._lock:
            self._graph = None
        self._closed = True
        try:
            self._stream.abort()
            self._stream.close()
        except Exception as error:
            self._logger.warning("Error closing audio output: %s", error)
        self._logger.info("Audio output closed")

    def _callback(self, outdata: np.ndarray, frames: int, time_info, status) -> None:
        del time_info
        if status:
            self._logger.warning("Sounddevice status: %s", status)

        with self._lock:
            graph = self._graph
            if graph is None:
                outdata.fill(0)
                return
            outdata[:, 0] = graph.render(frames)
