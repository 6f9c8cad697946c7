"""Ambient noise synthesizer that owns the output device and the active graph."""

from __future__ import annotations

import logging
from typing import Any, Callable, Literal, Optional

import numpy as np

from focus.constants import AMBIENT_PROFILES, DEFAULT_VOLUME, PROFILE_OFF
from focus.validator import clamp_volume

from .config import AmbientAudioConfig
from .contracts import DEVICE_CLOSED, DEVICE_SUSPENDED, AudioOutputLike
from .errors import AmbientDeviceError
from .filters import build_chain
from .graph import AudioGraph, GainStage, NoiseSource, generate_noise_buffer

AmbientStatus = Literal["off", "playing", "degraded"]

STATUS_OFF = "off"
STATUS_PLAYING = "playing"
STATUS_DEGRADED = "degraded"


def _sounddevice_output_factory(
    config: AmbientAudioConfig,
    logger: logging.Logger,
) -> Callable[[], AudioOutputLike]:
    def factory() -> AudioOutputLike:
        # Lazy import: loading sounddevice fails on hosts without PortAudio,
        # which must only degrade ambient playback.
        try:
            from .output import SoundDeviceOutput
        except (ImportError, OSError) as error:
            raise AmbientDeviceError(f"Audio backend unavailable: {error}") from error

        return SoundDeviceOutput(
            output_device_index=config.output_device_index,
            sample_rate_hz=config.sample_rate_hz,
            blocksize=config.blocksize,
            logger=logger.getChild("output"),
        )

    return factory


class AmbientSynthesizer:
    """Builds, swaps, and tears down the procedural noise graph.

    At most one graph is connected at any time: every rebuild stops and
    disconnects the previous graph before the next one is created. Device
    failures never propagate; they leave the synthesizer ``degraded``.
    """

    def __init__(
        self,
        config: Optional[AmbientAudioConfig] = None,
        *,
        output_factory: Optional[Callable[[], AudioOutputLike]] = None,
        rng: Optional[np.random.Generator] = None,
        logger: Optional[logging.Logger] = None,
    ):
        self._config = config or AmbientAudioConfig()
        self._logger = logger or logging.getLogger("ambient")
        self._output_factory = output_factory or _sounddevice_output_factory(
            self._config,
            self._logger,
        )
        self._rng = rng
        self._device: Optional[AudioOutputLike] = None
        self._graph: Optional[AudioGraph] = None
        self._profile = PROFILE_OFF
        self._volume = DEFAULT_VOLUME
        self._status: AmbientStatus = STATUS_OFF

    @property
    def profile(self) -> str:
        return self._profile

    @property
    def volume(self) -> int:
        return self._volume

    @property
    def status(self) -> AmbientStatus:
        return self._status

    @property
    def graph(self) -> Optional[AudioGraph]:
        return self._graph

    def set_profile(self, profile: Any, volume_percent: Any) -> AmbientStatus:
        profile = profile if profile in AMBIENT_PROFILES else PROFILE_OFF
        volume = clamp_volume(volume_percent, self._volume)

        graph = self._graph
        if graph is not None and graph.profile == profile:
            if volume != self._volume:
                graph.set_volume(volume)
            self._volume = volume
            return self._status

        if graph is None and profile == PROFILE_OFF and self._profile == PROFILE_OFF:
            self._volume = volume
            return self._status

        self._profile = profile
        self._volume = volume
        self._release_graph()
        if profile == PROFILE_OFF:
            self._status = STATUS_OFF
            self._logger.info("Ambient sound off")
            return self._status

        if not self._config.enabled:
            self._status = STATUS_DEGRADED
            self._logger.info("Ambient audio disabled; profile %s stays silent", profile)
            return self._status

        try:
            self._build(profile, volume)
        except AmbientDeviceError as error:
            self._logger.warning("Ambient playback unavailable: %s", error)
            self._release_graph()
            self._status = STATUS_DEGRADED
            return self._status

        self._status = STATUS_PLAYING
        self._logger.info("Ambient sound playing: profile=%s volume=%d%%", profile, volume)
        return self._status

    def set_volume(self, volume_percent: Any) -> AmbientStatus:
        volume = clamp_volume(volume_percent, self._volume)
        self._volume = volume
        if self._graph is not None:
            self._graph.set_volume(volume)
        return self._status

    def teardown(self) -> None:
        """Stop any graph and release the output device; safe to repeat."""
        self._release_graph()
        device = self._device
        self._device = None
        if device is not None:
            try:
                device.close()
            except AmbientDeviceError as error:
                self._logger.warning("Failed to close audio output: %s", error)
        self._profile = PROFILE_OFF
        self._status = STATUS_OFF

    def _build(self, profile: str, volume: int) -> None:
        device = self._acquire_device()
        if device.state == DEVICE_SUSPENDED:
            device.resume()

        sample_rate_hz = device.sample_rate_hz
        buffer = generate_noise_buffer(
            sample_rate_hz,
            self._config.noise_buffer_seconds,
            self._rng,
        )
        graph = AudioGraph(
            profile,
            NoiseSource(buffer),
            build_chain(profile, sample_rate_hz),
            GainStage(volume / 100.0),
        )
        self._graph = graph
        device.connect(graph)
        graph.start(device.current_time)
        self._logger.debug(
            "Ambient graph built: profile=%s stages=%d frames=%d",
            profile,
            len(graph.stages),
            len(buffer),
        )

    def _acquire_device(self) -> AudioOutputLike:
        if self._device is None or self._device.state == DEVICE_CLOSED:
            self._device = self._output_factory()
        return self._device

    def _release_graph(self) -> None:
        graph = self._graph
        self._graph = None
        if graph is None:
            return
        if self._device is not None:
            self._device.disconnect(graph)
        graph.stop()
