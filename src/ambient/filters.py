"""Biquad filter stages and per-profile chain definitions.

Coefficients follow the RBJ "Audio EQ Cookbook" formulas, normalized so that
``a[0] == 1``. Stages keep their ``lfilter`` state between blocks, so a looped
source is filtered as one continuous signal.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Literal

import numpy as np
from scipy.signal import lfilter

from focus.constants import PROFILE_FOREST, PROFILE_RAIN, PROFILE_WHITE

FilterKind = Literal["lowpass", "highpass", "peaking"]

# Butterworth response for the plain pass filters.
DEFAULT_PASS_Q = 1.0 / math.sqrt(2.0)


@dataclass(frozen=True)
class FilterSpec:
    kind: FilterKind
    frequency_hz: float
    q: float = DEFAULT_PASS_Q
    gain_db: float = 0.0


PROFILE_CHAINS: dict[str, tuple[FilterSpec, ...]] = {
    PROFILE_WHITE: (),
    PROFILE_RAIN: (
        FilterSpec("highpass", 800.0),
        FilterSpec("lowpass", 7000.0),
    ),
    PROFILE_FOREST: (
        FilterSpec("lowpass", 1200.0),
        FilterSpec("peaking", 300.0, q=0.9, gain_db=2.0),
    ),
}


def biquad_coefficients(
    spec: FilterSpec,
    sample_rate_hz: int,
) -> tuple[np.ndarray, np.ndarray]:
    """Return normalized ``(b, a)`` coefficients for ``spec``."""
    if sample_rate_hz <= 0:
        raise ValueError("sample_rate_hz must be greater than zero")
    if spec.q <= 0:
        raise ValueError("q must be greater than zero")

    nyquist = sample_rate_hz / 2.0
    frequency = min(max(spec.frequency_hz, 1.0), nyquist * 0.999)
    w0 = 2.0 * math.pi * frequency / sample_rate_hz
    cos_w0 = math.cos(w0)
    alpha = math.sin(w0) / (2.0 * spec.q)

    if spec.kind == "lowpass":
        b = [(1.0 - cos_w0) / 2.0, 1.0 - cos_w0, (1.0 - cos_w0) / 2.0]
        a = [1.0 + alpha, -2.0 * cos_w0, 1.0 - alpha]
    elif spec.kind == "highpass":
        b = [(1.0 + cos_w0) / 2.0, -(1.0 + cos_w0), (1.0 + cos_w0) / 2.0]
        a = [1.0 + alpha, -2.0 * cos_w0, 1.0 - alpha]
    elif spec.kind == "peaking":
        amplitude = 10.0 ** (spec.gain_db / 40.0)
        b = [1.0 + alpha * amplitude, -2.0 * cos_w0, 1.0 - alpha * amplitude]
        a = [1.0 + alpha / amplitude, -2.0 * cos_w0, 1.0 - alpha / amplitude]
    else:
        raise ValueError(f"Unsupported filter kind: {spec.kind}")

    b_arr = np.asarray(b, dtype=np.float64)
    a_arr = np.asarray(a, dtype=np.float64)
    return b_arr / a_arr[0], a_arr / a_arr[0]


class BiquadStage:
    """Stateful second-order IIR stage."""

    def __init__(self, spec: FilterSpec, sample_rate_hz: int):
        self.spec = spec
        self._b, self._a = biquad_coefficients(spec, sample_rate_hz)
        self._zi = np.zeros(2, dtype=np.float64)

    @property
    def coefficients(self) -> tuple[np.ndarray, np.ndarray]:
        return self._b, self._a

    def process(self, block: np.ndarray) -> np.ndarray:
        out, self._zi = lfilter(self._b, self._a, block, zi=self._zi)
        return out


def build_chain(profile: str, sample_rate_hz: int) -> list[BiquadStage]:
    """Instantiate fresh filter stages for ``profile``."""
    try:
        specs = PROFILE_CHAINS[profile]
    except KeyError:
        raise ValueError(f"No filter chain for ambient profile: {profile}") from None
    return [BiquadStage(spec, sample_rate_hz) for spec in specs]
