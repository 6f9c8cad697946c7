import math
import unittest

import numpy as np
from scipy.signal import freqz

from ambient.filters import (
    DEFAULT_PASS_Q,
    PROFILE_CHAINS,
    BiquadStage,
    FilterSpec,
    biquad_coefficients,
    build_chain,
)

_SAMPLE_RATE = 48_000


def _magnitude_at(spec: FilterSpec, frequency_hz: float) -> float:
    b, a = biquad_coefficients(spec, _SAMPLE_RATE)
    _, response = freqz(b, a, worN=[frequency_hz], fs=_SAMPLE_RATE)
    return float(abs(response[0]))


def _dc_gain(spec: FilterSpec) -> float:
    b, a = biquad_coefficients(spec, _SAMPLE_RATE)
    return float(np.sum(b) / np.sum(a))


class FilterChainTests(unittest.TestCase):
    def test_profile_chains_match_documented_topology(self) -> None:
        self.assertEqual((), PROFILE_CHAINS["white"])
        self.assertEqual(
            [("highpass", 800.0), ("lowpass", 7000.0)],
            [(spec.kind, spec.frequency_hz) for spec in PROFILE_CHAINS["rain"]],
        )
        forest = PROFILE_CHAINS["forest"]
        self.assertEqual(("lowpass", 1200.0), (forest[0].kind, forest[0].frequency_hz))
        self.assertEqual(
            ("peaking", 300.0, 0.9, 2.0),
            (forest[1].kind, forest[1].frequency_hz, forest[1].q, forest[1].gain_db),
        )

    def test_build_chain_creates_fresh_stages(self) -> None:
        first = build_chain("rain", _SAMPLE_RATE)
        second = build_chain("rain", _SAMPLE_RATE)

        self.assertEqual(2, len(first))
        self.assertIsNot(first[0], second[0])
        self.assertEqual([], build_chain("white", _SAMPLE_RATE))

    def test_build_chain_rejects_unknown_profile(self) -> None:
        with self.assertRaises(ValueError):
            build_chain("off", _SAMPLE_RATE)


class BiquadCoefficientTests(unittest.TestCase):
    def test_coefficients_are_normalized(self) -> None:
        for spec in PROFILE_CHAINS["rain"] + PROFILE_CHAINS["forest"]:
            with self.subTest(spec=spec):
                _, a = biquad_coefficients(spec, _SAMPLE_RATE)
                self.assertAlmostEqual(1.0, a[0])

    def test_lowpass_passes_dc_and_is_butterworth_at_cutoff(self) -> None:
        spec = FilterSpec("lowpass", 1200.0)

        self.assertAlmostEqual(1.0, _dc_gain(spec), places=9)
        self.assertAlmostEqual(DEFAULT_PASS_Q, _magnitude_at(spec, 1200.0), places=6)

    def test_highpass_blocks_dc(self) -> None:
        spec = FilterSpec("highpass", 800.0)

        self.assertAlmostEqual(0.0, _dc_gain(spec), places=9)
        self.assertGreater(_magnitude_at(spec, 10_000.0), 0.99)

    def test_peaking_boosts_centre_frequency(self) -> None:
        spec = FilterSpec("peaking", 300.0, q=0.9, gain_db=2.0)

        self.assertAlmostEqual(10 ** (2.0 / 20.0), _magnitude_at(spec, 300.0), places=6)
        self.assertAlmostEqual(1.0, _dc_gain(spec), places=9)

    def test_cutoff_above_nyquist_is_clamped(self) -> None:
        b, a = biquad_coefficients(FilterSpec("lowpass", 7000.0), 8000)
        self.assertTrue(np.all(np.isfinite(b)))
        self.assertTrue(np.all(np.isfinite(a)))

    def test_invalid_arguments_raise(self) -> None:
        with self.assertRaises(ValueError):
            biquad_coefficients(FilterSpec("lowpass", 1000.0), 0)
        with self.assertRaises(ValueError):
            biquad_coefficients(FilterSpec("lowpass", 1000.0, q=0.0), _SAMPLE_RATE)
        with self.assertRaises(ValueError):
            biquad_coefficients(FilterSpec("bandstop", 1000.0), _SAMPLE_RATE)  # type: ignore[arg-type]


class BiquadStageTests(unittest.TestCase):
    def test_state_carries_across_blocks(self) -> None:
        rng = np.random.default_rng(7)
        signal = rng.uniform(-1.0, 1.0, 512)
        spec = FilterSpec("lowpass", 2000.0)

        whole = BiquadStage(spec, _SAMPLE_RATE).process(signal)
        stage = BiquadStage(spec, _SAMPLE_RATE)
        split = np.concatenate([stage.process(signal[:200]), stage.process(signal[200:])])

        np.testing.assert_allclose(whole, split, atol=1e-12)

    def test_lowpass_attenuates_high_frequency_tone(self) -> None:
        t = np.arange(4800) / _SAMPLE_RATE
        tone = np.sin(2 * math.pi * 15_000.0 * t)

        out = BiquadStage(FilterSpec("lowpass", 1200.0), _SAMPLE_RATE).process(tone)

        self.assertLess(np.max(np.abs(out[1000:])), 0.05)


if __name__ == "__main__":
    unittest.main()
