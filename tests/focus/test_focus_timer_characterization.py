import json
import unittest

from focus import FocusTimer, InMemoryKeyValueStore, PersistenceStore
from focus.constants import STORAGE_KEY


def _timer(stored: dict | None = None) -> tuple[FocusTimer, InMemoryKeyValueStore]:
    backend = InMemoryKeyValueStore(
        {STORAGE_KEY: json.dumps(stored)} if stored is not None else None
    )
    return FocusTimer(PersistenceStore(backend)), backend


def _stored(backend: InMemoryKeyValueStore) -> dict:
    return json.loads(backend.get(STORAGE_KEY))


class FocusTimerCharacterizationTests(unittest.TestCase):
    def test_start_sets_running(self) -> None:
        timer, _ = _timer()
        result = timer.start()

        self.assertTrue(result.accepted)
        self.assertEqual("started", result.reason)
        self.assertTrue(result.state.running)
        self.assertEqual(1500, result.state.seconds_left)

    def test_start_rejected_when_running(self) -> None:
        timer, _ = _timer()
        timer.start()
        result = timer.start()

        self.assertFalse(result.accepted)
        self.assertEqual("already_running", result.reason)

    def test_pause_rejected_when_not_running(self) -> None:
        timer, _ = _timer()
        result = timer.pause()

        self.assertFalse(result.accepted)
        self.assertEqual("not_running", result.reason)

    def test_toggle_alternates_running(self) -> None:
        timer, _ = _timer()

        first = timer.toggle()
        second = timer.toggle()

        self.assertEqual("toggle", first.action)
        self.assertTrue(first.state.running)
        self.assertFalse(second.state.running)

    def test_tick_is_noop_while_idle(self) -> None:
        timer, _ = _timer()
        self.assertIsNone(timer.tick())
        self.assertEqual(1500, timer.snapshot().seconds_left)

    def test_tick_decrements_and_persists(self) -> None:
        timer, backend = _timer()
        timer.start()

        tick = timer.tick()

        self.assertFalse(tick.completed)
        self.assertEqual(1499, tick.state.seconds_left)
        self.assertEqual(1499, _stored(backend)["secondsLeft"])

    def test_focus_expiry_switches_to_break_once(self) -> None:
        timer, _ = _timer()
        timer.start()

        ticks = [timer.tick() for _ in range(1500)]

        completions = [tick for tick in ticks if tick.completed]
        self.assertEqual(1, len(completions))
        self.assertEqual("focus", completions[0].completed_mode)
        state = timer.snapshot()
        self.assertEqual("break", state.mode)
        self.assertEqual(300, state.seconds_left)
        self.assertEqual(1, state.completed_sessions)
        self.assertTrue(state.running)

    def test_break_expiry_does_not_count_a_session(self) -> None:
        timer, _ = _timer()
        timer.start()

        for _ in range(1500 + 300):
            timer.tick()

        state = timer.snapshot()
        self.assertEqual("focus", state.mode)
        self.assertEqual(1500, state.seconds_left)
        self.assertEqual(1, state.completed_sessions)

    def test_set_mode_never_changes_completed_sessions(self) -> None:
        for completed in (0, 1, 99_999):
            with self.subTest(completed=completed):
                timer, _ = _timer({"completedSessions": completed})
                timer.start()

                result = timer.set_mode("break")
                timer.set_mode("focus")

                self.assertTrue(result.accepted)
                self.assertFalse(result.state.running)
                self.assertEqual(300, result.state.seconds_left)
                self.assertEqual(completed, timer.snapshot().completed_sessions)

    def test_set_mode_rejects_unknown_mode(self) -> None:
        timer, _ = _timer()
        result = timer.set_mode("nap")

        self.assertFalse(result.accepted)
        self.assertEqual("invalid_mode", result.reason)
        self.assertEqual("focus", timer.snapshot().mode)

    def test_duration_change_resets_idle_active_mode(self) -> None:
        timer, _ = _timer()

        focus_result = timer.set_focus_duration(40)
        break_result = timer.set_break_duration(10)

        self.assertEqual(2400, focus_result.state.seconds_left)
        self.assertEqual(2400, break_result.state.seconds_left)
        self.assertEqual(10, break_result.state.break_minutes)

    def test_duration_change_keeps_running_countdown(self) -> None:
        timer, _ = _timer()
        timer.start()
        timer.tick()

        result = timer.set_focus_duration(50)

        self.assertEqual(50, result.state.focus_minutes)
        self.assertEqual(1499, result.state.seconds_left)
        self.assertTrue(result.state.running)

    def test_duration_inputs_are_clamped(self) -> None:
        timer, _ = _timer()

        self.assertEqual(120, timer.set_focus_duration(999).state.focus_minutes)
        self.assertEqual(5, timer.set_focus_duration("").state.focus_minutes)
        self.assertEqual(1, timer.set_break_duration(-4).state.break_minutes)

    def test_reset_returns_to_idle_focus(self) -> None:
        timer, _ = _timer({"mode": "break", "completedSessions": 4})
        timer.start()

        result = timer.reset()

        self.assertEqual("focus", result.state.mode)
        self.assertEqual(1500, result.state.seconds_left)
        self.assertFalse(result.state.running)
        self.assertEqual(4, result.state.completed_sessions)

    def test_restores_persisted_state_idle(self) -> None:
        timer, _ = _timer({"mode": "break", "breakMinutes": 10, "secondsLeft": 77})
        state = timer.snapshot()

        self.assertEqual("break", state.mode)
        self.assertEqual(77, state.seconds_left)
        self.assertFalse(state.running)

    def test_end_to_end_focus_break_preset_flow(self) -> None:
        timer, backend = _timer()
        timer.start()
        for _ in range(1500):
            timer.tick()

        state = timer.snapshot()
        self.assertEqual(("break", 300, 1), (state.mode, state.seconds_left, state.completed_sessions))

        paused = timer.pause()
        self.assertFalse(paused.state.running)
        self.assertEqual(300, paused.state.seconds_left)
        self.assertIsNone(timer.tick())

        preset = timer.apply_preset(50, 10)
        self.assertEqual("focus", preset.state.mode)
        self.assertEqual(3000, preset.state.seconds_left)
        self.assertFalse(preset.state.running)

        stored = _stored(backend)
        stored["ambient"] = "disco"
        backend.set(STORAGE_KEY, json.dumps(stored))
        reloaded = PersistenceStore(backend).load()
        self.assertEqual("off", reloaded.ambient)
        self.assertEqual(50, reloaded.focus_minutes)


if __name__ == "__main__":
    unittest.main()
