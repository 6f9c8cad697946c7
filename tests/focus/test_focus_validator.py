import json
import math
import unittest

from focus import PersistedSnapshot, Task, default_snapshot, sanitize
from focus.validator import (
    clamp_break_minutes,
    clamp_focus_minutes,
    clamp_number,
    clamp_volume,
)


def _valid_snapshot(**overrides) -> PersistedSnapshot:
    values = dict(
        focus_minutes=40,
        break_minutes=8,
        mode="break",
        seconds_left=123,
        completed_sessions=7,
        tasks=(Task(id="1-2", title="Write report", done=True), Task(id="3-4", title="Reply")),
        ambient="rain",
        volume=65,
    )
    values.update(overrides)
    return PersistedSnapshot(**values)


class SanitizeTests(unittest.TestCase):
    def test_non_mapping_input_yields_defaults(self) -> None:
        for raw in (None, [], "state", 42, True):
            with self.subTest(raw=raw):
                self.assertEqual(default_snapshot(), sanitize(raw))

    def test_defaults_match_documented_values(self) -> None:
        snapshot = default_snapshot()

        self.assertEqual(25, snapshot.focus_minutes)
        self.assertEqual(5, snapshot.break_minutes)
        self.assertEqual("focus", snapshot.mode)
        self.assertEqual(1500, snapshot.seconds_left)
        self.assertEqual(0, snapshot.completed_sessions)
        self.assertEqual((), snapshot.tasks)
        self.assertEqual("off", snapshot.ambient)
        self.assertEqual(40, snapshot.volume)

    def test_numeric_fields_are_clamped_into_range(self) -> None:
        snapshot = sanitize(
            {
                "focusMinutes": 500,
                "breakMinutes": 0,
                "completedSessions": -3,
                "volume": 250,
            }
        )

        self.assertEqual(120, snapshot.focus_minutes)
        self.assertEqual(1, snapshot.break_minutes)
        self.assertEqual(0, snapshot.completed_sessions)
        self.assertEqual(100, snapshot.volume)

    def test_completed_sessions_has_upper_bound(self) -> None:
        snapshot = sanitize({"completedSessions": 10**9})
        self.assertEqual(100_000, snapshot.completed_sessions)

    def test_seconds_left_bounded_by_sanitized_mode_duration(self) -> None:
        snapshot = sanitize(
            {"mode": "break", "breakMinutes": 5, "focusMinutes": 50, "secondsLeft": 2000}
        )

        self.assertEqual("break", snapshot.mode)
        self.assertEqual(300, snapshot.seconds_left)

    def test_unknown_mode_falls_back_to_focus(self) -> None:
        snapshot = sanitize({"mode": "nap", "focusMinutes": 30, "secondsLeft": 4000})

        self.assertEqual("focus", snapshot.mode)
        self.assertEqual(1800, snapshot.seconds_left)

    def test_missing_seconds_left_uses_full_duration(self) -> None:
        snapshot = sanitize({"mode": "break", "breakMinutes": 10})
        self.assertEqual(600, snapshot.seconds_left)

    def test_unknown_ambient_falls_back_to_off(self) -> None:
        self.assertEqual("off", sanitize({"ambient": "disco"}).ambient)
        self.assertEqual("forest", sanitize({"ambient": "forest"}).ambient)

    def test_malformed_values_count_as_missing(self) -> None:
        snapshot = sanitize(
            {
                "focusMinutes": "thirty",
                "breakMinutes": True,
                "secondsLeft": math.nan,
                "volume": None,
            }
        )

        self.assertEqual(25, snapshot.focus_minutes)
        self.assertEqual(5, snapshot.break_minutes)
        self.assertEqual(1500, snapshot.seconds_left)
        self.assertEqual(40, snapshot.volume)

    def test_fractional_values_are_truncated(self) -> None:
        snapshot = sanitize({"focusMinutes": 30.9, "secondsLeft": 99.7})

        self.assertEqual(30, snapshot.focus_minutes)
        self.assertEqual(99, snapshot.seconds_left)

    def test_malformed_tasks_are_dropped(self) -> None:
        snapshot = sanitize(
            {
                "tasks": [
                    {"id": "1-1", "title": "Keep", "done": 1},
                    {"id": 7, "title": "bad id"},
                    {"title": "no id"},
                    "not a task",
                ]
            }
        )

        self.assertEqual((Task(id="1-1", title="Keep", done=True),), snapshot.tasks)

    def test_tasks_not_a_list_yields_empty(self) -> None:
        self.assertEqual((), sanitize({"tasks": {"id": "1"}}).tasks)

    def test_serialized_snapshot_sanitizes_back_to_itself(self) -> None:
        for snapshot in (
            default_snapshot(),
            _valid_snapshot(),
            _valid_snapshot(mode="focus", seconds_left=0, volume=0, ambient="off"),
            _valid_snapshot(focus_minutes=120, break_minutes=45, seconds_left=2700),
        ):
            with self.subTest(snapshot=snapshot):
                decoded = json.loads(json.dumps(snapshot.to_dict()))
                self.assertEqual(snapshot, sanitize(decoded))


class ClampTests(unittest.TestCase):
    def test_clamp_number_returns_fallback_for_non_numbers(self) -> None:
        self.assertEqual(9, clamp_number(None, 0, 10, 9))
        self.assertEqual(9, clamp_number("5", 0, 10, 9))
        self.assertEqual(9, clamp_number(False, 0, 10, 9))

    def test_clamp_focus_minutes_accepts_numeric_strings(self) -> None:
        self.assertEqual(45, clamp_focus_minutes("45"))
        self.assertEqual(5, clamp_focus_minutes("abc"))
        self.assertEqual(5, clamp_focus_minutes(0))
        self.assertEqual(120, clamp_focus_minutes(1000))

    def test_clamp_break_minutes_uses_range_minimum_as_fallback(self) -> None:
        self.assertEqual(1, clamp_break_minutes(None))
        self.assertEqual(45, clamp_break_minutes(90))

    def test_clamp_volume_keeps_zero(self) -> None:
        self.assertEqual(0, clamp_volume(0))
        self.assertEqual(0, clamp_volume("0"))
        self.assertEqual(55, clamp_volume("bad", 55))


if __name__ == "__main__":
    unittest.main()
