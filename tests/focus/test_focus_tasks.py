import itertools
import re
import unittest

from focus import InMemoryKeyValueStore, PersistenceStore, Task, TaskList
from focus.tasks import _default_task_id


def _sequential_ids():
    counter = itertools.count(1)
    return lambda: f"id-{next(counter)}"


class TaskListTests(unittest.TestCase):
    def setUp(self) -> None:
        self.backend = InMemoryKeyValueStore()
        self.store = PersistenceStore(self.backend)
        self.store.load()
        self.tasks = TaskList(self.store, id_factory=_sequential_ids())

    def test_add_trims_and_prepends(self) -> None:
        self.tasks.add("first")
        added = self.tasks.add("  second  ")

        self.assertEqual(Task(id="id-2", title="second", done=False), added)
        self.assertEqual(["second", "first"], [task.title for task in self.tasks.tasks])

    def test_add_ignores_blank_titles(self) -> None:
        self.assertIsNone(self.tasks.add("   "))
        self.assertIsNone(self.tasks.add(None))
        self.assertEqual((), self.tasks.tasks)

    def test_toggle_flips_done(self) -> None:
        self.tasks.add("write")

        self.assertTrue(self.tasks.toggle("id-1"))
        self.assertTrue(self.tasks.tasks[0].done)
        self.assertTrue(self.tasks.toggle("id-1"))
        self.assertFalse(self.tasks.tasks[0].done)
        self.assertFalse(self.tasks.toggle("missing"))

    def test_remove_drops_task(self) -> None:
        self.tasks.add("a")
        self.tasks.add("b")

        self.assertTrue(self.tasks.remove("id-1"))
        self.assertFalse(self.tasks.remove("id-1"))
        self.assertEqual(["b"], [task.title for task in self.tasks.tasks])

    def test_changes_are_persisted(self) -> None:
        self.tasks.add("persist me")
        self.tasks.toggle("id-1")

        reloaded = PersistenceStore(self.backend).load()
        self.assertEqual((Task(id="id-1", title="persist me", done=True),), reloaded.tasks)

    def test_list_is_restored_from_store(self) -> None:
        self.tasks.add("kept")
        store = PersistenceStore(self.backend)
        store.load()

        restored = TaskList(store)
        self.assertEqual(("kept",), tuple(task.title for task in restored.tasks))

    def test_default_id_is_epoch_millis_and_random_suffix(self) -> None:
        task_id = _default_task_id()
        match = re.fullmatch(r"(\d+)-(\d+)", task_id)

        self.assertIsNotNone(match)
        self.assertLess(int(match.group(2)), 100_000)


if __name__ == "__main__":
    unittest.main()
