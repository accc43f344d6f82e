"""
Task List Test Suite: Task Store
================================
Tests for the sequential in-memory store: ID allocation, lookup,
replacement and deletion.

Usage:
    python -m pytest tests/test_store.py -v
    python tests/test_store.py
"""
import sys
import os
import unittest

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from tasklist.models import Task
from tasklist.store import TaskStore, NotFoundError, InvalidArgumentError, StoreError


# ─────────────────────────────────────────────
#  Task Model Tests
# ─────────────────────────────────────────────

class TestTask(unittest.TestCase):

    def test_defaults(self):
        task = Task(id=1, title="X")
        self.assertFalse(task.done)
        self.assertEqual(task.date, 0)
        self.assertEqual(task.priority, 0)
        self.assertFalse(task.is_scheduled)

    def test_is_scheduled(self):
        self.assertTrue(Task(id=1, title="X", date=1700000000).is_scheduled)

    def test_wire_shape(self):
        task = Task(id=3, title="Buy milk", done=True, date=1700000000, priority=2)
        self.assertEqual(
            list(task.to_dict().items()),
            [("id", 3), ("title", "Buy milk"), ("done", True),
             ("date", 1700000000), ("priority", 2)],
        )

    def test_from_dict_ignores_unknown_keys(self):
        task = Task.from_dict({"id": 1, "title": "A", "owner": "bob"})
        self.assertEqual(task, Task(id=1, title="A"))

    def test_copy_is_independent(self):
        task = Task(id=1, title="A")
        clone = task.copy()
        clone.done = True
        self.assertFalse(task.done)


# ─────────────────────────────────────────────
#  Create / Find
# ─────────────────────────────────────────────

class TestCreate(unittest.TestCase):

    def setUp(self):
        self.store = TaskStore()

    def test_ids_strictly_increase(self):
        ids = [self.store.create(f"task {i}").id for i in range(20)]
        self.assertEqual(ids, sorted(set(ids)))
        self.assertEqual(ids[0], 1)

    def test_round_trip(self):
        created = self.store.create("X")
        found, ok = self.store.find(created.id)
        self.assertTrue(ok)
        self.assertEqual(found.title, "X")
        self.assertFalse(found.done)
        self.assertEqual(found.date, 0)
        self.assertEqual(found.priority, 0)

    def test_empty_title_rejected(self):
        with self.assertRaises(InvalidArgumentError):
            self.store.create("")
        self.assertEqual(len(self.store), 0)

    def test_failed_create_does_not_consume_id(self):
        with self.assertRaises(InvalidArgumentError):
            self.store.create("")
        self.assertEqual(self.store.create("A").id, 1)

    def test_find_missing(self):
        task, ok = self.store.find(42)
        self.assertIsNone(task)
        self.assertFalse(ok)

    def test_returned_task_is_a_snapshot(self):
        created = self.store.create("A")
        created.title = "mutated"
        found, _ = self.store.find(created.id)
        self.assertEqual(found.title, "A")

    def test_all_in_insertion_order(self):
        for title in ("a", "b", "c"):
            self.store.create(title)
        self.assertEqual([t.title for t in self.store.all()], ["a", "b", "c"])

    def test_contains(self):
        task = self.store.create("A")
        self.assertIn(task.id, self.store)
        self.assertNotIn(task.id + 1, self.store)


# ─────────────────────────────────────────────
#  Update / Delete
# ─────────────────────────────────────────────

class TestUpdate(unittest.TestCase):

    def setUp(self):
        self.store = TaskStore()

    def test_update_missing(self):
        with self.assertRaises(NotFoundError) as ctx:
            self.store.update(Task(id=7, title="ghost"))
        self.assertEqual(ctx.exception.task_id, 7)
        self.assertEqual(len(self.store), 0)

    def test_update_replaces_whole_record(self):
        created = self.store.create("A")
        new = Task(id=created.id, title="B", done=True, date=99, priority=5)
        self.store.update(new)
        found, ok = self.store.find(created.id)
        self.assertTrue(ok)
        self.assertEqual(found, new)

    def test_update_keeps_insertion_position(self):
        a = self.store.create("a")
        self.store.create("b")
        self.store.update(Task(id=a.id, title="a2"))
        self.assertEqual([t.title for t in self.store.all()], ["a2", "b"])


class TestDelete(unittest.TestCase):

    def setUp(self):
        self.store = TaskStore()

    def test_delete_is_final(self):
        task = self.store.create("A")
        self.store.delete(task.id)
        _, ok = self.store.find(task.id)
        self.assertFalse(ok)

    def test_ids_never_reused(self):
        first = self.store.create("A")
        second = self.store.create("B")
        self.store.delete(second.id)
        self.store.delete(first.id)
        third = self.store.create("C")
        self.assertNotIn(third.id, (first.id, second.id))
        self.assertGreater(third.id, second.id)

    def test_delete_missing(self):
        with self.assertRaises(NotFoundError):
            self.store.delete(1)

    def test_delete_twice(self):
        task = self.store.create("A")
        self.store.delete(task.id)
        with self.assertRaises(StoreError):
            self.store.delete(task.id)


if __name__ == "__main__":
    unittest.main()
