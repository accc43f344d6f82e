"""
Task Store
==========
Authoritative in-memory registry of tasks, addressable by ID.

The store is a plain sequential data structure and is NOT thread-safe.
Concurrent callers must go through ``tasklist.guard.GuardedStore``.

IDs come from a monotonic counter: a deleted task's ID is retired for the
lifetime of the store and never handed out again.
"""

from __future__ import annotations

from typing import Optional

from tasklist.models import Task


class StoreError(Exception):
    """Base class for task store failures."""
    pass


class NotFoundError(StoreError):
    """No task with the given ID exists."""

    def __init__(self, task_id: int):
        super().__init__(f"task id: {task_id} doesn't exist")
        self.task_id = task_id


class InvalidArgumentError(StoreError):
    """An operation was called with an unusable argument."""
    pass


class TaskStore:
    """In-memory task manager.

    Tasks are kept in a dict keyed by ID; dicts preserve insertion order,
    so ``all()`` lists tasks in creation order.
    """

    def __init__(self):
        self._tasks: dict[int, Task] = {}
        self._last_id = 0

    def create(self, title: str) -> Task:
        """Create a task with the next unused ID and return it."""
        if not title:
            raise InvalidArgumentError("empty title")
        self._last_id += 1
        task = Task(id=self._last_id, title=title)
        self._tasks[task.id] = task
        return task.copy()

    def find(self, task_id: int) -> tuple[Optional[Task], bool]:
        """Look up a task. Returns (task, True) or (None, False)."""
        task = self._tasks.get(task_id)
        if task is None:
            return None, False
        return task.copy(), True

    def all(self) -> list[Task]:
        """Snapshot of every task, in insertion order."""
        return [t.copy() for t in self._tasks.values()]

    def update(self, task: Task) -> None:
        """Replace the stored record that has ``task.id``."""
        if task.id not in self._tasks:
            raise NotFoundError(task.id)
        self._tasks[task.id] = task.copy()

    def delete(self, task_id: int) -> None:
        """Remove a task permanently."""
        if task_id not in self._tasks:
            raise NotFoundError(task_id)
        del self._tasks[task_id]

    def __len__(self) -> int:
        return len(self._tasks)

    def __contains__(self, task_id: object) -> bool:
        return task_id in self._tasks
