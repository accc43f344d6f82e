"""
Store Guard: Reader/Writer Exclusion
=====================================
Concurrency lives here, above the store, so ``TaskStore`` stays a simple
sequential structure that can be tested without threads.

    guarded = GuardedStore(TaskStore())

    with guarded.read() as store:       # shared: many readers at once
        task, ok = store.find(1)

    with guarded.write() as store:      # exclusive: one writer, no readers
        store.update(task)

A writer that is waiting blocks new readers, so a steady stream of reads
cannot starve updates.
"""

from __future__ import annotations

import threading
from contextlib import contextmanager
from typing import Iterator, Optional

from tasklist.models import Task
from tasklist.store import TaskStore


class ReadWriteLock:
    """Reader/writer lock with writer preference, built on a Condition."""

    def __init__(self):
        self._cond = threading.Condition(threading.Lock())
        self._readers = 0
        self._writer = False
        self._writers_waiting = 0

    def acquire_read(self):
        with self._cond:
            while self._writer or self._writers_waiting:
                self._cond.wait()
            self._readers += 1

    def release_read(self):
        with self._cond:
            self._readers -= 1
            if self._readers == 0:
                self._cond.notify_all()

    def acquire_write(self):
        with self._cond:
            self._writers_waiting += 1
            try:
                while self._writer or self._readers:
                    self._cond.wait()
            finally:
                self._writers_waiting -= 1
            self._writer = True

    def release_write(self):
        with self._cond:
            self._writer = False
            self._cond.notify_all()

    @contextmanager
    def reading(self) -> Iterator[None]:
        self.acquire_read()
        try:
            yield
        finally:
            self.release_read()

    @contextmanager
    def writing(self) -> Iterator[None]:
        self.acquire_write()
        try:
            yield
        finally:
            self.release_write()


class GuardedStore:
    """A ``TaskStore`` behind a single ``ReadWriteLock``.

    ``read()`` and ``write()`` hand out the underlying store for the span
    of a ``with`` block, so check-then-act sequences run under one hold.
    The one-shot methods below cover the common single-call cases.
    """

    def __init__(self, store: Optional[TaskStore] = None):
        self._store = store if store is not None else TaskStore()
        self._lock = ReadWriteLock()

    @contextmanager
    def read(self) -> Iterator[TaskStore]:
        with self._lock.reading():
            yield self._store

    @contextmanager
    def write(self) -> Iterator[TaskStore]:
        with self._lock.writing():
            yield self._store

    def create(self, title: str) -> Task:
        with self.write() as store:
            return store.create(title)

    def find(self, task_id: int) -> tuple[Optional[Task], bool]:
        with self.read() as store:
            return store.find(task_id)

    def all(self) -> list[Task]:
        with self.read() as store:
            return store.all()

    def update(self, task: Task) -> None:
        with self.write() as store:
            store.update(task)

    def delete(self, task_id: int) -> None:
        with self.write() as store:
            store.delete(task_id)
