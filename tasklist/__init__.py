"""
tasklist: In-Memory To-Do Service
==================================
CRUD over HTTP/JSON for a volatile, memory-resident task list.

Architecture:
    Store     TaskStore: sequential registry, monotonic IDs
    Guard     GuardedStore: reader/writer lock layered over the store
    Policy    Named filters and stable sorters for listings
    Server    FastAPI app factory mapping /task/ onto the guarded store
"""

__version__ = "0.1.0"

from tasklist.models import Task
from tasklist.store import TaskStore, StoreError, NotFoundError, InvalidArgumentError
from tasklist.guard import GuardedStore, ReadWriteLock
from tasklist.errors import RequestError

__all__ = [
    "Task",
    "TaskStore", "StoreError", "NotFoundError", "InvalidArgumentError",
    "GuardedStore", "ReadWriteLock",
    "RequestError",
]
