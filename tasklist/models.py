"""
Task Model
==========
The single record kept by the task store, and its JSON shape.

    {"id": 1, "title": "Buy milk", "done": false, "date": 0, "priority": 0}

A ``date`` of 0 means the task is unscheduled.
"""

from __future__ import annotations

from dataclasses import dataclass, asdict, replace


@dataclass
class Task:
    """A to-do item. ``id`` is assigned by the store and never changes."""

    id: int
    title: str
    done: bool = False
    date: int = 0                 # Scheduling timestamp, 0 = unscheduled
    priority: int = 0

    @property
    def is_scheduled(self) -> bool:
        return self.date != 0

    def copy(self) -> Task:
        """Independent copy, so callers can't mutate a stored record."""
        return replace(self)

    def to_dict(self) -> dict:
        """Serialize to the wire shape (key order is part of the format)."""
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict) -> Task:
        """Deserialize from dict, ignoring unknown keys."""
        return cls(**{k: v for k, v in data.items()
                      if k in cls.__dataclass_fields__})
