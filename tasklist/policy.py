"""
Filter / Sort Policy Table
==========================
Named predicates and comparators selectable from the ``filter`` and
``sortBy`` query parameters of the task listing.

The registries are closed: an unknown or missing name looks up as ``None``
and the listing passes through unchanged.

Comparators answer "does t1 sort at or before t2?" using non-strict
``<=`` / ``>=``, so ordering is done with a stable merge sort driven by
the comparator directly. Ties keep their prior relative order.
"""

from __future__ import annotations

from typing import Callable, Optional

from tasklist.models import Task

Filter = Callable[[Task], bool]
Sorter = Callable[[Task, Task], bool]


# ─────────────────────────────────────────────────────────────
#  Registries
# ─────────────────────────────────────────────────────────────

FILTERS: dict[str, Filter] = {
    "isDone": lambda t: t.done,
    "isNotDone": lambda t: not t.done,
    "isScheduled": lambda t: t.is_scheduled,
}

SORTERS: dict[str, Sorter] = {
    "dateAsc": lambda t1, t2: t1.date <= t2.date,
    "dateDesc": lambda t1, t2: t1.date >= t2.date,
    "priorityAsc": lambda t1, t2: t1.priority <= t2.priority,
    "priorityDesc": lambda t1, t2: t1.priority >= t2.priority,
}


def get_filter(name: Optional[str]) -> Optional[Filter]:
    """Return the named filter, or None if the name isn't registered."""
    if not name:
        return None
    return FILTERS.get(name)


def get_sorter(name: Optional[str]) -> Optional[Sorter]:
    """Return the named sorter, or None if the name isn't registered."""
    if not name:
        return None
    return SORTERS.get(name)


def list_filters() -> list[str]:
    return sorted(FILTERS)


def list_sorters() -> list[str]:
    return sorted(SORTERS)


# ─────────────────────────────────────────────────────────────
#  Application
# ─────────────────────────────────────────────────────────────

def filter_tasks(tasks: list[Task], keep: Filter) -> list[Task]:
    return [t for t in tasks if keep(t)]


def sort_tasks(tasks: list[Task], before: Sorter) -> list[Task]:
    """Stable merge sort. ``before(a, b)`` is true when a may precede b."""
    if len(tasks) <= 1:
        return list(tasks)
    mid = len(tasks) // 2
    left = sort_tasks(tasks[:mid], before)
    right = sort_tasks(tasks[mid:], before)

    merged = []
    i = j = 0
    while i < len(left) and j < len(right):
        # Taking from the left on "at or before" keeps ties in input order.
        if before(left[i], right[j]):
            merged.append(left[i])
            i += 1
        else:
            merged.append(right[j])
            j += 1
    merged.extend(left[i:])
    merged.extend(right[j:])
    return merged


def apply(tasks: list[Task], filter_name: Optional[str] = None,
          sort_name: Optional[str] = None) -> list[Task]:
    """Filter, then sort. Unknown names are no-ops."""
    result = list(tasks)

    keep = get_filter(filter_name)
    if keep is not None:
        result = filter_tasks(result, keep)

    before = get_sorter(sort_name)
    if before is not None:
        result = sort_tasks(result, before)

    return result
