# src/atomlayout/reactive/property.py
"""Observable values and the dependency graph that keeps derived values current.

Every property knows the derived properties built on top of it. When a value
changes, propagation runs in two phases:

1. The changed property notifies its own listeners.
2. Every transitive dependent is recomputed exactly once, ordered by rank
   (a derived property always ranks above all of its sources) and then by
   creation order. A dependent whose recomputed value is unchanged does not
   notify and does not dirty its own dependents.

This gives a topological order, so a diamond (charge depending on proton count
and electron count) never sees a half-updated input.
"""

from __future__ import annotations

import heapq
import itertools
from collections.abc import Callable, Sequence
from typing import Any, Generic, TypeVar

from atomlayout.reactive.exceptions import ReadOnlyPropertyError

T = TypeVar("T")

# (new_value, old_value); old_value is None for the initial call made by link()
Listener = Callable[[Any, Any], None]

_creation_counter = itertools.count()


class ReadOnlyProperty(Generic[T]):
    """A value with change notification that callers can read but not set.

    Subclasses decide how the value changes: ``Property`` exposes ``set`` and
    ``DerivedProperty`` recomputes from its sources.
    """

    def __init__(self, value: T, *, name: str | None = None) -> None:
        self._value = value
        self.name = name
        self._listeners: list[Listener] = []
        self._dependents: list[DerivedProperty[Any]] = []
        self._rank = 0
        self._order = next(_creation_counter)

    def get(self) -> T:
        return self._value

    @property
    def value(self) -> T:
        return self._value

    def link(self, listener: Listener) -> None:
        """Add a listener and call it right away with (value, None)."""
        self._listeners.append(listener)
        listener(self._value, None)

    def lazy_link(self, listener: Listener) -> None:
        """Add a listener that is only called on future changes."""
        self._listeners.append(listener)

    def unlink(self, listener: Listener) -> None:
        """Remove a listener. Unknown listeners are ignored."""
        if listener in self._listeners:
            self._listeners.remove(listener)

    def has_listener(self, listener: Listener) -> bool:
        return listener in self._listeners

    @property
    def listener_count(self) -> int:
        return len(self._listeners)

    def _update(self, value: T) -> None:
        if value == self._value:
            return
        old_value = self._value
        self._value = value
        _propagate(self, old_value)

    def _notify(self, old_value: T | None) -> None:
        # Snapshot so listeners added during this event are not replayed.
        for listener in tuple(self._listeners):
            listener(self._value, old_value)

    def _register_dependent(self, dependent: DerivedProperty[Any]) -> None:
        self._dependents.append(dependent)

    def __repr__(self) -> str:
        label = f"{self.name}=" if self.name else ""
        return f"{type(self).__name__}({label}{self._value!r})"


class Property(ReadOnlyProperty[T]):
    """A settable observable value."""

    def set(self, value: T) -> None:
        """Set the value, notifying listeners and dependents if it changed."""
        self._update(value)


class DerivedProperty(ReadOnlyProperty[T]):
    """A value computed from other properties.

    Example:
        charge = DerivedProperty(
            [proton_count, electron_count],
            lambda protons, electrons: protons - electrons,
        )
    """

    def __init__(
        self,
        dependencies: Sequence[ReadOnlyProperty[Any]],
        derivation: Callable[..., T],
        *,
        name: str | None = None,
    ) -> None:
        if not dependencies:
            raise ValueError("DerivedProperty needs at least one dependency")
        self._dependencies = tuple(dependencies)
        self._derivation = derivation
        super().__init__(self._compute(), name=name)
        self._rank = 1 + max(dependency._rank for dependency in self._dependencies)
        for dependency in self._dependencies:
            dependency._register_dependent(self)

    @property
    def dependencies(self) -> tuple[ReadOnlyProperty[Any], ...]:
        return self._dependencies

    def set(self, value: T) -> None:
        raise ReadOnlyPropertyError(f"Cannot set derived property {self.name or self!r}")

    def _compute(self) -> T:
        return self._derivation(*(dependency.get() for dependency in self._dependencies))

    def _recompute(self) -> tuple[bool, T]:
        old_value = self._value
        new_value = self._compute()
        if new_value == old_value:
            return False, old_value
        self._value = new_value
        return True, old_value


def _propagate(source: ReadOnlyProperty[Any], old_value: Any) -> None:
    """Notify listeners of ``source`` and bring its dependents up to date."""
    source._notify(old_value)

    # Heap of dirty dependents keyed by (rank, creation order).
    queue: list[tuple[int, int, DerivedProperty[Any]]] = []
    queued: set[int] = set()

    def schedule(prop: ReadOnlyProperty[Any]) -> None:
        for dependent in prop._dependents:
            if id(dependent) not in queued:
                queued.add(id(dependent))
                heapq.heappush(queue, (dependent._rank, dependent._order, dependent))

    schedule(source)
    while queue:
        _, _, dependent = heapq.heappop(queue)
        changed, previous = dependent._recompute()
        if changed:
            dependent._notify(previous)
            schedule(dependent)
