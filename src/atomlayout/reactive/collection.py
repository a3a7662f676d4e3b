# src/atomlayout/reactive/collection.py
"""Ordered observable collection with add/remove notifications."""

from __future__ import annotations

from collections.abc import Callable, Iterator
from typing import Generic, TypeVar

from atomlayout.reactive.exceptions import DuplicateItemError, ItemNotFoundError
from atomlayout.reactive.property import Property, ReadOnlyProperty

T = TypeVar("T")

ItemListener = Callable[[T], None]


class ObservableCollection(Generic[T]):
    """An insertion-ordered collection of unique item references.

    Membership is by identity, so two particles that happen to compare equal
    are still distinct members. Mutations update ``length_property`` first and
    then notify item listeners, all before the mutating call returns.
    """

    def __init__(self, *, name: str | None = None) -> None:
        self.name = name
        self._items: list[T] = []
        self._length_property: Property[int] = Property(
            0, name=f"{name}.length" if name else "length"
        )
        self._item_added_listeners: list[ItemListener[T]] = []
        self._item_removed_listeners: list[ItemListener[T]] = []

    @property
    def length_property(self) -> ReadOnlyProperty[int]:
        return self._length_property

    def add(self, item: T) -> None:
        """Append an item and notify item-added listeners.

        Raises:
            DuplicateItemError: If the item is already a member.
        """
        if self.contains(item):
            raise DuplicateItemError(f"{item!r} is already in {self.name or 'collection'}")
        self._items.append(item)
        self._length_property.set(len(self._items))
        for listener in tuple(self._item_added_listeners):
            listener(item)

    def remove(self, item: T) -> None:
        """Remove an item and notify item-removed listeners.

        Raises:
            ItemNotFoundError: If the item is not a member.
        """
        index = self.index_of(item)
        if index < 0:
            raise ItemNotFoundError(f"{item!r} is not in {self.name or 'collection'}")
        del self._items[index]
        self._length_property.set(len(self._items))
        for listener in tuple(self._item_removed_listeners):
            listener(item)

    def contains(self, item: T) -> bool:
        return self.index_of(item) >= 0

    def index_of(self, item: T) -> int:
        """Return the position of ``item`` or -1 if absent."""
        for index, member in enumerate(self._items):
            if member is item:
                return index
        return -1

    def get(self, index: int) -> T:
        return self._items[index]

    def to_list(self) -> list[T]:
        return list(self._items)

    def add_item_added_listener(self, listener: ItemListener[T]) -> None:
        self._item_added_listeners.append(listener)

    def remove_item_added_listener(self, listener: ItemListener[T]) -> None:
        self._item_added_listeners.remove(listener)

    def add_item_removed_listener(self, listener: ItemListener[T]) -> None:
        self._item_removed_listeners.append(listener)

    def remove_item_removed_listener(self, listener: ItemListener[T]) -> None:
        self._item_removed_listeners.remove(listener)

    def __contains__(self, item: object) -> bool:
        return any(member is item for member in self._items)

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[T]:
        # Iterate a snapshot; callers may remove members while looping.
        return iter(tuple(self._items))

    def __repr__(self) -> str:
        return f"ObservableCollection(name={self.name!r}, length={len(self._items)})"
