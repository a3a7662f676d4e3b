# src/atomlayout/reactive/__init__.py
"""Reactive primitives: observable properties and collections."""

from atomlayout.reactive.collection import ObservableCollection
from atomlayout.reactive.exceptions import (
    DuplicateItemError,
    ItemNotFoundError,
    ReadOnlyPropertyError,
)
from atomlayout.reactive.property import DerivedProperty, Property, ReadOnlyProperty

__all__ = [
    "DerivedProperty",
    "DuplicateItemError",
    "ItemNotFoundError",
    "ObservableCollection",
    "Property",
    "ReadOnlyProperty",
    "ReadOnlyPropertyError",
]
