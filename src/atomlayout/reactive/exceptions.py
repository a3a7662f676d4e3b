# src/atomlayout/reactive/exceptions.py
"""Exceptions for the reactive layer."""


class ReadOnlyPropertyError(AttributeError):
    """Raised when set() is called on a property that can only be derived."""


class ItemNotFoundError(LookupError):
    """Raised when removing an item that is not in a collection."""


class DuplicateItemError(ValueError):
    """Raised when adding an item that is already in a collection."""
