"""Metadata attachment for scorer functions and other callables.

Metadata is kept in a weak-keyed registry so attaching it never keeps a
function alive.
"""

import weakref
from collections.abc import Callable
from typing import Any, TypeVar

T = TypeVar("T")

_metadata_store: "weakref.WeakKeyDictionary[Any, dict[str, Any]]" = (
    weakref.WeakKeyDictionary()
)


def define_metadata(key: str, value: Any, target: Any) -> None:
    """Attach a metadata value to a target under the given key."""
    _metadata_store.setdefault(target, {})[key] = value


def get_metadata(key: str, target: Any, default: Any = None) -> Any:
    """Return the metadata value for key, or default when it was never set."""
    return _metadata_store.get(target, {}).get(key, default)


def has_metadata(key: str, target: Any) -> bool:
    return key in _metadata_store.get(target, {})


def get_all_metadata(target: Any) -> dict[str, Any]:
    """Return a copy of every metadata entry attached to target."""
    return dict(_metadata_store.get(target, {}))


def metadata(key: str, value: Any) -> Callable[[T], T]:
    """Decorator form of define_metadata for functions and classes.

    Args:
        key: Metadata key
        value: Metadata value

    Returns:
        Decorator returning the target unchanged

    """

    def decorator(target: T) -> T:
        define_metadata(key, value, target)
        return target

    return decorator
