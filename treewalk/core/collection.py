"""Collection adapter for treewalk.

The collection adapter is what lets one traversal algorithm serve every
container shape. It normalizes sequences, mappings, sets and plain iterables
into a uniform stream of ``(index, value)`` pairs:

- Sequence / iterable: ``(position, value)``
- Mapping: ``(key, value)`` in insertion order
- Set: ``(value, value)``
- None or scalar: nothing

Strings and bytes are scalars here, never containers of characters.
"""

from collections.abc import Iterable, Iterator, Mapping, Sequence, Set, Sized
from enum import Enum
from itertools import islice
from typing import Any, Callable, Optional, Tuple


class CollectionKind(Enum):
    """Shape of a value as seen by the collection adapter."""
    SEQUENCE = "sequence"   # Ordered, indexed by position
    MAPPING = "mapping"     # Indexed by key
    SET = "set"             # Indexed by the value itself
    ITERABLE = "iterable"   # Ordered, positional, length unknown
    NONE = "none"           # None, yields nothing
    SCALAR = "scalar"       # Not a container


_SCALAR_ITERABLES = (str, bytes, bytearray, memoryview)


def collection_kind(value: Any) -> CollectionKind:
    """Classify a value for the collection adapter.

    Args:
        value: Any value

    Returns:
        The CollectionKind for value
    """
    if value is None:
        return CollectionKind.NONE
    if isinstance(value, _SCALAR_ITERABLES):
        return CollectionKind.SCALAR
    if isinstance(value, Mapping):
        return CollectionKind.MAPPING
    if isinstance(value, Set):
        return CollectionKind.SET
    if isinstance(value, Sequence):
        return CollectionKind.SEQUENCE
    if isinstance(value, Iterable):
        return CollectionKind.ITERABLE
    return CollectionKind.SCALAR


def is_collection(value: Any) -> bool:
    """Check if value is a container the adapter can enumerate."""
    return collection_kind(value) not in (CollectionKind.NONE, CollectionKind.SCALAR)


def entries(container: Any) -> Iterator[Tuple[Any, Any]]:
    """Iterate any supported container as ``(index, value)`` pairs.

    Args:
        container: Sequence, mapping, set, iterable, or None

    Yields:
        ``(index, value)`` tuples in the container's natural order
    """
    kind = collection_kind(container)
    if kind is CollectionKind.MAPPING:
        yield from container.items()
    elif kind is CollectionKind.SET:
        for value in container:
            yield value, value
    elif kind in (CollectionKind.SEQUENCE, CollectionKind.ITERABLE):
        yield from enumerate(container)


def is_non_empty_collection(value: Any) -> bool:
    """Check if ``entries(value)`` would yield at least one pair.

    Sized containers are answered with ``len()``. Other iterables are probed
    for a single element, which consumes it for one-shot iterators.
    """
    kind = collection_kind(value)
    if kind in (CollectionKind.NONE, CollectionKind.SCALAR):
        return False
    if isinstance(value, Sized):
        return len(value) > 0
    return any(True for _ in islice(iter(value), 1))


def stable_container(value: Any) -> Any:
    """Return a container that can be enumerated more than once.

    One-shot iterators (generators, ``map`` objects) are drained into a
    tuple; everything else is returned unchanged.
    """
    if isinstance(value, Iterator) and not isinstance(value, _SCALAR_ITERABLES):
        return tuple(value)
    return value


def as_root_container(root: Any) -> Any:
    """Normalize a traversal root into a container of root nodes.

    Containers pass through unchanged so ``peer_list`` keeps the caller's
    type. A mapping is always a container of roots; a single mapping-shaped
    node must be wrapped in a list. Any other value is a single node.
    """
    kind = collection_kind(root)
    if kind is CollectionKind.NONE:
        return None
    if kind is CollectionKind.SCALAR:
        return (root,)
    return stable_container(root)


def for_each(container: Any, iteratee: Callable[[Any, Any, Any], Optional[bool]]) -> Any:
    """Call ``iteratee(value, index, container)`` for every pair.

    Iteration stops early when the iteratee returns ``False`` (exactly
    False, not merely falsy).

    Args:
        container: Any supported container, or None
        iteratee: Callback receiving value, index and the container

    Returns:
        The container itself
    """
    if container is None:
        return container
    for index, value in entries(container):
        if iteratee(value, index, container) is False:
            break
    return container
