"""Core building blocks for treewalk.

This module contains the container adapter, field selectors, per-visit
context objects and result records that the walkers are built from.
Walkers themselves live in ``treewalk.core.traverser``.
"""

from .collection import (
    CollectionKind,
    collection_kind,
    entries,
    for_each,
    is_collection,
    is_non_empty_collection,
)
from .context import BreakLoop, ParentInfo, TraversalContext
from .fields import MISSING, get_field, resolve_field, strict_equals
from .results import SCALAR_VALUE_KEY, FoundNode, node_record

__all__ = [
    "CollectionKind",
    "collection_kind",
    "entries",
    "for_each",
    "is_collection",
    "is_non_empty_collection",
    "BreakLoop",
    "ParentInfo",
    "TraversalContext",
    "MISSING",
    "get_field",
    "resolve_field",
    "strict_equals",
    "FoundNode",
    "SCALAR_VALUE_KEY",
    "node_record",
]
