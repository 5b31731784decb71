"""Result records produced by the derived tree operations."""

import copy
import dataclasses
import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

from .context import ParentInfo

logger = logging.getLogger(__name__)

# Record key holding a node that has no named fields of its own
SCALAR_VALUE_KEY = "value"


@dataclass(frozen=True)
class FoundNode:
    """A node located by a search, with where it was found.

    Attributes:
        target: The matching node itself (not a copy)
        parent: Immediate parent node, None for roots
        ancestors: Root-to-parent chain of ParentInfo
    """
    target: Any
    parent: Optional[Any] = None
    ancestors: Tuple[ParentInfo, ...] = field(default_factory=tuple)

    @property
    def level(self) -> int:
        """Depth of the target, 0 for roots."""
        return len(self.ancestors)


def annotate_copy(node: Any, annotations: dict) -> Any:
    """Return a copy of node carrying extra fields.

    Mapping nodes become a new dict. Other nodes are shallow-copied with
    the annotations set as attributes on the copy. Nodes whose copy cannot
    take new attributes (namedtuples, slotted or frozen classes, scalars)
    become a new dict record instead, see ``node_record``. The original
    node is never touched.

    Args:
        node: Node to copy
        annotations: Field name to value mapping to add

    Returns:
        New annotated object
    """
    if isinstance(node, Mapping):
        record = dict(node)
        record.update(annotations)
        return record

    try:
        annotated = copy.copy(node)
        for name, value in annotations.items():
            setattr(annotated, name, value)
        return annotated
    except (AttributeError, TypeError):
        logger.debug("Cannot annotate %s in place, emitting a dict record", type(node).__name__)

    record = node_record(node)
    record.update(annotations)
    return record


def node_record(node: Any) -> Dict[str, Any]:
    """Read a node's own fields into a new dict.

    Namedtuples use ``_asdict()``, dataclasses their declared fields and
    slotted objects their filled slots. Anything without named fields is
    stored under ``SCALAR_VALUE_KEY``.
    """
    if isinstance(node, tuple) and hasattr(node, "_asdict"):
        return dict(node._asdict())
    if dataclasses.is_dataclass(node) and not isinstance(node, type):
        return {f.name: getattr(node, f.name) for f in dataclasses.fields(node)}

    record = {}
    for name in _slot_names(type(node)):
        if hasattr(node, name):
            record[name] = getattr(node, name)
    record.update(getattr(node, "__dict__", {}))
    if not record:
        record[SCALAR_VALUE_KEY] = node
    return record


def _slot_names(cls: type) -> List[str]:
    names = []
    for klass in reversed(cls.__mro__):
        slots = klass.__dict__.get("__slots__", ())
        if isinstance(slots, str):
            slots = (slots,)
        for name in slots:
            if name not in ("__dict__", "__weakref__") and name not in names:
                names.append(name)
    return names
