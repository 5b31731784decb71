"""Per-visit context objects passed to traversal callbacks.

Context objects are built fresh for every visit and never retained by the
walkers, so a callback may keep or modify what it receives without
affecting the rest of the traversal.
"""

from dataclasses import dataclass
from typing import Any, NamedTuple, Optional, Tuple


class ParentInfo(NamedTuple):
    """A node's position among its siblings plus the node itself.

    ``index`` is the position for sequences, the key for mappings and the
    value itself for sets.
    """
    index: Any
    data: Any


@dataclass(frozen=True)
class TraversalContext:
    """Everything a callback knows about the node being visited.

    Attributes:
        level: Depth of the node, 0 for roots
        index: Position of the node in its sibling container
        leaf: True if the node's children container is absent or empty
        peer_list: Container the node was enumerated from (always empty in
            breadth-first mode)
        ancestors: Root-to-parent chain of ParentInfo
    """
    level: int
    index: Any
    leaf: bool
    peer_list: Any
    ancestors: Tuple[ParentInfo, ...] = ()

    @property
    def parent(self) -> Optional[Any]:
        """The immediate parent node, or None for roots."""
        return self.ancestors[-1].data if self.ancestors else None

    @property
    def path(self) -> Tuple[Any, ...]:
        """Indices from the root down to this node."""
        return tuple(info.index for info in self.ancestors) + (self.index,)


class BreakLoop:
    """Cooperative stop signal for a single traversal call.

    Instances are callable so they can be handed to callbacks as
    ``break_loop``. Each walk creates its own instance.
    """

    __slots__ = ("stopped",)

    def __init__(self):
        self.stopped = False

    def __call__(self) -> None:
        self.stopped = True

    def __bool__(self) -> bool:
        return self.stopped
