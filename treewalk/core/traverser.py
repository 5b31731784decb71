"""Tree traversal strategies for treewalk.

Walkers implement the algorithms for walking through trees. They work with
any container shape the collection adapter understands, so the same walker
serves lists of dicts, dicts of objects, sets of nodes and so on.

Each walker offers two entry points:

- ``iter_nodes(root)`` lazily yields ``(node, TraversalContext)`` pairs.
- ``walk(root, callback)`` drives a ``callback(node, context, break_loop)``
  and stops when the callback calls ``break_loop()`` or returns
  ``WalkSignal.STOP``.

All traversal state (stack, queue, parent map, stop flag) is local to a
single call, so walker instances can be shared freely between threads.
"""

import logging
from abc import ABC, abstractmethod
from collections import deque
from typing import Any, Callable, Deque, Dict, Iterator, List, Optional, Tuple, Union

from ..config import TraversalStrategy, WalkSignal, parse_strategy
from ..errors import InvalidConfigError
from .collection import as_root_container, entries, is_non_empty_collection, stable_container
from .context import BreakLoop, ParentInfo, TraversalContext
from .fields import FieldSelector, resolve_field

logger = logging.getLogger(__name__)

WalkCallback = Callable[[Any, TraversalContext, BreakLoop], Any]


class TreeWalker(ABC):
    """Abstract base class for tree walking strategies.

    Walkers are independent of the node type; they only need to know where
    a node keeps its children.
    """

    strategy: TraversalStrategy

    def __init__(self, children_key: FieldSelector = "children", max_depth: Optional[int] = None):
        """Initialize walker.

        Args:
            children_key: Field name or callable giving a node's children
            max_depth: Deepest level to visit (None = unlimited)

        Raises:
            InvalidSelectorError: If children_key is not a name or callable
            InvalidConfigError: If max_depth is negative
        """
        if max_depth is not None and max_depth < 0:
            raise InvalidConfigError("max_depth cannot be negative")
        self.children_key = children_key
        self.max_depth = max_depth
        self._get_children = resolve_field(children_key)

    def __repr__(self) -> str:
        return (f"{self.__class__.__name__}(children_key={self.children_key!r}, "
                f"max_depth={self.max_depth!r})")

    @abstractmethod
    def iter_nodes(self, root: Any) -> Iterator[Tuple[Any, TraversalContext]]:
        """Traverse the tree starting from root.

        Args:
            root: A single node, or any supported container of root nodes

        Yields:
            Tuples of (node, context) in traversal order
        """
        pass

    def walk(self, root: Any, callback: WalkCallback) -> int:
        """Visit every node, calling ``callback(node, context, break_loop)``.

        Exceptions raised by the callback abort the walk and propagate.

        Args:
            root: A single node, or any supported container of root nodes
            callback: Visitor function

        Returns:
            Number of nodes visited
        """
        break_loop = BreakLoop()
        visited = 0
        nodes = self.iter_nodes(root)
        try:
            for node, context in nodes:
                visited += 1
                if callback(node, context, break_loop) is WalkSignal.STOP:
                    break_loop()
                if break_loop:
                    logger.debug("%s stopped early after %d nodes", self.__class__.__name__, visited)
                    break
        finally:
            nodes.close()
        logger.debug("%s visited %d nodes", self.__class__.__name__, visited)
        return visited

    def _read_children(self, node: Any) -> Tuple[Any, bool]:
        """Return a node's children container and whether it is a leaf."""
        children = stable_container(self._get_children(node))
        return children, not is_non_empty_collection(children)

    def _should_explore(self, level: int) -> bool:
        """Check if children of a node at this level should be visited."""
        if self.max_depth is None:
            return True
        return level < self.max_depth


class DepthFirstWalker(TreeWalker):
    """Depth-first pre-order traversal.

    Visits a node, then its whole first subtree, before the next sibling.
    An explicit stack of per-container iterators replaces recursion, so the
    visit order is that of the recursive algorithm without its depth limit.
    """

    strategy = TraversalStrategy.DEPTH_FIRST_PRE

    def iter_nodes(self, root: Any) -> Iterator[Tuple[Any, TraversalContext]]:
        roots = as_root_container(root)
        if not is_non_empty_collection(roots):
            return

        # Each frame: (entries iterator, container, level, ancestors)
        stack: List[Tuple[Iterator[Tuple[Any, Any]], Any, int, Tuple[ParentInfo, ...]]] = [
            (entries(roots), roots, 0, ())
        ]

        while stack:
            pairs, peers, level, ancestors = stack[-1]
            pair = next(pairs, None)
            if pair is None:
                stack.pop()
                continue

            index, node = pair
            children, leaf = self._read_children(node)

            yield node, TraversalContext(
                level=level,
                index=index,
                leaf=leaf,
                peer_list=peers,
                ancestors=ancestors,
            )

            if not leaf and self._should_explore(level):
                stack.append((
                    entries(children),
                    children,
                    level + 1,
                    ancestors + (ParentInfo(index, node),),
                ))


class BreadthFirstWalker(TreeWalker):
    """Breadth-first (level-order) traversal.

    Visits all nodes at depth N before any node at depth N+1.

    Instead of carrying a full ancestor chain per queued node, every
    enqueued node gets a visit id and the parent map records only the
    immediate parent's visit id. Chains are rebuilt on dequeue. Keying by
    visit id rather than node identity keeps shared subtrees unambiguous.

    ``peer_list`` is always an empty tuple here: the queue interleaves
    unrelated branches, so there is no meaningful sibling list.
    """

    strategy = TraversalStrategy.BREADTH_FIRST

    def iter_nodes(self, root: Any) -> Iterator[Tuple[Any, TraversalContext]]:
        roots = as_root_container(root)
        if not is_non_empty_collection(roots):
            return

        # visit id -> (parent visit id or None, ParentInfo of this visit)
        parents: Dict[int, Tuple[Optional[int], ParentInfo]] = {}
        # Queue stores (visit id, parent visit id, node, level, index)
        queue: Deque[Tuple[int, Optional[int], Any, int, Any]] = deque()
        next_id = 0

        for index, node in entries(roots):
            queue.append((next_id, None, node, 0, index))
            next_id += 1

        while queue:
            visit_id, parent_id, node, level, index = queue.popleft()
            parents[visit_id] = (parent_id, ParentInfo(index, node))
            children, leaf = self._read_children(node)

            yield node, TraversalContext(
                level=level,
                index=index,
                leaf=leaf,
                peer_list=(),
                ancestors=self._ancestors(parents, parent_id),
            )

            if not leaf and self._should_explore(level):
                for child_index, child in entries(children):
                    queue.append((next_id, visit_id, child, level + 1, child_index))
                    next_id += 1

    @staticmethod
    def _ancestors(parents: Dict[int, Tuple[Optional[int], ParentInfo]],
                   parent_id: Optional[int]) -> Tuple[ParentInfo, ...]:
        """Rebuild the root-to-parent chain by walking the parent map."""
        chain = []
        while parent_id is not None:
            parent_id, info = parents[parent_id]
            chain.append(info)
        chain.reverse()
        return tuple(chain)


def create_walker(strategy: Union[TraversalStrategy, str],
                  children_key: FieldSelector = "children",
                  max_depth: Optional[int] = None) -> TreeWalker:
    """Create a walker instance by strategy.

    Args:
        strategy: TraversalStrategy or name (dfs, dfs_pre, bfs, level, ...)
        children_key: Field name or callable giving a node's children
        max_depth: Deepest level to visit (None = unlimited)

    Returns:
        TreeWalker instance

    Raises:
        UnknownStrategyError: If strategy name is not recognized
    """
    walkers = {
        TraversalStrategy.DEPTH_FIRST_PRE: DepthFirstWalker,
        TraversalStrategy.BREADTH_FIRST: BreadthFirstWalker,
    }
    return walkers[parse_strategy(strategy)](children_key, max_depth=max_depth)
