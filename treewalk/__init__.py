"""treewalk - Generic Tree Walking Library.

treewalk walks nested data of any container shape - lists, tuples, dicts,
sets, or any mix of them - with a single pair of traversal engines:

━━━━━━━━━━━━━━━━━━━━━━━━━━
Depth-first (pre-order):
    from treewalk import walk_tree

Breadth-first (level order):
    from treewalk import walk_tree_bfs
━━━━━━━━━━━━━━━━━━━━━━━━━━

Search and flattening are built on top of both:

    find_node_by_dfs(tree, "id", "children", 12)
    flatten_tree_array(tree, "children", "id", include_parent=False)

The walkers only read the input; nothing is ever written back onto the
caller's nodes.
"""

import logging

__version__ = "0.1.0"

from .errors import (
    TreeWalkError,
    InvalidConfigError,
    UnknownStrategyError,
    InvalidSelectorError,
)
from .config import TraversalStrategy, WalkSignal, WalkConfig, parse_strategy
from .core.collection import entries, for_each, is_non_empty_collection
from .core.context import BreakLoop, ParentInfo, TraversalContext
from .core.fields import MISSING
from .core.results import FoundNode
from .core.traverser import (
    TreeWalker,
    DepthFirstWalker,
    BreadthFirstWalker,
    create_walker,
)
from .api import (
    walk_tree,
    walk_tree_bfs,
    iter_tree,
    find_node_by_dfs,
    find_node_by_bfs,
    find_nodes,
    flatten_tree_array,
    map_tree,
    tree_stats,
)

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "__version__",
    # Errors
    "TreeWalkError",
    "InvalidConfigError",
    "UnknownStrategyError",
    "InvalidSelectorError",
    # Config
    "TraversalStrategy",
    "WalkSignal",
    "WalkConfig",
    "parse_strategy",
    # Core
    "entries",
    "for_each",
    "is_non_empty_collection",
    "BreakLoop",
    "ParentInfo",
    "TraversalContext",
    "MISSING",
    "FoundNode",
    "TreeWalker",
    "DepthFirstWalker",
    "BreadthFirstWalker",
    "create_walker",
    # API
    "walk_tree",
    "walk_tree_bfs",
    "iter_tree",
    "find_node_by_dfs",
    "find_node_by_bfs",
    "find_nodes",
    "flatten_tree_array",
    "map_tree",
    "tree_stats",
]
