"""High-level API for treewalk.

This module provides simple, functional interfaces for common tree
operations. These functions wrap the walker classes for ease of use in
simple cases.
"""

import logging
from collections.abc import Mapping
from typing import Any, Callable, Dict, Iterator, List, Optional, Tuple, Union

from .config import TraversalStrategy, WalkConfig
from .core.collection import CollectionKind, collection_kind, entries
from .core.context import TraversalContext
from .core.fields import MISSING, FieldSelector, resolve_field, strict_equals
from .core.results import FoundNode, annotate_copy
from .core.traverser import BreadthFirstWalker, DepthFirstWalker, WalkCallback

logger = logging.getLogger(__name__)


def walk_tree(
    root: Any,
    children_key: FieldSelector,
    callback: WalkCallback,
    max_depth: Optional[int] = None,
) -> None:
    """Walk a tree depth-first (pre-order), calling callback for every node.

    Args:
        root: A single node, or a list / tuple / dict / set of root nodes
        children_key: Field name or callable giving a node's children
        callback: ``callback(node, context, break_loop)``; call
            ``break_loop()`` or return ``WalkSignal.STOP`` to stop
        max_depth: Deepest level to visit (None = unlimited)

    Example:
        >>> tree = [{'id': 1, 'children': [{'id': 11}]}, {'id': 2}]
        >>> walk_tree(tree, 'children', lambda node, ctx, stop: print(node['id'], ctx.level))
        1 0
        11 1
        2 0
    """
    DepthFirstWalker(children_key, max_depth=max_depth).walk(root, callback)


def walk_tree_bfs(
    root: Any,
    children_key: FieldSelector,
    callback: WalkCallback,
    max_depth: Optional[int] = None,
) -> None:
    """Walk a tree breadth-first, calling callback for every node.

    ``context.peer_list`` is always empty in this mode.

    Args:
        root: A single node, or a list / tuple / dict / set of root nodes
        children_key: Field name or callable giving a node's children
        callback: ``callback(node, context, break_loop)``; call
            ``break_loop()`` or return ``WalkSignal.STOP`` to stop
        max_depth: Deepest level to visit (None = unlimited)
    """
    BreadthFirstWalker(children_key, max_depth=max_depth).walk(root, callback)


def iter_tree(
    root: Any,
    children_key: FieldSelector = "children",
    strategy: Union[TraversalStrategy, str] = TraversalStrategy.DEPTH_FIRST_PRE,
    max_depth: Optional[int] = None,
) -> Iterator[Tuple[Any, TraversalContext]]:
    """Lazily iterate ``(node, context)`` pairs.

    Stopping iteration early (``break`` in a for loop) is the equivalent of
    ``break_loop()``: no further node is read.

    Example:
        >>> for node, ctx in iter_tree(tree, 'children', strategy='bfs'):
        ...     print('  ' * ctx.level + str(node['id']))
    """
    config = WalkConfig(children_key=children_key, strategy=strategy, max_depth=max_depth)
    return config.create_walker().iter_nodes(root)


def find_node_by_dfs(
    container: Any,
    compare_attr: FieldSelector,
    children_key: FieldSelector,
    value: Any,
) -> Optional[FoundNode]:
    """Find the first node, in depth-first order, whose attribute equals value.

    Equality is strict: scalars compare by value, containers by identity.

    Args:
        container: Tree or forest to search
        compare_attr: Field name or callable read from each node
        children_key: Field name or callable giving a node's children
        value: Value to look for

    Returns:
        FoundNode(target, parent, ancestors), or None if nothing matches

    Example:
        >>> found = find_node_by_dfs(tree, 'id', 'children', 11)
        >>> found.parent['id'], [a.data['id'] for a in found.ancestors]
        (1, [1])
    """
    return _find_first(DepthFirstWalker(children_key), container, compare_attr, value)


def find_node_by_bfs(
    container: Any,
    compare_attr: FieldSelector,
    children_key: FieldSelector,
    value: Any,
) -> Optional[FoundNode]:
    """Find the shallowest node whose attribute equals value.

    Same contract as find_node_by_dfs, but ties are broken by breadth-first
    order, so a match nearer the roots wins over a deeper one.
    """
    return _find_first(BreadthFirstWalker(children_key), container, compare_attr, value)


def find_nodes(
    container: Any,
    predicate: Callable[[Any], bool],
    children_key: FieldSelector = "children",
    strategy: Union[TraversalStrategy, str] = TraversalStrategy.DEPTH_FIRST_PRE,
    max_depth: Optional[int] = None,
) -> List[FoundNode]:
    """Find every node that matches a predicate.

    Args:
        container: Tree or forest to search
        predicate: Function that returns True for matching nodes
        children_key: Field name or callable giving a node's children
        strategy: Traversal order of the results
        max_depth: Deepest level to search (None = unlimited)

    Returns:
        List of FoundNode in traversal order
    """
    matches = []
    for node, context in iter_tree(container, children_key, strategy, max_depth):
        if predicate(node):
            matches.append(FoundNode(node, context.parent, context.ancestors))
    return matches


def flatten_tree_array(
    container: Any,
    children_key: FieldSelector,
    id_attr: FieldSelector,
    include_parent: bool = True,
    strategy: Union[TraversalStrategy, str] = TraversalStrategy.DEPTH_FIRST_PRE,
    level_key: str = "level",
    parent_id_key: str = "parent_id",
) -> List[Any]:
    """Flatten a nested tree into a list annotated with level and parent id.

    Every emitted record is a new object: mapping nodes become new dicts,
    other nodes are shallow copies. Nodes that cannot take new attributes
    (namedtuples, slotted objects, scalars) are emitted as dicts of their
    fields, with scalars stored under ``"value"``. The input nodes are
    never modified.

    Args:
        container: Tree or forest to flatten
        children_key: Field name or callable giving a node's children
        id_attr: Field name or callable giving a node's identifier
        include_parent: If False, only leaf nodes are emitted
        strategy: Traversal order of the output (depth-first by default)
        level_key: Name of the depth annotation
        parent_id_key: Name of the parent identifier annotation

    Returns:
        List of annotated copies in traversal order

    Example:
        >>> flatten_tree_array(tree, 'children', 'id', include_parent=False)
        [{'id': 11, 'level': 1, 'parent_id': 1}, {'id': 2, 'level': 0, 'parent_id': None}]
    """
    config = WalkConfig(
        children_key=children_key,
        strategy=strategy,
        level_key=level_key,
        parent_id_key=parent_id_key,
    )
    walker = config.create_walker()
    get_id = resolve_field(id_attr)

    result = []
    for node, context in walker.iter_nodes(container):
        if not (context.leaf or include_parent):
            continue
        parent_id = None
        if context.parent is not None:
            parent_id = get_id(context.parent)
            if parent_id is MISSING:
                parent_id = None
        result.append(annotate_copy(node, {
            level_key: context.level,
            parent_id_key: parent_id,
        }))
    return result


def map_tree(node: Any, children_key: str, transform: Callable[[Any], Any]) -> Any:
    """Apply transform to a node and, recursively, to all of its descendants.

    ``transform`` receives the original node and returns its replacement.
    When the replacement is a mapping holding ``children_key``, that field
    is rebuilt by mapping every child, keeping the container type (list,
    tuple, set, dict). Results are new objects; the input is never modified.

    Args:
        node: Root node to transform
        children_key: Name of the children field
        transform: Function ``node -> new node``

    Returns:
        The transformed tree
    """
    result = transform(node)
    if not isinstance(result, Mapping):
        return result

    result = dict(result)
    if children_key in result:
        result[children_key] = _map_children(result[children_key], children_key, transform)
    return result


def _map_children(children: Any, children_key: str, transform: Callable[[Any], Any]) -> Any:
    """Map every element of a children container, keeping its type."""
    kind = collection_kind(children)
    if kind is CollectionKind.MAPPING:
        return {key: map_tree(child, children_key, transform) for key, child in entries(children)}
    if kind is CollectionKind.SET:
        return {map_tree(child, children_key, transform) for _, child in entries(children)}
    if kind is CollectionKind.SEQUENCE and isinstance(children, tuple):
        return tuple(map_tree(child, children_key, transform) for _, child in entries(children))
    if kind in (CollectionKind.SEQUENCE, CollectionKind.ITERABLE):
        return [map_tree(child, children_key, transform) for _, child in entries(children)]
    return children


def tree_stats(
    root: Any,
    children_key: FieldSelector = "children",
    max_depth: Optional[int] = None,
) -> Dict[str, Any]:
    """Get statistics about a tree.

    Args:
        root: Tree or forest to measure
        children_key: Field name or callable giving a node's children
        max_depth: Deepest level to count (None = unlimited)

    Returns:
        Dictionary with tree statistics

    Example:
        >>> stats = tree_stats(tree)
        >>> print(f"Total nodes: {stats['total_nodes']}")
        >>> print(f"Leaf nodes: {stats['leaf_nodes']}")
    """
    stats = {
        'total_nodes': 0,
        'leaf_nodes': 0,
        'max_depth': 0,
        'depths': {}
    }

    for _, context in iter_tree(root, children_key, max_depth=max_depth):
        stats['total_nodes'] += 1

        if context.leaf:
            stats['leaf_nodes'] += 1

        stats['max_depth'] = max(stats['max_depth'], context.level)
        stats['depths'][context.level] = stats['depths'].get(context.level, 0) + 1

    stats['internal_nodes'] = stats['total_nodes'] - stats['leaf_nodes']
    return stats


# Helper functions

def _find_first(walker, container: Any, compare_attr: FieldSelector, value: Any) -> Optional[FoundNode]:
    """Run a walker until the first node whose attribute strictly equals value."""
    get_attr = resolve_field(compare_attr)
    result: List[FoundNode] = []

    def _visit(node, context, break_loop):
        if strict_equals(get_attr(node), value):
            result.append(FoundNode(node, context.parent, context.ancestors))
            break_loop()

    walker.walk(container, _visit)
    if not result:
        logger.debug("No node with %r == %r", compare_attr, value)
        return None
    return result[0]
