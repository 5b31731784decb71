"""Tests for depth-first (pre-order) traversal.

Covers visit order, per-visit context, early termination and the different
root/container shapes the walker accepts.
"""

import sys
from pathlib import Path
import copy
import threading
from collections import OrderedDict
from types import SimpleNamespace

import pytest

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from treewalk import (
    DepthFirstWalker,
    InvalidConfigError,
    InvalidSelectorError,
    ParentInfo,
    WalkSignal,
    walk_tree,
)


def create_sample_tree():
    """Create the shared sample forest.

    Structure:
    1
    ├── 1-1
    │   ├── 1-1-1
    │   └── 1-1-2
    └── 1-2
    2
    └── 2-1
    3
    """
    return [
        {
            "id": "1",
            "name": "Root 1",
            "children": [
                {
                    "id": "1-1",
                    "name": "Child 1-1",
                    "children": [
                        {"id": "1-1-1", "name": "Leaf 1-1-1"},
                        {"id": "1-1-2", "name": "Leaf 1-1-2"},
                    ],
                },
                {"id": "1-2", "name": "Child 1-2"},
            ],
        },
        {"id": "2", "name": "Root 2", "children": [{"id": "2-1", "name": "Child 2-1"}]},
        {"id": "3", "name": "Root 3 (leaf)"},
    ]


class Node:
    """Hashable attribute-style node."""

    def __init__(self, id, children=None):
        self.id = id
        self.children = children


def collect(root, children_key="children", **kwargs):
    """Walk and record (id, context) for every visit."""
    visits = []
    walk_tree(root, children_key, lambda node, ctx, stop: visits.append((node["id"], ctx)), **kwargs)
    return visits


class TestDepthFirstOrder:
    """Visit order and levels."""

    def test_traverses_in_dfs_order(self):
        visits = collect(create_sample_tree())
        assert [node_id for node_id, _ in visits] == ["1", "1-1", "1-1-1", "1-1-2", "1-2", "2", "2-1", "3"]
        assert [ctx.level for _, ctx in visits] == [0, 1, 2, 2, 1, 0, 1, 0]

    def test_small_example(self):
        tree = [
            {"id": 1, "children": [{"id": 11, "children": []}, {"id": 12, "children": []}]},
            {"id": 2, "children": []},
        ]
        assert [node_id for node_id, _ in collect(tree)] == [1, 11, 12, 2]

    def test_subtree_completes_before_sibling(self):
        order = [node_id for node_id, _ in collect(create_sample_tree())]
        # Every descendant of "1" precedes "2"
        assert max(order.index(n) for n in ("1-1", "1-1-1", "1-1-2", "1-2")) < order.index("2")

    def test_visit_count_matches_node_count(self):
        assert len(collect(create_sample_tree())) == 8

    def test_deep_tree_does_not_hit_recursion_limit(self):
        root = {"id": 0, "children": []}
        current = root
        for depth in range(1, 5000):
            child = {"id": depth, "children": []}
            current["children"].append(child)
            current = child

        visits = collect([root])
        assert len(visits) == 5000
        assert visits[-1][1].level == 4999


class TestDepthFirstContext:
    """TraversalContext contents for each visit."""

    def test_root_context(self):
        visits = dict(collect(create_sample_tree()))
        root = visits["1"]
        assert root.level == 0
        assert root.index == 0
        assert root.leaf is False
        assert root.parent is None
        assert root.ancestors == ()

    def test_leaf_context(self):
        tree = create_sample_tree()
        visits = dict(collect(tree))
        leaf = visits["1-1-1"]
        assert leaf.level == 2
        assert leaf.leaf is True
        assert leaf.parent["id"] == "1-1"
        assert [info.data["id"] for info in leaf.ancestors] == ["1", "1-1"]
        assert [info.index for info in leaf.ancestors] == [0, 0]
        assert leaf.path == (0, 0, 0)

    def test_ancestors_length_equals_level(self):
        for _, ctx in collect(create_sample_tree()):
            assert len(ctx.ancestors) == ctx.level

    def test_ancestor_entries_are_the_original_nodes(self):
        tree = create_sample_tree()
        visits = dict(collect(tree))
        assert visits["1-1-2"].ancestors[0] == ParentInfo(0, tree[0])
        assert visits["1-1-2"].ancestors[0].data is tree[0]

    def test_peer_list_is_the_sibling_container(self):
        tree = create_sample_tree()
        visits = dict(collect(tree))
        assert visits["2"].peer_list is tree
        assert visits["1-2"].peer_list is tree[0]["children"]

    def test_leaf_flag_follows_children_container(self):
        tree = [
            {"id": "none"},
            {"id": "empty", "children": []},
            {"id": "scalar", "children": "not a container"},
            {"id": "null", "children": None},
            {"id": "full", "children": [{"id": "kid"}]},
        ]
        leaves = {node_id: ctx.leaf for node_id, ctx in collect(tree)}
        assert leaves == {
            "none": True,
            "empty": True,
            "scalar": True,
            "null": True,
            "full": False,
            "kid": True,
        }

    def test_ancestors_are_immutable_snapshots(self):
        seen = {}

        def visit(node, ctx, stop):
            assert isinstance(ctx.ancestors, tuple)
            seen[node["id"]] = ctx.ancestors

        walk_tree(create_sample_tree(), "children", visit)
        assert [info.data["id"] for info in seen["1-1-1"]] == ["1", "1-1"]
        assert [info.data["id"] for info in seen["2-1"]] == ["2"]


class TestDepthFirstBreak:
    """Cooperative early termination."""

    def test_break_loop_stops_everything(self):
        visited = []

        def visit(node, ctx, break_loop):
            visited.append(node["id"])
            if node["id"] == "1-1-1":
                break_loop()

        walk_tree(create_sample_tree(), "children", visit)
        assert visited == ["1", "1-1", "1-1-1"]

    def test_break_on_a_root_skips_its_children(self):
        visited = []

        def visit(node, ctx, break_loop):
            visited.append(node["id"])
            if node["id"] == "2":
                break_loop()

        walk_tree(create_sample_tree(), "children", visit)
        assert visited == ["1", "1-1", "1-1-1", "1-1-2", "1-2", "2"]

    def test_returning_stop_signal(self):
        visited = []

        def visit(node, ctx, break_loop):
            visited.append(node["id"])
            if node["id"] == "1-2":
                return WalkSignal.STOP
            return WalkSignal.CONTINUE

        walk_tree(create_sample_tree(), "children", visit)
        assert visited == ["1", "1-1", "1-1-1", "1-1-2", "1-2"]

    def test_other_return_values_continue(self):
        visited = []

        def visit(node, ctx, break_loop):
            visited.append(node["id"])
            return False

        walk_tree(create_sample_tree(), "children", visit)
        assert len(visited) == 8

    def test_walker_reports_visit_count(self):
        walker = DepthFirstWalker("children")
        count = walker.walk(create_sample_tree(), lambda node, ctx, stop: stop() if node["id"] == "1-1" else None)
        assert count == 2


class TestDepthFirstInputs:
    """Root shapes, container kinds and degenerate input."""

    def test_none_root_is_a_no_op(self):
        calls = []
        walk_tree(None, "children", lambda *args: calls.append(args))
        assert calls == []

    @pytest.mark.parametrize("empty", [[], (), {}, set()])
    def test_empty_containers(self, empty):
        calls = []
        walk_tree(empty, "children", lambda *args: calls.append(args))
        assert calls == []

    def test_mapping_of_roots(self):
        roots = {
            "first": {"id": "first", "children": []},
            "second": {"id": "second", "children": []},
        }
        visits = collect(roots)
        assert [node_id for node_id, _ in visits] == ["first", "second"]
        assert [ctx.index for _, ctx in visits] == ["first", "second"]
        assert visits[0][1].peer_list is roots

    def test_mapping_children(self):
        tree = [{"id": "r", "children": OrderedDict([("x", {"id": "x"}), ("y", {"id": "y"})])}]
        visits = collect(tree)
        assert [node_id for node_id, _ in visits] == ["r", "x", "y"]
        assert visits[1][1].index == "x"

    def test_set_children_index_is_the_value(self):
        leaf_a = Node("a")
        leaf_b = Node("b")
        root = Node("root", {leaf_a, leaf_b})
        seen = []
        walk_tree(root, "children", lambda node, ctx, stop: seen.append((node, ctx)))
        assert seen[0][0] is root
        assert {node.id for node, _ in seen[1:]} == {"a", "b"}
        for node, ctx in seen[1:]:
            assert ctx.index is node
            assert ctx.level == 1

    def test_single_object_root(self):
        root = SimpleNamespace(id="solo", children=[SimpleNamespace(id="kid", children=[])])
        ids = []
        walk_tree(root, "children", lambda node, ctx, stop: ids.append((node.id, ctx.level, ctx.index)))
        assert ids == [("solo", 0, 0), ("kid", 1, 0)]

    def test_generator_children(self):
        root = SimpleNamespace(id="r", children=(SimpleNamespace(id=n, children=()) for n in "ab"))
        ids = []
        walk_tree(root, "children", lambda node, ctx, stop: ids.append((node.id, ctx.leaf)))
        assert ids == [("r", False), ("a", True), ("b", True)]

    def test_callable_children_selector(self):
        tree = [{"id": 1, "kids": [{"id": 2}]}]
        visits = collect(tree, children_key=lambda node: node.get("kids"))
        assert [node_id for node_id, _ in visits] == [1, 2]

    def test_max_depth_limits_visits(self):
        visits = collect(create_sample_tree(), max_depth=1)
        assert [node_id for node_id, _ in visits] == ["1", "1-1", "1-2", "2", "2-1", "3"]
        # leaf still reflects the children container
        assert dict(visits)["1-1"].leaf is False

    def test_negative_max_depth_rejected(self):
        with pytest.raises(InvalidConfigError):
            DepthFirstWalker("children", max_depth=-1)

    def test_invalid_selector_rejected_before_visiting(self):
        calls = []
        with pytest.raises(InvalidSelectorError):
            walk_tree(create_sample_tree(), 3.14, lambda *args: calls.append(args))
        assert calls == []


class TestDepthFirstErrorsAndSafety:
    """Failure propagation and read-only guarantees."""

    def test_callback_exception_propagates_and_aborts(self):
        visited = []

        def visit(node, ctx, stop):
            visited.append(node["id"])
            if node["id"] == "1-1":
                raise KeyError("boom")

        with pytest.raises(KeyError):
            walk_tree(create_sample_tree(), "children", visit)
        assert visited == ["1", "1-1"]

    def test_input_is_not_mutated(self):
        tree = create_sample_tree()
        snapshot = copy.deepcopy(tree)
        walk_tree(tree, "children", lambda *args: None)
        assert tree == snapshot

    def test_concurrent_walks_are_independent(self):
        tree = create_sample_tree()
        walker = DepthFirstWalker("children")
        results = {}

        def run(name, stop_at):
            ids = []

            def visit(node, ctx, break_loop):
                ids.append(node["id"])
                if node["id"] == stop_at:
                    break_loop()

            walker.walk(tree, visit)
            results[name] = ids

        threads = [
            threading.Thread(target=run, args=("early", "1-1")),
            threading.Thread(target=run, args=("full", None)),
        ]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert results["early"] == ["1", "1-1"]
        assert len(results["full"]) == 8
