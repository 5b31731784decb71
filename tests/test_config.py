"""Tests for WalkConfig, strategy parsing and the walker factory."""

import sys
from pathlib import Path
import unittest

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from treewalk import (
    BreadthFirstWalker,
    DepthFirstWalker,
    InvalidConfigError,
    TraversalStrategy,
    UnknownStrategyError,
    WalkConfig,
    create_walker,
    iter_tree,
    parse_strategy,
)


class TestParseStrategy(unittest.TestCase):
    """String aliases and enum values."""

    def test_enum_passes_through(self):
        self.assertIs(parse_strategy(TraversalStrategy.BREADTH_FIRST), TraversalStrategy.BREADTH_FIRST)

    def test_aliases(self):
        for name in ("dfs", "DFS", "dfs_pre", "depth_first", "pre_order"):
            self.assertIs(parse_strategy(name), TraversalStrategy.DEPTH_FIRST_PRE)
        for name in ("bfs", "breadth_first", "level", "Level_Order"):
            self.assertIs(parse_strategy(name), TraversalStrategy.BREADTH_FIRST)

    def test_unknown_strategy(self):
        with self.assertRaises(UnknownStrategyError) as raised:
            parse_strategy("dfs_post")
        self.assertIsInstance(raised.exception, ValueError)
        self.assertIn("Choose from", str(raised.exception))


class TestCreateWalker(unittest.TestCase):
    """Factory returns the right walker class."""

    def test_create_by_name(self):
        self.assertIsInstance(create_walker("dfs"), DepthFirstWalker)
        self.assertIsInstance(create_walker("bfs", "kids", max_depth=2), BreadthFirstWalker)

    def test_walker_keeps_configuration(self):
        walker = create_walker(TraversalStrategy.BREADTH_FIRST, "kids", max_depth=2)
        self.assertEqual(walker.children_key, "kids")
        self.assertEqual(walker.max_depth, 2)
        self.assertIs(walker.strategy, TraversalStrategy.BREADTH_FIRST)
        self.assertIn("BreadthFirstWalker", repr(walker))

    def test_unknown_name(self):
        with self.assertRaises(UnknownStrategyError):
            create_walker("zigzag")


class TestWalkConfig(unittest.TestCase):
    """Validation of the configuration dataclass."""

    def test_defaults_are_valid(self):
        config = WalkConfig()
        self.assertEqual(config.validate(), [])
        self.assertIs(config.check(), config)

    def test_convenience_constructors(self):
        self.assertIsInstance(WalkConfig.depth_first("kids").create_walker(), DepthFirstWalker)
        config = WalkConfig.breadth_first("kids", max_depth=3)
        walker = config.create_walker()
        self.assertIsInstance(walker, BreadthFirstWalker)
        self.assertEqual(walker.max_depth, 3)

    def test_validation_errors(self):
        config = WalkConfig(
            children_key=7,
            strategy="sideways",
            max_depth=-1,
            level_key="",
        )
        errors = config.validate()
        self.assertIn("children_key must be a field name or a callable", errors)
        self.assertIn("unknown strategy: sideways", errors)
        self.assertIn("max_depth cannot be negative", errors)
        self.assertIn("level_key cannot be empty", errors)

    def test_non_integer_max_depth(self):
        self.assertIn("max_depth must be an integer or None", WalkConfig(max_depth=1.5).validate())
        self.assertIn("max_depth must be an integer or None", WalkConfig(max_depth=True).validate())

    def test_empty_children_key(self):
        self.assertIn("children_key cannot be empty", WalkConfig(children_key="").validate())

    def test_check_raises(self):
        with self.assertRaises(InvalidConfigError) as raised:
            WalkConfig(parent_id_key="level").check()
        self.assertIn("must differ", str(raised.exception))

    def test_iter_tree_validates(self):
        with self.assertRaises(InvalidConfigError):
            iter_tree([], "children", max_depth=-5)


if __name__ == "__main__":
    unittest.main()
