"""Configuration system for treewalk.

This module defines how users specify a traversal: which field holds the
children, which order to walk in, how deep to go, and how flattened
records are annotated.
"""

from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Union

from .core.fields import FieldSelector
from .errors import InvalidConfigError, UnknownStrategyError


class TraversalStrategy(Enum):
    """How to traverse the tree."""
    DEPTH_FIRST_PRE = "dfs"     # Parent before children, subtree before sibling
    BREADTH_FIRST = "bfs"       # Level by level


class WalkSignal(Enum):
    """Value a callback may return to steer the traversal."""
    CONTINUE = "continue"
    STOP = "stop"


_STRATEGY_ALIASES = {
    'dfs': TraversalStrategy.DEPTH_FIRST_PRE,
    'dfs_pre': TraversalStrategy.DEPTH_FIRST_PRE,
    'depth_first': TraversalStrategy.DEPTH_FIRST_PRE,
    'depth_first_pre': TraversalStrategy.DEPTH_FIRST_PRE,
    'pre_order': TraversalStrategy.DEPTH_FIRST_PRE,
    'bfs': TraversalStrategy.BREADTH_FIRST,
    'breadth_first': TraversalStrategy.BREADTH_FIRST,
    'level': TraversalStrategy.BREADTH_FIRST,
    'level_order': TraversalStrategy.BREADTH_FIRST,
}


def parse_strategy(strategy: Union[TraversalStrategy, str]) -> TraversalStrategy:
    """Parse strategy from string or enum.

    Args:
        strategy: Strategy as enum or one of its string aliases

    Returns:
        TraversalStrategy enum value

    Raises:
        UnknownStrategyError: If the name is not recognized
    """
    if isinstance(strategy, TraversalStrategy):
        return strategy

    strategy_lower = strategy.lower() if isinstance(strategy, str) else str(strategy)
    if strategy_lower in _STRATEGY_ALIASES:
        return _STRATEGY_ALIASES[strategy_lower]

    raise UnknownStrategyError(
        f"Unknown traversal strategy: {strategy}. "
        f"Choose from: {', '.join(_STRATEGY_ALIASES.keys())}"
    )


@dataclass
class WalkConfig:
    """Complete configuration for a tree walk.

    Most callers use the functional API in ``treewalk.api`` and never build
    one directly; it is the place where the options meet and get validated.
    """

    children_key: FieldSelector = "children"
    strategy: Union[TraversalStrategy, str] = TraversalStrategy.DEPTH_FIRST_PRE
    max_depth: Optional[int] = None     # None = unlimited

    # Annotation keys for flattened records
    level_key: str = "level"
    parent_id_key: str = "parent_id"

    @classmethod
    def depth_first(cls, children_key: FieldSelector = "children", **kwargs) -> 'WalkConfig':
        """Create config for a depth-first pre-order walk."""
        return cls(children_key=children_key,
                   strategy=TraversalStrategy.DEPTH_FIRST_PRE, **kwargs)

    @classmethod
    def breadth_first(cls, children_key: FieldSelector = "children", **kwargs) -> 'WalkConfig':
        """Create config for a breadth-first walk."""
        return cls(children_key=children_key,
                   strategy=TraversalStrategy.BREADTH_FIRST, **kwargs)

    def validate(self) -> List[str]:
        """Validate configuration for consistency.

        Returns:
            List of validation errors (empty if valid)
        """
        errors = []

        if not isinstance(self.children_key, str) and not callable(self.children_key):
            errors.append("children_key must be a field name or a callable")
        elif isinstance(self.children_key, str) and not self.children_key:
            errors.append("children_key cannot be empty")

        if isinstance(self.strategy, str) and self.strategy.lower() not in _STRATEGY_ALIASES:
            errors.append(f"unknown strategy: {self.strategy}")
        elif not isinstance(self.strategy, (str, TraversalStrategy)):
            errors.append("strategy must be a TraversalStrategy or a string")

        if self.max_depth is not None:
            if isinstance(self.max_depth, bool) or not isinstance(self.max_depth, int):
                errors.append("max_depth must be an integer or None")
            elif self.max_depth < 0:
                errors.append("max_depth cannot be negative")

        if not self.level_key:
            errors.append("level_key cannot be empty")
        if not self.parent_id_key:
            errors.append("parent_id_key cannot be empty")
        if self.level_key and self.level_key == self.parent_id_key:
            errors.append("level_key and parent_id_key must differ")

        return errors

    def check(self) -> 'WalkConfig':
        """Raise InvalidConfigError if validate() reports problems.

        Returns:
            self, for chaining
        """
        errors = self.validate()
        if errors:
            raise InvalidConfigError(f"Invalid configuration: {'; '.join(errors)}")
        return self

    def create_walker(self):
        """Build the walker this configuration describes."""
        from .core.traverser import create_walker

        self.check()
        return create_walker(self.strategy, self.children_key, max_depth=self.max_depth)
