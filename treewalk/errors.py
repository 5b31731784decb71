"""Exception hierarchy for treewalk.

Structurally odd input (non-container children, ``None`` roots, missing
fields) never raises. These exceptions cover programmer errors detected at
the call boundary, before any node is visited. Exceptions raised by user
callbacks are never wrapped in these types; they propagate unchanged.
"""


class TreeWalkError(Exception):
    """Base class for all treewalk errors."""
    pass


class InvalidConfigError(TreeWalkError, ValueError):
    """Raised when a WalkConfig fails validation."""
    pass


class UnknownStrategyError(TreeWalkError, ValueError):
    """Raised when a traversal strategy name is not recognized."""
    pass


class InvalidSelectorError(TreeWalkError, TypeError):
    """Raised when a field selector is neither a name nor a callable."""
    pass
