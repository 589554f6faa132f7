"""Graph module providing dependency graph abstractions.

This module contains:
- DependencyGraph[T]: An immutable view of operand relationships
- reachable: Transitive walk used for ancestor/descendant queries
"""

from ._algorithms import reachable
from ._dependency_graph import DependencyGraph

__all__ = ["DependencyGraph", "reachable"]
