"""Evaluation engine module for arithmetic circuits.

The engine takes a Circuit and an assignment of input values and fills
every node needed for the requested targets, without modifying the circuit.

Key types:
- FillResult: Read-only mapping from visited node id to value
- fill: Function that evaluates a circuit
"""

from ._engine import FillResult, fill

__all__ = ["FillResult", "fill"]
