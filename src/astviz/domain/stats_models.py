from __future__ import annotations

"""
Statistics Data Models.

Defines the immutable count record produced by the statistics aggregator
and the field-wise merge used to fold child results into their parent.
"""

from dataclasses import asdict, dataclass, replace
from typing import Dict


@dataclass(frozen=True)
class StatsRecord:
    """
    Shape summary of a tree.

    Attributes:
        total_nodes: Nodes counted by the traversal rules.
        max_depth: Deepest level reached (root is depth 0).
        function_calls: Nodes classified as function calls.
        variables: Nodes classified as variables.
        literals: Leaves counted as literals.
    """
    total_nodes: int = 0
    max_depth: int = 0
    function_calls: int = 0
    variables: int = 0
    literals: int = 0

    @classmethod
    def zero(cls, depth: int = 0) -> "StatsRecord":
        """Neutral element of merge at the given depth."""
        return cls(max_depth=depth)

    def merge(self, other: "StatsRecord") -> "StatsRecord":
        """Sum the counters and keep the larger depth."""
        return StatsRecord(
            total_nodes=self.total_nodes + other.total_nodes,
            max_depth=max(self.max_depth, other.max_depth),
            function_calls=self.function_calls + other.function_calls,
            variables=self.variables + other.variables,
            literals=self.literals + other.literals,
        )

    def bump(self, **increments: int) -> "StatsRecord":
        """Return a copy with the given counters incremented."""
        changes = {name: getattr(self, name) + step for name, step in increments.items()}
        return replace(self, **changes)

    def to_dict(self) -> Dict[str, int]:
        return asdict(self)
