"""
Data model for join size estimation.

Every value here is built fresh for a single estimation call and is
immutable once produced.
"""

from dataclasses import dataclass, field
from enum import Enum

from ..base import UNKNOWN_SIZE


class JoinCase(Enum):
    """Branch of the decision procedure that produced an estimate."""

    NONE = "none"
    DISJOINT = "disjoint"
    KEY_IN_LEFT = "key_in_left"
    FOREIGN_KEY_REFERENCE = "foreign_key_reference"
    SINGLE_NON_KEY_ATTRIBUTE = "single_non_key_attribute"

    @property
    def description(self) -> str:
        """Textual explanation of the case, as printed in reports."""
        return _CASE_DESCRIPTIONS[self]


_CASE_DESCRIPTIONS = {
    JoinCase.NONE: "Could not estimate the size of joining these two relations.",
    JoinCase.DISJOINT: (
        "Case 1: If R intersect S = EMPTY_SET, the estimated join size is r x s."
    ),
    JoinCase.KEY_IN_LEFT: (
        "Case 2: If R intersect S is a key for R, the number of tuples in "
        "R join S is no greater than the number of tuples in S."
    ),
    JoinCase.FOREIGN_KEY_REFERENCE: (
        "Case 3: If R intersect S is a foreign key in S referencing R, then "
        "the number of tuples in R join S is exactly the same as the number "
        "of tuples in S."
    ),
    JoinCase.SINGLE_NON_KEY_ATTRIBUTE: (
        "Case 4: If R intersect S = {A} is not a key for R or S, then the "
        "number of tuples in the joined relation is the minimum of "
        "{(n_r * n_s) / V(A, R), (n_r * n_s) / V(A, S)}."
    ),
}


@dataclass(frozen=True)
class Relation:
    """A table as seen by one estimation call, under its stored name."""

    name: str
    columns: frozenset[str]
    row_count: int


@dataclass(frozen=True)
class ForeignKeyEdge:
    """from_table has a foreign key referencing to_table over columns."""

    from_table: str
    to_table: str
    columns: frozenset[str] = field(default_factory=frozenset)

    def covers(self, attributes: frozenset[str]) -> bool:
        """True if every attribute is part of this foreign key."""
        if not attributes:
            return False
        return attributes <= self.columns


@dataclass(frozen=True)
class EstimationResult:
    """Outcome of JoinSizeEstimator.estimate()."""

    estimated_size: int
    case: JoinCase
    operands: tuple[str, str]
    diagnostic: str = ""

    @property
    def is_unknown(self) -> bool:
        """True when no case matched and the size is the sentinel."""
        return self.case is JoinCase.NONE

    @classmethod
    def unknown(cls, operands: tuple[str, str], diagnostic: str = "") -> "EstimationResult":
        """Result for a pair no case applies to, with UNKNOWN_SIZE."""
        return cls(
            estimated_size=UNKNOWN_SIZE,
            case=JoinCase.NONE,
            operands=operands,
            diagnostic=diagnostic,
        )
