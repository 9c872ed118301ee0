"""
Four-case decision procedure for natural join size estimation.

Cases are tried in a fixed order, from structural guarantees to the
statistical heuristic, and the first one that applies wins:

1. R ∩ S = ∅                        → |R| * |S|
2. R ∩ S is a key of R              → |S|
3. R ∩ S is a foreign key S → R     → |S|   (or R → S → |R|)
4. R ∩ S = {A}, A not a key of S    → min(|R||S| / V(A,R), |R||S| / V(A,S))

Anything else is left unclassified with UNKNOWN_SIZE.
"""

import logging

from ..base import UnknownTable
from .catalog import Catalog
from .models import EstimationResult, ForeignKeyEdge, JoinCase, Relation
from .statistics import Statistics

logger = logging.getLogger(__name__)


class JoinSizeEstimator:
    """
    Estimates |R ⋈ S| from catalog metadata and table statistics.

    The estimator holds no per-call state, so one instance may serve any
    number of estimate() calls.

    Usage:
        estimator = JoinSizeEstimator(Catalog(conn), Statistics(conn))
        result = estimator.estimate("instructor", "teaches")
        print(result.estimated_size, result.case)
    """

    def __init__(self, catalog: Catalog, statistics: Statistics):
        """
        Initialize estimator.

        Args:
            catalog: Provider of table, column and foreign key metadata
            statistics: Provider of row counts and distinct-value counts
        """
        self.catalog = catalog
        self.statistics = statistics

    def estimate(self, table1: str, table2: str) -> EstimationResult:
        """
        Estimate the size of table1 NATURAL JOIN table2.

        Args:
            table1: Name of R (any case)
            table2: Name of S (any case)

        Returns:
            EstimationResult with the estimate and the case that fired

        Raises:
            UnknownTable: If either name is absent, before any statistics query
            CatalogUnavailable: If metadata cannot be read
            StatisticsUnavailable: If a count query fails
        """
        r_name, s_name = self._validate(table1, table2)

        r_columns = frozenset(self.catalog.columns_of(r_name))
        r_fk = self.catalog.foreign_key_edge(r_name, s_name)
        r = Relation(r_name, r_columns, self.statistics.row_count(r_name))

        s_columns = frozenset(self.catalog.columns_of(s_name))
        s_fk = self.catalog.foreign_key_edge(s_name, r_name)
        s = Relation(s_name, s_columns, self.statistics.row_count(s_name))

        shared = r.columns & s.columns
        logger.debug(
            "R=%s (%d rows), S=%s (%d rows), shared=%s, R->S fk=%s, S->R fk=%s",
            r.name,
            r.row_count,
            s.name,
            s.row_count,
            sorted(shared),
            sorted(r_fk.columns),
            sorted(s_fk.columns),
        )

        result = self._classify(r, s, shared, r_fk, s_fk)
        logger.debug("Selected %s: %s", result.case.name, result.diagnostic)
        return result

    def actual_join_size(self, table1: str, table2: str) -> int:
        """True size of table1 NATURAL JOIN table2, for comparison."""
        r_name, s_name = self._validate(table1, table2)
        return self.statistics.actual_join_size(r_name, s_name)

    def _validate(self, table1: str, table2: str) -> tuple[str, str]:
        # Stored names, so quoted mixed-case tables reach the statistics queries
        r_name = self.catalog.resolve_table(table1)
        s_name = self.catalog.resolve_table(table2)
        missing = tuple(
            name
            for name, stored in ((table1, r_name), (table2, s_name))
            if stored is None
        )
        if missing:
            raise UnknownTable(missing)
        return r_name, s_name

    def _classify(
        self,
        r: Relation,
        s: Relation,
        shared: frozenset[str],
        r_fk: ForeignKeyEdge,
        s_fk: ForeignKeyEdge,
    ) -> EstimationResult:
        operands = (r.name, s.name)

        # Case 1: no shared attributes, cross product
        if not shared:
            return EstimationResult(
                estimated_size=r.row_count * s.row_count,
                case=JoinCase.DISJOINT,
                operands=operands,
                diagnostic=f"{r.row_count} * {s.row_count} (no shared attributes)",
            )

        # Case 2: each S tuple matches at most one R tuple
        if self.statistics.is_key_for(r.name, r.row_count, shared):
            return EstimationResult(
                estimated_size=s.row_count,
                case=JoinCase.KEY_IN_LEFT,
                operands=operands,
                diagnostic=f"{_fmt(shared)} is a key of {r.name}; |{s.name}| = {s.row_count}",
            )

        # Case 3: foreign key, S -> R first, then R -> S
        if s_fk.covers(shared):
            return EstimationResult(
                estimated_size=s.row_count,
                case=JoinCase.FOREIGN_KEY_REFERENCE,
                operands=operands,
                diagnostic=(
                    f"{_fmt(shared)} is a foreign key in {s.name} referencing {r.name}; "
                    f"|{s.name}| = {s.row_count}"
                ),
            )
        if r_fk.covers(shared):
            return EstimationResult(
                estimated_size=r.row_count,
                case=JoinCase.FOREIGN_KEY_REFERENCE,
                operands=operands,
                diagnostic=(
                    f"{_fmt(shared)} is a foreign key in {r.name} referencing {s.name}; "
                    f"|{r.name}| = {r.row_count}"
                ),
            )

        # Case 4: one shared attribute that is a key of neither side
        if len(shared) == 1:
            (attribute,) = shared
            if not self.statistics.is_key_for(s.name, s.row_count, shared):
                v_r = self.statistics.distinct_projection_count(r.name, attribute)
                v_s = self.statistics.distinct_projection_count(s.name, attribute)
                return EstimationResult(
                    estimated_size=single_attribute_estimate(
                        r.row_count, s.row_count, v_r, v_s
                    ),
                    case=JoinCase.SINGLE_NON_KEY_ATTRIBUTE,
                    operands=operands,
                    diagnostic=(
                        f"n_r={r.row_count}, n_s={s.row_count}, "
                        f"V({attribute}, {r.name})={v_r}, V({attribute}, {s.name})={v_s}"
                    ),
                )

        return EstimationResult.unknown(
            operands,
            diagnostic=f"no case applies to shared attributes {_fmt(shared)}",
        )


def single_attribute_estimate(n_r: int, n_s: int, v_r: int, v_s: int) -> int:
    """
    min(n_r * n_s // V(A,R), n_r * n_s // V(A,S)) with truncating division.

    A side without any non-NULL value of A cannot match, so a zero
    distinct count yields 0.
    """
    if v_r == 0 or v_s == 0:
        return 0
    product = n_r * n_s
    return min(product // v_r, product // v_s)


def _fmt(attributes: frozenset[str]) -> str:
    return "{" + ", ".join(sorted(attributes)) + "}"
