"""
Join size estimator module.

This module provides:
- Catalog access for tables, columns and foreign keys
- Exact statistics (row counts, distinct counts, key checks)
- The four-case join size decision procedure
- Estimate vs. actual comparison reports
"""

from .cases import JoinSizeEstimator, single_attribute_estimate
from .catalog import Catalog
from .models import EstimationResult, ForeignKeyEdge, JoinCase, Relation
from .report import JoinSizeReport, compare, format_report
from .statistics import Statistics

__all__ = [
    # Accessors
    "Catalog",
    "Statistics",
    # Models
    "EstimationResult",
    "ForeignKeyEdge",
    "JoinCase",
    "Relation",
    # Estimation
    "JoinSizeEstimator",
    "single_attribute_estimate",
    # Reports
    "JoinSizeReport",
    "compare",
    "format_report",
]
