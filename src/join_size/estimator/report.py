"""
Comparison of estimated and actual join sizes.

Runs the estimator, optionally executes the real join, and renders
the human-readable report printed by the CLI.
"""

from dataclasses import dataclass

from .cases import JoinSizeEstimator
from .models import EstimationResult


@dataclass(frozen=True)
class JoinSizeReport:
    """Estimate, optional actual size, and the resulting error."""

    result: EstimationResult
    actual_size: int | None

    @property
    def error(self) -> int | None:
        """Signed estimation error (estimated - actual), if both are known."""
        if self.actual_size is None or self.result.is_unknown:
            return None
        return self.result.estimated_size - self.actual_size


def compare(
    estimator: JoinSizeEstimator,
    table1: str,
    table2: str,
    include_actual: bool = True,
) -> JoinSizeReport:
    """
    Estimate a join and, unless disabled, measure its true size.

    Args:
        estimator: Configured estimator
        table1: Name of R
        table2: Name of S
        include_actual: Execute the natural join for the true size

    Returns:
        JoinSizeReport for the pair
    """
    result = estimator.estimate(table1, table2)
    actual = estimator.actual_join_size(table1, table2) if include_actual else None
    return JoinSizeReport(result=result, actual_size=actual)


def format_report(report: JoinSizeReport) -> str:
    """Render a report as printed by the CLI."""
    result = report.result
    r_name, s_name = result.operands
    estimated = "unknown" if result.is_unknown else str(result.estimated_size)

    lines = [
        f'Cost to join "{r_name}" and "{s_name}":',
        f"\tEstimated Join Size: {estimated}",
    ]
    if report.actual_size is not None:
        error = report.error
        lines.append(f"\tActual Join Size: {report.actual_size}")
        lines.append(f"\tEstimation Error: {'n/a' if error is None else error}")
    lines.append("")
    lines.append(result.case.description)
    return "\n".join(lines)
