"""
Workload files listing table pairs for batch comparison.

Format:
    pairs:
      - [instructor, teaches]
      - left: course
        right: section
"""

from pathlib import Path

import yaml


class WorkloadError(ValueError):
    """Raised when a workload file is malformed."""

    pass


def load_pairs(path: Path) -> list[tuple[str, str]]:
    """
    Load table pairs from a YAML workload file.

    Args:
        path: Path to the workload file

    Returns:
        List of (table1, table2) tuples in file order

    Raises:
        WorkloadError: If the file lacks a pairs list or an entry is malformed
    """
    with open(path) as f:
        data = yaml.safe_load(f)

    if not isinstance(data, dict) or not isinstance(data.get("pairs"), list):
        raise WorkloadError(f"{path}: expected a mapping with a 'pairs' list")

    return [_parse_pair(entry, i) for i, entry in enumerate(data["pairs"])]


def _parse_pair(entry, index: int) -> tuple[str, str]:
    if isinstance(entry, dict) and set(entry) == {"left", "right"}:
        pair = (entry["left"], entry["right"])
    elif isinstance(entry, list) and len(entry) == 2:
        pair = (entry[0], entry[1])
    else:
        raise WorkloadError(f"pairs[{index}]: expected [left, right], got {entry!r}")

    if not all(isinstance(name, str) and name for name in pair):
        raise WorkloadError(f"pairs[{index}]: table names must be non-empty strings")
    return pair
