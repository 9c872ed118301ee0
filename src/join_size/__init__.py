"""
Join Size - Natural join cardinality estimation from schema metadata.

This package predicts |R ⋈ S| for two relations of a PostgreSQL database
without executing the join. It combines catalog metadata (columns, foreign
keys) with simple statistics (row counts, distinct-value counts) in the
textbook four-case decision procedure.
"""

__version__ = "0.1.0"
