"""Partitioning of two logs' records into match buckets.

This package contains:
- group: NonEmptyGroup, an ordered container that always holds at least one element
- match: match pair and match group types produced by classification
- classifier: the single-key grouping step run once per tier
- engine: the three-tier cascade, deterministic ordering and the size check
"""
