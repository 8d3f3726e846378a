"""Three-tier partition of two hashdeep logs' records."""

import logging
import sys
from collections.abc import Sequence
from dataclasses import dataclass, field

from ..log.record import Record
from .classifier import classify
from .match import CrossSourceMatchGroup, MatchPair, SingleSourceMatchGroup, TierResult

logger = logging.getLogger(__name__)


class PartitionError(Exception):
    """The partition result failed its size check. Indicates a classification defect."""


class ChecksumFailure(PartitionError):
    """The partition result does not hold every input record exactly once."""

    def __init__(self, expected: int, actual: int):
        super().__init__(f"Partition checksum failure: {expected} input records, {actual} partitioned records")
        self.expected = expected
        self.actual = actual


class ChecksumArithmeticOverflow(PartitionError):
    """A record count exceeded the largest representable container size while checking the partition."""


@dataclass
class MatchTier:
    """Buckets produced by one classification tier.

    Attributes:
        pairs: One record from each log
        file1_only: Anomaly groups made only of file 1 records
        file2_only: Anomaly groups made only of file 2 records
        file1_and_file2: Groups with records from both logs that do not reduce to a pair
    """
    pairs: list[MatchPair] = field(default_factory=list)
    file1_only: list[SingleSourceMatchGroup] = field(default_factory=list)
    file2_only: list[SingleSourceMatchGroup] = field(default_factory=list)
    file1_and_file2: list[CrossSourceMatchGroup] = field(default_factory=list)

    @classmethod
    def from_tier_result(cls, result: TierResult) -> "MatchTier":
        return cls(result.pairs, result.solo_groups1, result.solo_groups2, result.cross_groups)

    def sort(self) -> None:
        self.pairs.sort(key=MatchPair.sort_key)
        for groups in (self.file1_only, self.file2_only, self.file1_and_file2):
            for group in groups:
                group.sort_members()
            groups.sort(key=lambda g: g.sort_key())

    def record_count(self) -> int:
        total = _checked_add(len(self.pairs), len(self.pairs))
        for groups in (self.file1_only, self.file2_only, self.file1_and_file2):
            for group in groups:
                total = _checked_add(total, len(group))
        return total


@dataclass
class MatchPartition:
    """Every record of two logs, partitioned by how it matches the other log.

    Attributes:
        full: Records matching on digest and path (unchanged files)
        name: Remaining records matching on path only (edited files)
        hashes: Remaining records matching on digest only (moved or renamed files)
        no_match_file1: File 1 records with no counterpart at any tier
        no_match_file2: File 2 records with no counterpart at any tier

    Records are shared with the input lists, not copied.
    """
    full: MatchTier
    name: MatchTier
    hashes: MatchTier
    no_match_file1: list[Record]
    no_match_file2: list[Record]

    def tiers(self) -> tuple[tuple[str, MatchTier], ...]:
        return ('full', self.full), ('name', self.name), ('hashes', self.hashes)

    def sort(self) -> None:
        """Put every bucket in a deterministic order independent of input order.

        Pairs are ordered by the file 1 record's path, group members by path, groups by their first
        member and unmatched records by path. Digest keys and remaining members break ties.
        """
        for _, tier in self.tiers():
            tier.sort()
        self.no_match_file1.sort(key=Record.sort_key)
        self.no_match_file2.sort(key=Record.sort_key)

    def total_records(self) -> int:
        """Count records across all buckets.

        Raises:
            ChecksumArithmeticOverflow: A partial sum exceeded sys.maxsize
        """
        total = 0
        for _, tier in self.tiers():
            total = _checked_add(total, tier.record_count())
        total = _checked_add(total, len(self.no_match_file1))
        return _checked_add(total, len(self.no_match_file2))


def _checked_add(a: int, b: int) -> int:
    total = a + b
    if total > sys.maxsize:
        raise ChecksumArithmeticOverflow(f"Record count overflow: {a} + {b} exceeds {sys.maxsize}")
    return total


def _full_key(record: Record) -> str:
    return str(record)


def _name_key(record: Record) -> str:
    return record.path


def _hashes_key(record: Record) -> str:
    return record.digest_key


def partition(from_file1: Sequence[Record], from_file2: Sequence[Record]) -> MatchPartition:
    """Partition records from two logs by full, name and hashes matches.

    Records are classified in this order, each tier seeing only what the previous tier left unmatched:

        1. full match (digest and path)
              1 in each file: unchanged file
              groups: anomalies (duplicate lines in a log)
        2. name match (path only)
              1 in each file: edited file
              groups: anomalies
        3. hashes match (digest only)
              1 in each file: moved or renamed file
              groups: copies, unknown cause
        4. no match, listed per log

    Args:
        from_file1: Records from the first log
        from_file2: Records from the second log

    Returns:
        MatchPartition with every bucket sorted

    Raises:
        ChecksumFailure: Some record is missing from or duplicated in the result
        ChecksumArithmeticOverflow: Counting the result overflowed
    """
    logger.info(f"Partitioning {len(from_file1)} file 1 records against {len(from_file2)} file 2 records")

    full_matches = classify(from_file1, from_file2, _full_key)
    name_matches = classify(full_matches.unmatched1, full_matches.unmatched2, _name_key)
    hashes_matches = classify(name_matches.unmatched1, name_matches.unmatched2, _hashes_key)

    for tier_name, tier_result in (('full', full_matches), ('name', name_matches), ('hashes', hashes_matches)):
        logger.debug(f"{tier_name} tier: {len(tier_result.pairs)} pairs, "
                     f"{len(tier_result.solo_groups1)} file 1 groups, {len(tier_result.solo_groups2)} file 2 groups, "
                     f"{len(tier_result.cross_groups)} cross groups, "
                     f"{len(tier_result.unmatched1)}/{len(tier_result.unmatched2)} unmatched")

    mp = MatchPartition(
        full=MatchTier.from_tier_result(full_matches),
        name=MatchTier.from_tier_result(name_matches),
        hashes=MatchTier.from_tier_result(hashes_matches),
        no_match_file1=hashes_matches.unmatched1,
        no_match_file2=hashes_matches.unmatched2,
    )
    mp.sort()

    expected = _checked_add(len(from_file1), len(from_file2))
    actual = mp.total_records()
    if actual != expected:
        raise ChecksumFailure(expected, actual)

    logger.info(f"Partition complete: {len(mp.full.pairs)} full, {len(mp.name.pairs)} name and "
                f"{len(mp.hashes.pairs)} hashes match pairs; "
                f"{len(mp.no_match_file1)}/{len(mp.no_match_file2)} records with no match")
    return mp
