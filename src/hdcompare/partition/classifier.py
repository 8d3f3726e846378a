"""Single-key classification of two record lists."""

from collections.abc import Callable, Sequence
from typing import NamedTuple

from ..log.record import Record
from .group import NonEmptyGroup
from .match import (
    CrossSourceMatchGroup,
    MatchPair,
    SingleSourceMatchGroup,
    Source,
    TierResult,
)


class _TaggedRecord(NamedTuple):
    source: Source
    record: Record


def classify(
        from_file1: Sequence[Record],
        from_file2: Sequence[Record],
        key: Callable[[Record], str]
) -> TierResult:
    """Group records from both logs by key and resolve each bucket.

    Every record from file 1 is inserted before any record from file 2. Buckets are then visited
    in sorted key order, so the result never depends on dict iteration order.

    Bucket resolution:
        - 1 record: unmatched, on the side it came from
        - 2 records, one per log: a MatchPair
        - 2 records from the same log: a SingleSourceMatchGroup for that log
        - more than 2: a SingleSourceMatchGroup if all come from one log,
          otherwise a CrossSourceMatchGroup

    Args:
        from_file1: Records from the first log
        from_file2: Records from the second log
        key: Match key function (full identity, path, or digest key)

    Returns:
        TierResult holding every input record exactly once
    """
    buckets: dict[str, NonEmptyGroup[_TaggedRecord]] = {}

    def insert(source: Source, records: Sequence[Record]) -> None:
        for record in records:
            tagged = _TaggedRecord(source, record)
            match_key = key(record)
            bucket = buckets.get(match_key)
            if bucket is None:
                buckets[match_key] = NonEmptyGroup(tagged)
            else:
                bucket.append(tagged)

    insert(Source.FILE1, from_file1)
    insert(Source.FILE2, from_file2)

    result = TierResult()

    for match_key in sorted(buckets):
        bucket = buckets[match_key]

        if len(bucket) == 1:
            source, record = bucket.first
            if source is Source.FILE1:
                result.unmatched1.append(record)
            else:
                result.unmatched2.append(record)

        elif len(bucket) == 2:
            (source_a, a), (source_b, b) = bucket
            if source_a is not source_b:
                if source_a is Source.FILE1:
                    result.pairs.append(MatchPair(a, b))
                else:
                    result.pairs.append(MatchPair(b, a))
            elif source_a is Source.FILE1:
                result.solo_groups1.append(SingleSourceMatchGroup(NonEmptyGroup.of_pair(a, b)))
            else:
                result.solo_groups2.append(SingleSourceMatchGroup(NonEmptyGroup.of_pair(a, b)))

        else:
            file1_side = NonEmptyGroup.from_list(t.record for t in bucket if t.source is Source.FILE1)
            file2_side = NonEmptyGroup.from_list(t.record for t in bucket if t.source is Source.FILE2)

            if file1_side is not None and file2_side is not None:
                result.cross_groups.append(CrossSourceMatchGroup(file1_side, file2_side))
            elif file1_side is not None:
                result.solo_groups1.append(SingleSourceMatchGroup(file1_side))
            elif file2_side is not None:
                result.solo_groups2.append(SingleSourceMatchGroup(file2_side))

    return result
