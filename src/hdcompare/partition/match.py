"""Match pair and match group types produced by classification."""

from dataclasses import dataclass, field
from enum import Enum

from ..log.record import Record
from .group import NonEmptyGroup


class Source(Enum):
    """Which of the two compared logs a record came from.

    Only meaningful during a single classification run, so it is never stored on Record.
    """
    FILE1 = 1
    FILE2 = 2


@dataclass(eq=True)
class MatchPair:
    """Exactly one record from each log sharing a match key."""
    from_file1: Record
    from_file2: Record

    def sort_key(self) -> tuple[str, str, str, str]:
        return self.from_file1.sort_key() + self.from_file2.sort_key()


@dataclass(eq=True)
class SingleSourceMatchGroup:
    """Two or more records from the same log sharing a match key.

    This is an anomaly: a log should not contain duplicate keys.
    """
    entries: NonEmptyGroup[Record]

    def __len__(self) -> int:
        return len(self.entries)

    def sort_members(self) -> None:
        self.entries.sort(key=Record.sort_key)

    def sort_key(self) -> tuple[tuple[str, str], ...]:
        return tuple(record.sort_key() for record in self.entries)


@dataclass(eq=True)
class CrossSourceMatchGroup:
    """Records from both logs sharing a match key that do not reduce to a single pair."""
    from_file1: NonEmptyGroup[Record]
    from_file2: NonEmptyGroup[Record]

    def __len__(self) -> int:
        return len(self.from_file1) + len(self.from_file2)

    def sort_members(self) -> None:
        self.from_file1.sort(key=Record.sort_key)
        self.from_file2.sort(key=Record.sort_key)

    def sort_key(self) -> tuple[tuple[str, str], ...]:
        # file 1 side first, so the first element is the group's first member
        return tuple(record.sort_key() for record in self.from_file1) + \
            tuple(record.sort_key() for record in self.from_file2)


@dataclass
class TierResult:
    """Outcome of classifying two record lists by one match key."""
    pairs: list[MatchPair] = field(default_factory=list)
    cross_groups: list[CrossSourceMatchGroup] = field(default_factory=list)
    solo_groups1: list[SingleSourceMatchGroup] = field(default_factory=list)
    solo_groups2: list[SingleSourceMatchGroup] = field(default_factory=list)
    unmatched1: list[Record] = field(default_factory=list)
    unmatched2: list[Record] = field(default_factory=list)
