__version__ = '0.4.0'

from .log.record import Record
from .log.file import LogFile, OutputFileExists
from .partition.group import NonEmptyGroup
from .partition.match import MatchPair, SingleSourceMatchGroup, CrossSourceMatchGroup
from .partition.classifier import classify
from .partition.engine import (
    MatchPartition,
    MatchTier,
    PartitionError,
    ChecksumFailure,
    ChecksumArithmeticOverflow,
    partition,
)
from .settings import Settings
