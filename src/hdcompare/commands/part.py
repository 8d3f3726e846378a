"""Part subcommand: partition two logs and write one file per bucket."""

import logging
from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field
from pathlib import Path

from ..log.file import LogFile, OutputFileExists
from ..log.record import Record
from ..partition.engine import MatchPartition, partition
from ..partition.match import CrossSourceMatchGroup, MatchPair, SingleSourceMatchGroup

logger = logging.getLogger(__name__)


FILE1_LABEL = "file1: "
FILE2_LABEL = "file2: "


def output_paths(output_path_base: str | Path) -> dict[str, Path]:
    """Map each bucket name to its output file path, in writing order.

    Bucket names are appended to output_path_base as suffixes, e.g. "part" -> "part_full_match_pairs".
    """
    base = str(output_path_base)
    names = []
    for tier in ('full', 'name', 'hashes'):
        names.append(f"{tier}_match_pairs")
        names.append(f"{tier}_match_groups_file1_only")
        names.append(f"{tier}_match_groups_file2_only")
        names.append(f"{tier}_match_groups_file1_and_file2")
    names.append("no_match_entries_file1")
    names.append("no_match_entries_file2")
    return {name: Path(f"{base}_{name}") for name in names}


def render_pairs(pairs: Iterable[MatchPair]) -> Iterator[str]:
    for pair in pairs:
        yield f"{FILE1_LABEL}{pair.from_file1}\n"
        yield f"{FILE2_LABEL}{pair.from_file2}\n"
        yield "\n"


def render_single_source_groups(groups: Iterable[SingleSourceMatchGroup]) -> Iterator[str]:
    for group in groups:
        for record in group.entries:
            yield f"{record}\n"
        yield "\n"


def render_cross_source_groups(groups: Iterable[CrossSourceMatchGroup]) -> Iterator[str]:
    for group in groups:
        for record in group.from_file1:
            yield f"{FILE1_LABEL}{record}\n"
        for record in group.from_file2:
            yield f"{FILE2_LABEL}{record}\n"
        yield "\n"


def render_records(records: Iterable[Record]) -> Iterator[str]:
    for record in records:
        yield f"{record}\n"


def render_partition(mp: MatchPartition) -> dict[str, Iterator[str]]:
    """Render every bucket of a partition, keyed by the bucket names used in output_paths()."""
    rendered: dict[str, Iterator[str]] = {}
    for tier_name, tier in mp.tiers():
        rendered[f"{tier_name}_match_pairs"] = render_pairs(tier.pairs)
        rendered[f"{tier_name}_match_groups_file1_only"] = render_single_source_groups(tier.file1_only)
        rendered[f"{tier_name}_match_groups_file2_only"] = render_single_source_groups(tier.file2_only)
        rendered[f"{tier_name}_match_groups_file1_and_file2"] = render_cross_source_groups(tier.file1_and_file2)
    rendered["no_match_entries_file1"] = render_records(mp.no_match_file1)
    rendered["no_match_entries_file2"] = render_records(mp.no_match_file2)
    return rendered


def partition_stats(mp: MatchPartition) -> str:
    """Summarize bucket sizes.

    Full and name match groups indicate irregular input (a path or an exact line appearing more
    than once in a log), so their counts are marked as expected to be zero.
    """
    lines = [
        "log partition statistics:",
        "   (note: \"pairs\" have 1 entry in each file)",
    ]
    for tier_name, tier in mp.tiers():
        note = "" if tier_name == 'hashes' else " (should be 0)"
        lines.append(f" {len(tier.pairs)} {tier_name} match pairs")
        lines.append(f" {len(tier.file1_only)} {tier_name} match groups in file 1 only{note}")
        lines.append(f" {len(tier.file2_only)} {tier_name} match groups in file 2 only{note}")
        lines.append(f" {len(tier.file1_and_file2)} {tier_name} match groups in both files{note}")
    lines.append(f" {len(mp.no_match_file1)} entries in file 1 with no match")
    lines.append(f" {len(mp.no_match_file2)} entries in file 2 with no match")
    return "\n".join(lines) + "\n"


@dataclass
class PartResult:
    """Printable outcome of do_part().

    Attributes:
        stats: Bucket size summary from partition_stats()
        file1_warning_lines: Warnings from reading the first log, or None
        file2_warning_lines: Warnings from reading the second log, or None
        written: Output files that were created
    """
    stats: str
    file1_warning_lines: list[str] | None = None
    file2_warning_lines: list[str] | None = None
    written: list[Path] = field(default_factory=list)


def do_part(
        log_path1: str | Path,
        log_path2: str | Path,
        output_path_base: str | Path
) -> PartResult:
    """Partition the entries of two logs and write each bucket to its own file.

    Output files are named by appending bucket suffixes to output_path_base (which may include
    directories; they are not created). Nothing is written if any output file already exists.

    Args:
        log_path1: The earlier log ("file 1")
        log_path2: The later log ("file 2")
        output_path_base: Path prefix for the 14 output files

    Returns:
        PartResult with statistics and read warnings

    Raises:
        OutputFileExists: One of the output files already exists
        OSError: A log could not be read or an output file could not be written
        PartitionError: The partition failed its size check
    """
    paths = output_paths(output_path_base)
    for path in paths.values():
        if path.exists():
            raise OutputFileExists(path)

    log_file1 = LogFile.read(log_path1)
    log_file2 = LogFile.read(log_path2)

    result = PartResult(stats="")
    result.file1_warning_lines = log_file1.warning_report()
    result.file2_warning_lines = log_file2.warning_report()
    for log_path, warning_lines in ((log_path1, result.file1_warning_lines), (log_path2, result.file2_warning_lines)):
        for line in warning_lines or []:
            logger.warning(f"{log_path}: {line}")

    mp = partition(log_file1.entries, log_file2.entries)

    rendered = render_partition(mp)
    for name, path in paths.items():
        try:
            f = open(path, 'x', encoding='utf-8', newline='')
        except FileExistsError:
            raise OutputFileExists(path) from None
        with f:
            f.writelines(rendered[name])
        result.written.append(path)
        logger.debug(f"Wrote {path}")

    result.stats = partition_stats(mp)
    logger.info(f"Wrote {len(result.written)} partition files with base {output_path_base}")
    return result
