"""Root subcommand: rewrite a log relative to a subdirectory."""

from dataclasses import dataclass, field
from pathlib import Path

from ..log.file import LogFile
from ..log.record import Record
from .log_ops import process_log


@dataclass
class ChangeRootResult:
    """Printable outcome of do_change_root().

    Attributes:
        info_lines: Entry counts
        warning_lines: Warnings about the prefix itself
        file_warning_lines: Warnings from reading the input log, or None if there were none
    """
    info_lines: list[str] = field(default_factory=list)
    warning_lines: list[str] = field(default_factory=list)
    file_warning_lines: list[str] | None = None


def _info_lines(entries_matched: int, entries_omitted: int) -> list[str]:
    total_entries = entries_matched + entries_omitted
    lines = [f"Input file contains {total_entries} entries:"]

    if entries_matched == 0:
        pass
    elif entries_matched == total_entries:
        lines.append(f"  All {entries_matched} entries matched the prefix")
    else:
        lines.append(f"  {entries_matched} entries matched the prefix")
        lines.append(f"  {entries_omitted} entries did not match the prefix and were omitted")
    return lines


def _warning_lines(entries_matched: int) -> list[str]:
    if entries_matched == 0:
        return ["Warning: No entries matched the prefix (All entries were omitted)"]
    return []


def do_change_root(input_path: str | Path, output_path: str | Path, root_prefix: str) -> ChangeRootResult:
    """Write a copy of a log with its root directory moved down to root_prefix.

    1. Paths starting with root_prefix have it removed.
    2. Entries whose paths don't start with root_prefix are omitted, as are entries whose path
       is exactly root_prefix (they would be left with an empty path).

    Useful before partitioning two logs that were taken from different levels of the same tree.

    Args:
        input_path: Log file to read
        output_path: File to create; must not exist
        root_prefix: Path prefix to strip, e.g. "photos/2023/"

    Returns:
        ChangeRootResult with counts and warnings
    """
    entry_count_before = 0
    entry_count_after = 0

    def strip_prefix(log_file: LogFile) -> None:
        nonlocal entry_count_before, entry_count_after
        entry_count_before = len(log_file.entries)
        log_file.entries = [
            Record(record.digest_key, record.path[len(root_prefix):])
            for record in log_file.entries
            if record.path.startswith(root_prefix) and len(record.path) > len(root_prefix)
        ]
        entry_count_after = len(log_file.entries)

    file_warning_lines = process_log(input_path, output_path, strip_prefix)

    entries_matched = entry_count_after
    entries_omitted = entry_count_before - entry_count_after

    return ChangeRootResult(
        info_lines=_info_lines(entries_matched, entries_omitted),
        warning_lines=_warning_lines(entries_matched),
        file_warning_lines=file_warning_lines,
    )
