"""Sort subcommand: order a log's entries by path."""

from pathlib import Path

from ..log.file import LogFile
from .log_ops import process_log


def do_sort(input_path: str | Path, output_path: str | Path) -> list[str] | None:
    """Write a copy of a log with its entries stably sorted by path.

    hashdeep does not order its output consistently between runs; a sorted log can be compared
    with another sorted log in a plain text-diff tool.

    Returns:
        Warning lines from reading the input, or None
    """
    def sort_entries(log_file: LogFile) -> None:
        log_file.entries.sort(key=lambda record: record.path)

    return process_log(input_path, output_path, sort_entries)
