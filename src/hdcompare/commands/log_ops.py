"""Shared read-transform-write step for commands that rewrite a single log."""

import logging
from collections.abc import Callable
from pathlib import Path

from .. import __version__
from ..log.file import LogFile, OutputFileExists, HeaderWarning, HEADER_LINE_COUNT

logger = logging.getLogger(__name__)

# Header warnings that make the header's 5th line unsafe to overwrite
_SKIP_MODIFIED_NOTE_WARNINGS = frozenset({
    HeaderWarning.HEADER_NOT_FOUND,
    HeaderWarning.UNEXPECTED_HEADER_LINE_COUNT,
    HeaderWarning.UNEXPECTED_5TH_LINE_CONTENT,
})


def process_log(
        input_path: str | Path,
        output_path: str | Path,
        transform: Callable[[LogFile], None]
) -> list[str] | None:
    """Read a log, transform its entries in place, and write the result to a new file.

    Unless the header is irregular, its 5th line is replaced with a note naming this program,
    so the output can be told apart from an unmodified hashdeep log.

    Args:
        input_path: Log file to read
        output_path: File to create; must not exist
        transform: Called with the loaded LogFile; modifies its entries

    Returns:
        Warning lines from reading the input, or None if there were none

    Raises:
        OutputFileExists: output_path already exists (checked before reading)
        OSError: The input could not be read or the output could not be written
    """
    output_path = Path(output_path)
    if output_path.exists():
        raise OutputFileExists(output_path)

    log_file = LogFile.read(input_path)

    transform(log_file)

    if not any(warning in _SKIP_MODIFIED_NOTE_WARNINGS for warning, _ in log_file.header_warnings):
        log_file.header_lines[HEADER_LINE_COUNT - 1] = f"## Modified by hdcompare v{__version__}"

    warning_report = log_file.warning_report()
    if warning_report is not None:
        for line in warning_report:
            logger.warning(f"{input_path}: {line}")

    log_file.write(output_path)
    return warning_report
