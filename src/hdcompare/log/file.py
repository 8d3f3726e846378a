"""Reading and writing hashdeep log files."""

import logging
from enum import Enum
from pathlib import Path

from .record import Record

logger = logging.getLogger(__name__)


HEADER_LINE_COUNT = 5
HEADER_VERSION_LINE = '%%%% HASHDEEP-1.0'
HEADER_FILE_FORMAT_LINE = '%%%% size,md5,sha256,filename'
MODIFIED_BY_PREFIX = '## Modified by hdcompare'

# Invalid lines shown individually in a warning report; the rest are only counted
MAX_REPORTED_INVALID_LINES = 5


class OutputFileExists(FileExistsError):
    """Raised instead of overwriting an existing output file."""

    def __init__(self, path: str | Path):
        super().__init__(f"Output file already exists: {path}")
        self.path = Path(path)


class HeaderWarning(Enum):
    """Irregularities found in a log file's header."""
    HEADER_NOT_FOUND = "header not found"
    UNEXPECTED_HEADER_LINE_COUNT = "unexpected header line count"
    UNEXPECTED_VERSION_STRING = "unexpected version string"
    UNEXPECTED_FILE_FORMAT = "unexpected file format"
    UNEXPECTED_5TH_LINE_CONTENT = "unexpected 5th line content"


def _is_header_line(line: str) -> bool:
    return line.startswith('%%%%') or line.startswith('##')


class LogFile:
    """In-memory contents of a hashdeep log.

    Attributes:
        header_lines: Leading comment lines (starting with "%%%%" or "##"), kept verbatim
        entries: Records parsed from the remaining lines, in file order
        invalid_lines: Non-header lines that could not be parsed into a Record
        header_warnings: (warning, detail) tuples describing header irregularities
    """

    def __init__(
            self,
            header_lines: list[str] | None = None,
            entries: list[Record] | None = None,
            invalid_lines: list[str] | None = None):
        self.header_lines: list[str] = header_lines or []
        self.entries: list[Record] = entries or []
        self.invalid_lines: list[str] = invalid_lines or []
        self.header_warnings: list[tuple[HeaderWarning, str | None]] = self._check_header()

    @classmethod
    def from_text(cls, text: str) -> "LogFile":
        """Split log text into header lines, parsed records and invalid lines."""
        # Only "\n" ends a line; other line-break characters are legal in file names
        lines = text.split('\n')
        if lines[-1] == '':
            lines.pop()
        lines = [line[:-1] if line.endswith('\r') else line for line in lines]

        header_length = 0
        while header_length < len(lines) and _is_header_line(lines[header_length]):
            header_length += 1

        entries = []
        invalid_lines = []
        for line in lines[header_length:]:
            record = Record.parse(line)
            if record is None:
                invalid_lines.append(line)
            else:
                entries.append(record)

        return cls(lines[:header_length], entries, invalid_lines)

    @classmethod
    def read(cls, path: str | Path) -> "LogFile":
        """Read a log file.

        Raises:
            FileNotFoundError: The file does not exist
            IsADirectoryError: The path is a directory
        """
        path = Path(path)
        logger.info(f"Reading log file: {path}")
        with open(path, 'r', encoding='utf-8', newline='') as f:
            log_file = cls.from_text(f.read())
        logger.info(f"Read {len(log_file.entries)} entries from {path} "
                     f"({len(log_file.invalid_lines)} invalid lines)")
        return log_file

    def write(self, path: str | Path) -> None:
        """Write header lines and entries to a new file.

        Raises:
            OutputFileExists: The file already exists
        """
        path = Path(path)
        try:
            f = open(path, 'x', encoding='utf-8', newline='')
        except FileExistsError:
            raise OutputFileExists(path) from None

        with f:
            for line in self.header_lines:
                f.write(line + '\n')
            for record in self.entries:
                f.write(f"{record}\n")
        logger.info(f"Wrote {len(self.entries)} entries to {path}")

    def _check_header(self) -> list[tuple[HeaderWarning, str | None]]:
        if not self.header_lines:
            return [(HeaderWarning.HEADER_NOT_FOUND, None)]

        warnings: list[tuple[HeaderWarning, str | None]] = []
        if len(self.header_lines) != HEADER_LINE_COUNT:
            warnings.append((HeaderWarning.UNEXPECTED_HEADER_LINE_COUNT, str(len(self.header_lines))))

        if self.header_lines[0] != HEADER_VERSION_LINE:
            warnings.append((HeaderWarning.UNEXPECTED_VERSION_STRING, self.header_lines[0]))

        if len(self.header_lines) >= 2 and self.header_lines[1] != HEADER_FILE_FORMAT_LINE:
            warnings.append((HeaderWarning.UNEXPECTED_FILE_FORMAT, self.header_lines[1]))

        if len(self.header_lines) >= HEADER_LINE_COUNT:
            fifth = self.header_lines[4]
            if fifth.rstrip() != '##' and not fifth.startswith(MODIFIED_BY_PREFIX):
                warnings.append((HeaderWarning.UNEXPECTED_5TH_LINE_CONTENT, fifth))

        return warnings

    def warning_report(self) -> list[str] | None:
        """Describe header warnings and invalid lines as printable lines.

        Returns:
            None if the file produced no warnings, otherwise the warning lines
        """
        if not self.header_warnings and not self.invalid_lines:
            return None

        lines = []
        for warning, detail in self.header_warnings:
            if detail is None:
                lines.append(f"Warning: {warning.value}")
            else:
                lines.append(f"Warning: {warning.value}: {detail!r}")

        if self.invalid_lines:
            lines.append(f"Warning: {len(self.invalid_lines)} invalid lines found:")
            for line in self.invalid_lines[:MAX_REPORTED_INVALID_LINES]:
                lines.append(f"  {line!r}")
            remaining = len(self.invalid_lines) - MAX_REPORTED_INVALID_LINES
            if remaining > 0:
                lines.append(f"  ... and {remaining} more")

        return lines
