"""Record type for a single hashdeep log entry."""

from dataclasses import dataclass


HASH_FIELD_COUNT = 3
"""Number of comma-separated fields before the path (size, md5, sha256)."""


@dataclass(frozen=True)
class Record:
    """One parsed hashdeep log line: a digest key and the file path it was recorded for.

    Attributes:
        digest_key: The first HASH_FIELD_COUNT fields of the line, rejoined with commas
                    (e.g. "4,aa,bb"). Two records with equal digest keys have the same content.
        path: Everything after the digest fields. May itself contain commas.

    Records are immutable, so partition results can share them with the lists they came from.
    """

    digest_key: str
    path: str

    @classmethod
    def parse(cls, line: str) -> "Record | None":
        """Parse a log line into a Record.

        Args:
            line: A log line without its trailing newline

        Returns:
            The parsed Record, or None if the line has fewer than HASH_FIELD_COUNT + 1 fields,
            any digest field is empty, or the path is empty
        """
        sections = line.split(',')
        if len(sections) < HASH_FIELD_COUNT + 1:
            return None

        digest_fields = sections[:HASH_FIELD_COUNT]
        if any(not field for field in digest_fields):
            return None

        path = ','.join(sections[HASH_FIELD_COUNT:])
        if not path:
            return None

        return cls(','.join(digest_fields), path)

    def sort_key(self) -> tuple[str, str]:
        """Total ordering key: path first, then digest key."""
        return self.path, self.digest_key

    def __str__(self) -> str:
        return f"{self.digest_key},{self.path}"
