"""
Audit index: manifest entries keyed by digest and by path.

Entries live in one list; the two lookup dicts map a key to a position in
that list, so an entry is never stored twice and a reference taken from a
lookup stays valid for the whole scan.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Iterable, Iterator

from deepsum.logging import get_logger

if TYPE_CHECKING:
    from deepsum.audit.manifest import ManifestRecord

logger = get_logger("audit.index")


@dataclass
class ManifestEntry:
    """
    One manifest line as the reconciler sees it.

    ``matched`` flips to True the first time a scanned file resolves to
    this entry and never goes back.
    """

    digest: str
    path: str
    expected_size: int = 0
    matched: bool = False

    @property
    def size_known(self) -> bool:
        """Size 0 means the manifest did not record one."""
        return self.expected_size != 0


@dataclass(frozen=True)
class DuplicateDigest:
    """A manifest record dropped because its digest was already indexed."""

    digest: str
    path: str
    prior_path: str


@dataclass
class AuditIndex:
    """
    Manifest entries indexed by digest and by path.

    Digest keys are unique: a second record with a known digest is
    reported as a DuplicateDigest and not stored. Path keys keep pointing
    at the first entry recorded for that path.
    """

    entries: list[ManifestEntry] = field(default_factory=list)
    duplicates: list[DuplicateDigest] = field(default_factory=list)
    _by_digest: dict[str, int] = field(default_factory=dict, init=False, repr=False)
    _by_path: dict[str, int] = field(default_factory=dict, init=False, repr=False)

    @classmethod
    def from_records(cls, records: Iterable[ManifestRecord]) -> AuditIndex:
        """
        Build an index from parsed manifest records.

        Args:
            records: Records in manifest order.

        Returns:
            Populated AuditIndex; duplicates are available on .duplicates.
        """
        index = cls()
        for record in records:
            index.insert(record.digest, record.path, record.size)
        return index

    def insert(self, digest: str, path: str, size: int = 0) -> DuplicateDigest | None:
        """
        Add a manifest entry.

        Args:
            digest: Hex digest as recorded.
            path: Path as recorded.
            size: Recorded size, 0 if unknown.

        Returns:
            DuplicateDigest if the digest was already indexed (the record is
            dropped), otherwise None.
        """
        prior = self.lookup_by_digest(digest)
        if prior is not None:
            duplicate = DuplicateDigest(digest=digest, path=path, prior_path=prior.path)
            self.duplicates.append(duplicate)
            logger.info(f"Duplicate hash {digest} for {path}, keeping {prior.path}")
            return duplicate

        position = len(self.entries)
        self.entries.append(ManifestEntry(digest=digest, path=path, expected_size=size))
        self._by_digest[digest] = position
        if path in self._by_path:
            logger.warning(
                f"Path {path} listed more than once, path lookups use the first entry"
            )
        else:
            self._by_path[path] = position
        return None

    def lookup_by_digest(self, digest: str) -> ManifestEntry | None:
        """Exact-match lookup by digest."""
        position = self._by_digest.get(digest)
        return self.entries[position] if position is not None else None

    def lookup_by_path(self, path: str) -> ManifestEntry | None:
        """Exact-match lookup by recorded path; no normalisation is applied."""
        position = self._by_path.get(path)
        return self.entries[position] if position is not None else None

    def mark_matched(self, entry: ManifestEntry) -> None:
        """Record that a scanned file resolved to this entry."""
        entry.matched = True

    def unmatched_entries(self) -> list[ManifestEntry]:
        """Entries no scanned file resolved to, in manifest order."""
        return [entry for entry in self.entries if not entry.matched]

    def __len__(self) -> int:
        return len(self.entries)

    def __iter__(self) -> Iterator[ManifestEntry]:
        return iter(self.entries)
