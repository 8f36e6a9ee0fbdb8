"""
Reconciliation of a fresh scan against an audit index.

Each scanned file gets exactly one outcome; once the scan is over every
manifest entry nothing resolved to is reported as missing.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Iterable, Iterator

from deepsum.audit.index import AuditIndex, DuplicateDigest, ManifestEntry
from deepsum.logging import get_logger

if TYPE_CHECKING:
    from deepsum.scan.walker import TraversedFile

logger = get_logger("audit.reconcile")


class OutcomeKind(str, Enum):
    """Classification tag, as printed in audit output."""

    OK = "OK"
    CHANGED_SIZE = "CHANGED SIZE"
    MOVED = "MOVED"
    CHANGED = "CHANGED"
    NEW = "NEW"
    MISSING = "MISSING"
    DUPLICATE = "DUPLICATE"


@dataclass(frozen=True)
class Outcome:
    """
    Reconciliation result for one scanned file or one manifest entry.

    Only the detail fields relevant to ``kind`` are set.
    """

    kind: OutcomeKind
    digest: str
    path: str

    # Detail
    old_path: str | None = None
    old_digest: str | None = None
    old_size: int | None = None
    new_size: int | None = None

    @classmethod
    def ok(cls, digest: str, path: str) -> Outcome:
        return cls(kind=OutcomeKind.OK, digest=digest, path=path)

    @classmethod
    def size_changed(cls, digest: str, path: str, old_size: int, new_size: int) -> Outcome:
        return cls(
            kind=OutcomeKind.CHANGED_SIZE,
            digest=digest,
            path=path,
            old_size=old_size,
            new_size=new_size,
        )

    @classmethod
    def moved(cls, digest: str, path: str, old_path: str) -> Outcome:
        return cls(kind=OutcomeKind.MOVED, digest=digest, path=path, old_path=old_path)

    @classmethod
    def content_changed(cls, digest: str, path: str, old_digest: str) -> Outcome:
        return cls(kind=OutcomeKind.CHANGED, digest=digest, path=path, old_digest=old_digest)

    @classmethod
    def new(cls, digest: str, path: str, size: int) -> Outcome:
        return cls(kind=OutcomeKind.NEW, digest=digest, path=path, new_size=size)

    @classmethod
    def missing(cls, entry: ManifestEntry) -> Outcome:
        """Missing outcome; old_size stays None when the size was not recorded."""
        return cls(
            kind=OutcomeKind.MISSING,
            digest=entry.digest,
            path=entry.path,
            old_size=entry.expected_size if entry.size_known else None,
        )

    @classmethod
    def duplicate(cls, record: DuplicateDigest) -> Outcome:
        return cls(
            kind=OutcomeKind.DUPLICATE,
            digest=record.digest,
            path=record.path,
            old_path=record.prior_path,
        )


@dataclass(frozen=True)
class PlainScan:
    """Scan without a manifest: every file is simply listed."""

    compat_output: bool = False


@dataclass(frozen=True)
class AuditScan:
    """Scan reconciled against a manifest index."""

    index: AuditIndex


ScanMode = PlainScan | AuditScan


class Reconciler:
    """
    Classifies scanned files against an AuditIndex.

    Files must be fed from a single thread in walk order; the parallel
    walker sorts its results before they get here, so ``matched`` flags are
    only ever written by one consumer.
    """

    def __init__(self, index: AuditIndex):
        self.index = index

    def classify(self, file: TraversedFile) -> Outcome:
        """
        Classify one scanned file and mark the entry it resolves to.

        Digest matches take precedence over path matches.

        Args:
            file: Scanned file; ``size`` must be populated.

        Returns:
            Outcome for this file.
        """
        index = self.index

        entry = index.lookup_by_digest(file.digest)
        if entry is not None:
            index.mark_matched(entry)
            if entry.path != file.path:
                return Outcome.moved(file.digest, file.path, entry.path)
            if not entry.size_known or entry.expected_size == file.size:
                return Outcome.ok(file.digest, file.path)
            return Outcome.size_changed(
                file.digest, file.path, entry.expected_size, file.size
            )

        entry = index.lookup_by_path(file.path)
        if entry is not None:
            index.mark_matched(entry)
            if entry.digest == file.digest:
                # Digest and path lookups disagree; report a change against
                # the entry the path resolves to.
                logger.warning(
                    f"Hash {file.digest} for {file.path} matched by path only, "
                    "reporting as changed"
                )
            return Outcome.content_changed(file.digest, file.path, entry.digest)

        return Outcome.new(file.digest, file.path, file.size)

    def sweep(self) -> Iterator[Outcome]:
        """Yield a MISSING outcome per unmatched entry, in manifest order."""
        for entry in self.index.unmatched_entries():
            yield Outcome.missing(entry)

    def reconcile(self, files: Iterable[TraversedFile]) -> Iterator[Outcome]:
        """Classify every file, then sweep for missing entries."""
        for file in files:
            yield self.classify(file)
        yield from self.sweep()
