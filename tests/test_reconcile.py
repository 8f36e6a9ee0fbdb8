"""Tests for audit reconciliation."""

import logging

import pytest

from deepsum.audit.index import AuditIndex, DuplicateDigest
from deepsum.audit.manifest import parse_manifest_text
from deepsum.audit.reconcile import (
    AuditScan,
    Outcome,
    OutcomeKind,
    PlainScan,
    Reconciler,
)
from deepsum.scan.walker import TraversedFile


def build_reconciler(manifest: str) -> Reconciler:
    """Create a reconciler over a manifest held in memory."""
    return Reconciler(AuditIndex.from_records(parse_manifest_text(manifest)))


class TestClassify:
    """Tests for classifying individual files."""

    def test_unchanged(self):
        """Same digest and path is OK."""
        reconciler = build_reconciler("deadbeef  a.txt\n")
        outcome = reconciler.classify(TraversedFile(path="a.txt", digest="deadbeef", size=4))
        assert outcome == Outcome.ok("deadbeef", "a.txt")

    def test_unchanged_with_matching_size(self):
        """A recorded size that matches is still OK."""
        reconciler = build_reconciler("100,deadbeef,a.txt\n")
        outcome = reconciler.classify(TraversedFile(path="a.txt", digest="deadbeef", size=100))
        assert outcome.kind == OutcomeKind.OK

    def test_size_changed(self):
        """Same digest and path but a different recorded size."""
        reconciler = build_reconciler("100,deadbeef,a.txt\n")
        outcome = reconciler.classify(TraversedFile(path="a.txt", digest="deadbeef", size=150))
        assert outcome.kind == OutcomeKind.CHANGED_SIZE
        assert (outcome.old_size, outcome.new_size) == (100, 150)

    def test_moved(self):
        """Same digest at a new path is MOVED from the old path."""
        reconciler = build_reconciler("deadbeef  a.txt\n")
        outcome = reconciler.classify(TraversedFile(path="b.txt", digest="deadbeef", size=4))
        assert outcome.kind == OutcomeKind.MOVED
        assert outcome.old_path == "a.txt"

    def test_digest_match_wins_over_path(self):
        """Digest lookup is tried before path lookup."""
        reconciler = build_reconciler("deadbeef  a.txt\ncafebabe  b.txt\n")
        outcome = reconciler.classify(TraversedFile(path="b.txt", digest="deadbeef", size=4))
        assert outcome.kind == OutcomeKind.MOVED
        assert reconciler.index.lookup_by_path("b.txt").matched is False

    def test_content_changed(self):
        """Known path with a new digest is CHANGED."""
        reconciler = build_reconciler("deadbeef  a.txt\n")
        outcome = reconciler.classify(TraversedFile(path="a.txt", digest="cafebabe", size=4))
        assert outcome.kind == OutcomeKind.CHANGED
        assert outcome.old_digest == "deadbeef"
        assert reconciler.index.lookup_by_path("a.txt").matched is True

    def test_new(self):
        """Unknown digest and path is NEW."""
        reconciler = build_reconciler("deadbeef  a.txt\n")
        outcome = reconciler.classify(TraversedFile(path="n.txt", digest="0badf00d", size=42))
        assert outcome == Outcome.new("0badf00d", "n.txt", 42)

    def test_path_only_match_with_same_digest(self, caplog, monkeypatch):
        """A path-only match with an identical digest is reported as CHANGED."""
        reconciler = build_reconciler("deadbeef  a.txt\n")
        monkeypatch.setattr(reconciler.index, "lookup_by_digest", lambda digest: None)

        with caplog.at_level(logging.WARNING, logger="deepsum"):
            outcome = reconciler.classify(TraversedFile(path="a.txt", digest="deadbeef", size=4))

        assert outcome.kind == OutcomeKind.CHANGED
        assert outcome.old_digest == "deadbeef"
        assert "matched by path only" in caplog.text


class TestSweep:
    """Tests for the missing-entry sweep."""

    def test_missing_unknown_size(self):
        """Entries never matched are MISSING."""
        reconciler = build_reconciler("cafebabe  z.txt\n")
        outcomes = list(reconciler.sweep())
        assert outcomes == [Outcome(kind=OutcomeKind.MISSING, digest="cafebabe", path="z.txt")]
        assert outcomes[0].old_size is None

    def test_missing_known_size(self):
        """Recorded sizes are carried on MISSING outcomes."""
        reconciler = build_reconciler("10,cafebabe,z.txt\n")
        (outcome,) = reconciler.sweep()
        assert outcome.old_size == 10

    def test_missing_in_manifest_order(self):
        """One MISSING per unmatched entry, in manifest order."""
        reconciler = build_reconciler("cccc  c.txt\naaaa  a.txt\nbbbb  b.txt\n")
        reconciler.classify(TraversedFile(path="a.txt", digest="aaaa"))
        assert [o.path for o in reconciler.sweep()] == ["c.txt", "b.txt"]


class TestReconcile:
    """End-to-end reconciliation over a file sequence."""

    def test_full_audit(self):
        """Every category appears exactly where expected."""
        manifest = (
            "1111  same.txt\n"
            "2222  old_name.txt\n"
            "3333  edited.txt\n"
            "5,4444,sized.txt\n"
            "9999  gone.txt\n"
        )
        files = [
            TraversedFile(path="edited.txt", digest="3434", size=1),
            TraversedFile(path="fresh.txt", digest="5555", size=7),
            TraversedFile(path="new_name.txt", digest="2222", size=1),
            TraversedFile(path="same.txt", digest="1111", size=1),
            TraversedFile(path="sized.txt", digest="4444", size=6),
        ]
        outcomes = list(build_reconciler(manifest).reconcile(files))

        assert [(o.kind, o.path) for o in outcomes] == [
            (OutcomeKind.CHANGED, "edited.txt"),
            (OutcomeKind.NEW, "fresh.txt"),
            (OutcomeKind.MOVED, "new_name.txt"),
            (OutcomeKind.OK, "same.txt"),
            (OutcomeKind.CHANGED_SIZE, "sized.txt"),
            (OutcomeKind.MISSING, "gone.txt"),
        ]

    def test_duplicate_manifest_digest(self):
        """With duplicate digests the first entry answers digest lookups."""
        reconciler = build_reconciler("deadbeef,a.txt\ndeadbeef,b.txt\n")
        assert reconciler.index.duplicates == [
            DuplicateDigest(digest="deadbeef", path="b.txt", prior_path="a.txt")
        ]
        files = [
            TraversedFile(path="a.txt", digest="deadbeef"),
            TraversedFile(path="b.txt", digest="deadbeef"),
        ]
        outcomes = list(reconciler.reconcile(files))
        assert [o.kind for o in outcomes] == [OutcomeKind.OK, OutcomeKind.MOVED]
        assert outcomes[1].old_path == "a.txt"

    def test_empty_manifest(self):
        """Without entries every file is NEW and nothing is missing."""
        files = [TraversedFile(path="a", digest="aa", size=1)]
        outcomes = list(Reconciler(AuditIndex()).reconcile(files))
        assert [o.kind for o in outcomes] == [OutcomeKind.NEW]


class TestOutcome:
    """Tests for outcome constructors and scan modes."""

    def test_tags(self):
        """Tags match the audit output vocabulary."""
        assert [k.value for k in OutcomeKind] == [
            "OK", "CHANGED SIZE", "MOVED", "CHANGED", "NEW", "MISSING", "DUPLICATE",
        ]

    def test_duplicate_outcome(self):
        """Duplicate outcomes name the prior path."""
        outcome = Outcome.duplicate(DuplicateDigest("dd", "b.txt", "a.txt"))
        assert outcome.kind == OutcomeKind.DUPLICATE
        assert outcome.old_path == "a.txt"

    def test_outcome_frozen(self):
        """Outcomes are immutable."""
        outcome = Outcome.ok("dd", "a.txt")
        with pytest.raises(AttributeError):
            outcome.path = "b.txt"

    def test_scan_modes(self):
        """Scan modes carry their payload."""
        index = AuditIndex()
        assert AuditScan(index).index is index
        assert PlainScan().compat_output is False
        assert PlainScan(compat_output=True).compat_output is True
