"""Audit mode: manifest parsing, the dual-keyed index, and reconciliation."""

from deepsum.audit.index import AuditIndex, DuplicateDigest, ManifestEntry
from deepsum.audit.manifest import (
    ManifestRecord,
    format_manifest_line,
    parse_manifest_line,
    parse_manifest_lines,
    parse_manifest_text,
    read_manifest,
)
from deepsum.audit.reconcile import (
    AuditScan,
    Outcome,
    OutcomeKind,
    PlainScan,
    Reconciler,
    ScanMode,
)

__all__ = [
    "AuditIndex",
    "DuplicateDigest",
    "ManifestEntry",
    "ManifestRecord",
    "format_manifest_line",
    "parse_manifest_line",
    "parse_manifest_lines",
    "parse_manifest_text",
    "read_manifest",
    "AuditScan",
    "Outcome",
    "OutcomeKind",
    "PlainScan",
    "Reconciler",
    "ScanMode",
]
