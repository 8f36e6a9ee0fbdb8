"""
Scan runner.

Builds the scan mode from configuration, drives the walker, and hands every
result to the reporter.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from deepsum.audit.index import AuditIndex
from deepsum.audit.manifest import read_manifest
from deepsum.audit.reconcile import AuditScan, Outcome, PlainScan, Reconciler, ScanMode
from deepsum.core.config import ScanConfig
from deepsum.io.report import Reporter, RunSummary
from deepsum.logging import get_logger
from deepsum.scan.walker import create_walker

logger = get_logger("runner")


@dataclass
class ScanRunner:
    """
    Orchestrates one scan or audit.

    The audit index is built completely in prepare() before any file is
    hashed.
    """

    config: ScanConfig = field(default_factory=ScanConfig)
    reporter: Reporter = field(default_factory=Reporter)

    # Runtime state
    mode: ScanMode | None = None
    summary: RunSummary = field(default_factory=RunSummary)

    def prepare(self) -> ScanMode:
        """
        Resolve the scan mode.

        In audit mode the manifest is read and indexed, and dropped
        duplicate digests are reported.

        Returns:
            PlainScan or AuditScan.

        Raises:
            ManifestError: If the manifest cannot be read.
        """
        if self.config.audit is None:
            self.mode = PlainScan(compat_output=self.config.compat_output)
            return self.mode

        self.reporter.message(f"Reading hashes from {self.config.audit}")
        records = read_manifest(self.config.audit)
        index = AuditIndex.from_records(records)
        logger.info(f"Indexed {len(index)} manifest entries")

        for duplicate in index.duplicates:
            outcome = Outcome.duplicate(duplicate)
            self.summary.record(outcome)
            self.reporter.outcome(outcome)

        self.mode = AuditScan(index)
        return self.mode

    def run(self) -> RunSummary:
        """
        Execute the scan.

        Returns:
            RunSummary with file and outcome counts.

        Raises:
            FileHashError: On the first file that cannot be hashed.
        """
        mode = self.mode if self.mode is not None else self.prepare()
        walker = create_walker(self.config)
        files = walker.walk(self.config.path)

        if isinstance(mode, PlainScan):
            for file in files:
                self.summary.files += 1
                self.reporter.file(file, mode.compat_output)
            return self.summary

        reconciler = Reconciler(mode.index)
        for file in files:
            self.summary.files += 1
            outcome = reconciler.classify(file)
            self.summary.record(outcome)
            self.reporter.outcome(outcome)

        for outcome in reconciler.sweep():
            self.summary.record(outcome)
            self.reporter.outcome(outcome)

        return self.summary
