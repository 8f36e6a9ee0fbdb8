"""
Run configuration.

A single frozen model carries every knob of a scan; the CLI builds it once.
"""

from __future__ import annotations

import os
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from deepsum.core.digest import HashAlgorithm


def default_workers() -> int:
    """Worker threads for parallel hashing: CPU count capped at 8."""
    return max(1, min(os.cpu_count() or 1, 8))


class ScanConfig(BaseModel):
    """Configuration for a single scan or audit run."""

    model_config = ConfigDict(frozen=True)

    # Input
    path: str = Field(default=".", description="Directory to start traversal from")
    algorithm: HashAlgorithm = Field(
        default=HashAlgorithm.BLAKE3, description="Hash function"
    )
    audit: str | None = Field(
        default=None, description="Manifest to audit the tree against"
    )

    # Output
    compat_output: bool = Field(
        default=False,
        description="Emit <size>,<hash>,<absolute path> lines like hashdeep",
    )
    color: bool = Field(default=True, description="Colourise outcome tags")
    summary: bool = Field(default=False, description="Print outcome counts at the end")

    # Execution
    parallel: bool = Field(default=False, description="Hash files on a thread pool")
    workers: int = Field(default_factory=default_workers, ge=1, description="Worker threads")

    @field_validator("algorithm", mode="before")
    @classmethod
    def _parse_algorithm(cls, value: Any) -> HashAlgorithm:
        return HashAlgorithm.parse(value)

    @property
    def auditing(self) -> bool:
        """Whether this run reconciles against a manifest."""
        return self.audit is not None

    @property
    def needs_size(self) -> bool:
        """File sizes are only collected when something consumes them."""
        return self.compat_output or self.auditing
