"""Output rendering for scan and audit results."""

from deepsum.io.report import (
    TAG_STYLES,
    Reporter,
    RunSummary,
    format_outcome,
    render_outcome,
)

__all__ = [
    "TAG_STYLES",
    "Reporter",
    "RunSummary",
    "format_outcome",
    "render_outcome",
]
