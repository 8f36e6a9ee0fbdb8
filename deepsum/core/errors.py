"""
Fatal error types.

Recoverable conditions (bad manifest lines, bad size fields, duplicate
digests) are logged as warnings and never raised.
"""

from __future__ import annotations


class DeepsumError(Exception):
    """Base class for errors that abort a run."""

    pass


class UnsupportedAlgorithmError(DeepsumError, ValueError):
    """Raised when a hash algorithm selector is not recognised."""

    def __init__(self, name: str, supported: list[str]):
        super().__init__(
            f"Unknown hash function '{name}'. Supported: {', '.join(supported)}"
        )
        self.name = name
        self.supported = supported


class FileHashError(DeepsumError):
    """Raised when a traversed file cannot be opened, read or stat'ed."""

    def __init__(self, path: str, original_error: OSError | None = None):
        detail = f": {original_error.strerror or original_error}" if original_error else ""
        super().__init__(f"Failed to open file {path}{detail}")
        self.path = path
        self.original_error = original_error


class ManifestError(DeepsumError):
    """Raised when an audit manifest cannot be read."""

    def __init__(self, path: str, original_error: OSError | None = None):
        detail = f": {original_error.strerror or original_error}" if original_error else ""
        super().__init__(f"Failed to open file {path}{detail}")
        self.path = path
        self.original_error = original_error
