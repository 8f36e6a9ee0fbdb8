"""Core utilities: digest providers, configuration, errors."""

from deepsum.core.config import ScanConfig
from deepsum.core.digest import (
    DigestProvider,
    HashAlgorithm,
    hash_bytes,
    hash_file,
    new_digest,
)
from deepsum.core.errors import (
    DeepsumError,
    FileHashError,
    ManifestError,
    UnsupportedAlgorithmError,
)

__all__ = [
    "ScanConfig",
    "DigestProvider",
    "HashAlgorithm",
    "hash_bytes",
    "hash_file",
    "new_digest",
    "DeepsumError",
    "FileHashError",
    "ManifestError",
    "UnsupportedAlgorithmError",
]
