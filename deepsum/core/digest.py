"""
Pluggable digest providers.

Every supported algorithm is exposed through the same small capability
interface so the scanner never cares which one is active.
"""

from __future__ import annotations

import hashlib
from enum import Enum
from pathlib import Path
from typing import Any, Callable, Protocol

import blake3
import xxhash

from deepsum.core.errors import FileHashError, UnsupportedAlgorithmError

CHUNK_SIZE = 1024 * 1024


class HashAlgorithm(str, Enum):
    """Hash algorithm selector."""

    SHA2 = "sha2"
    SHA3 = "sha3"
    BLAKE3 = "blake3"
    XXH3 = "xxh3"

    @classmethod
    def names(cls) -> list[str]:
        """Selector names in declaration order."""
        return [member.value for member in cls]

    @classmethod
    def parse(cls, name: str | HashAlgorithm) -> HashAlgorithm:
        """
        Resolve a selector string.

        Args:
            name: Algorithm name such as "sha2" or an existing member.

        Returns:
            The matching HashAlgorithm.

        Raises:
            UnsupportedAlgorithmError: If the name is not supported.
        """
        if isinstance(name, cls):
            return name
        try:
            return cls(str(name).strip().lower())
        except ValueError:
            raise UnsupportedAlgorithmError(str(name), cls.names()) from None


class DigestProvider(Protocol):
    """Incremental digest computation."""

    algorithm: HashAlgorithm

    def update(self, data: bytes) -> None:
        ...

    def finalize(self) -> bytes:
        ...

    def hex(self) -> str:
        ...


class LibraryDigest:
    """
    Adapter over hashlib-style objects (hashlib, blake3, xxhash).

    All three libraries expose update()/digest()/hexdigest(), so a single
    adapter covers every algorithm.
    """

    def __init__(self, algorithm: HashAlgorithm, state: Any):
        self.algorithm = algorithm
        self._state = state

    def update(self, data: bytes) -> None:
        self._state.update(data)

    def finalize(self) -> bytes:
        return self._state.digest()

    def hex(self) -> str:
        return self._state.hexdigest()


_FACTORIES: dict[HashAlgorithm, Callable[[], Any]] = {
    HashAlgorithm.SHA2: hashlib.sha256,
    HashAlgorithm.SHA3: hashlib.sha3_256,
    HashAlgorithm.BLAKE3: blake3.blake3,
    HashAlgorithm.XXH3: xxhash.xxh3_128,
}


def new_digest(algorithm: HashAlgorithm | str) -> DigestProvider:
    """Create a fresh digest provider for the given algorithm."""
    algorithm = HashAlgorithm.parse(algorithm)
    return LibraryDigest(algorithm, _FACTORIES[algorithm]())


def hash_bytes(data: bytes, algorithm: HashAlgorithm | str) -> str:
    """
    Compute the hex digest of in-memory content.

    Example:
        >>> hash_bytes(b"abc", "sha2")[:16]
        'ba7816bf8f01cfea'
    """
    digest = new_digest(algorithm)
    digest.update(data)
    return digest.hex()


def hash_file(path: str | Path, algorithm: HashAlgorithm | str) -> str:
    """
    Compute the hex digest of a file's full content.

    Args:
        path: Path to the file.
        algorithm: Algorithm to use.

    Returns:
        Lowercase hex digest.

    Raises:
        FileHashError: If the file cannot be opened or read.
    """
    digest = new_digest(algorithm)
    try:
        with open(path, "rb") as f:
            for chunk in iter(lambda: f.read(CHUNK_SIZE), b""):
                digest.update(chunk)
    except OSError as e:
        raise FileHashError(str(path), e) from e
    return digest.hex()
