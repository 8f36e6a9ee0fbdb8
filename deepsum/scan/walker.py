"""
Directory traversal and per-file hashing.

Two strategies produce identical, deterministically ordered results:
SequentialWalker hashes files one by one in walk order, ParallelWalker
hashes them on a thread pool and re-sorts before handing them on.
"""

from __future__ import annotations

import errno
import os
import stat
from abc import ABC, abstractmethod
from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass
from typing import TYPE_CHECKING, Iterator

from deepsum.core.digest import HashAlgorithm, hash_file
from deepsum.core.errors import FileHashError
from deepsum.logging import get_logger

if TYPE_CHECKING:
    from deepsum.core.config import ScanConfig

logger = get_logger("scan.walker")


@dataclass(frozen=True)
class TraversedFile:
    """A regular file seen during the current scan."""

    path: str
    digest: str
    size: int = 0
    canonical_path: str | None = None


def walk_key(path: str) -> tuple[str, ...]:
    """
    Ordering key for walk output.

    Comparing component tuples is the same as sorting names at every
    directory level, so both strategies agree on the order.
    """
    return tuple(path.split(os.sep))


def _walk_dir(directory: str) -> Iterator[str]:
    try:
        with os.scandir(directory) as it:
            entries = sorted(it, key=lambda e: e.name)
    except OSError as e:
        logger.warning(f"Skipping directory {directory}: {e.strerror or e}")
        return

    for entry in entries:
        try:
            if entry.is_dir(follow_symlinks=False):
                yield from _walk_dir(entry.path)
            elif entry.is_file():
                yield entry.path
        except OSError as e:
            logger.warning(f"Skipping entry {entry.path}: {e.strerror or e}")


def iter_file_paths(root: str) -> Iterator[str]:
    """
    Yield regular files under root in deterministic order.

    Directory symlinks are not followed. A root that is itself a file
    yields just that file.

    Args:
        root: Starting path; yielded paths are joined onto it verbatim.

    Raises:
        FileHashError: If root cannot be stat'ed or is neither a regular file
            nor a directory (a dangling symlink, a FIFO, a device).
    """
    try:
        mode = os.stat(root).st_mode
    except OSError as e:
        raise FileHashError(root, e) from e

    if stat.S_ISDIR(mode):
        yield from _walk_dir(root)
    elif stat.S_ISREG(mode):
        yield root
    else:
        raise FileHashError(
            root, OSError(errno.EINVAL, "Not a regular file or directory", root)
        )


class Walker(ABC):
    """Base class for traversal strategies."""

    def __init__(
        self,
        algorithm: HashAlgorithm,
        with_size: bool = False,
        with_canonical: bool = False,
    ):
        """
        Initialize walker.

        Args:
            algorithm: Hash function applied to every file.
            with_size: Collect file sizes (audit and compatibility output).
            with_canonical: Resolve canonical absolute paths (compatibility output).
        """
        self.algorithm = HashAlgorithm.parse(algorithm)
        self.with_size = with_size
        self.with_canonical = with_canonical

    def scan_file(self, path: str) -> TraversedFile:
        """
        Hash one file start to finish.

        Raises:
            FileHashError: If the file cannot be read or stat'ed.
        """
        digest = hash_file(path, self.algorithm)

        size = 0
        if self.with_size:
            try:
                size = os.stat(path).st_size
            except OSError as e:
                raise FileHashError(path, e) from e

        canonical_path = os.path.realpath(path) if self.with_canonical else None
        return TraversedFile(path=path, digest=digest, size=size, canonical_path=canonical_path)

    @abstractmethod
    def walk(self, root: str) -> Iterator[TraversedFile]:
        """Yield hashed files under root in walk order."""
        pass


class SequentialWalker(Walker):
    """Single-threaded walk; files are hashed as they are discovered."""

    def walk(self, root: str) -> Iterator[TraversedFile]:
        for path in iter_file_paths(root):
            yield self.scan_file(path)


class ParallelWalker(Walker):
    """
    Thread-pool walk.

    Results are buffered until every file is hashed, then sorted with
    walk_key(); the first failure cancels pending work and propagates.
    """

    def __init__(
        self,
        algorithm: HashAlgorithm,
        with_size: bool = False,
        with_canonical: bool = False,
        workers: int = 4,
    ):
        super().__init__(algorithm, with_size=with_size, with_canonical=with_canonical)
        if workers < 1:
            raise ValueError("workers must be at least 1")
        self.workers = workers

    def walk(self, root: str) -> Iterator[TraversedFile]:
        paths = list(iter_file_paths(root))
        logger.debug(f"Hashing {len(paths)} files with {self.workers} workers")

        results: list[TraversedFile] = []
        with ThreadPoolExecutor(max_workers=self.workers) as executor:
            futures = [executor.submit(self.scan_file, path) for path in paths]
            try:
                for future in as_completed(futures):
                    results.append(future.result())
            except BaseException:
                for future in futures:
                    future.cancel()
                raise

        results.sort(key=lambda f: walk_key(f.path))
        yield from results


def create_walker(config: ScanConfig) -> Walker:
    """
    Create the walker a configuration asks for.

    Args:
        config: Scan configuration.

    Returns:
        SequentialWalker or ParallelWalker.
    """
    if config.parallel:
        return ParallelWalker(
            config.algorithm,
            with_size=config.needs_size,
            with_canonical=config.compat_output,
            workers=config.workers,
        )
    return SequentialWalker(
        config.algorithm,
        with_size=config.needs_size,
        with_canonical=config.compat_output,
    )
