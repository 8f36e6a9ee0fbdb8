"""Directory traversal and per-file hashing."""

from deepsum.scan.walker import (
    ParallelWalker,
    SequentialWalker,
    TraversedFile,
    Walker,
    create_walker,
    iter_file_paths,
    walk_key,
)

__all__ = [
    "ParallelWalker",
    "SequentialWalker",
    "TraversedFile",
    "Walker",
    "create_walker",
    "iter_file_paths",
    "walk_key",
]
