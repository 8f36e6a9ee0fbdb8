"""
Manifest parsing.

A manifest is the text output of an earlier scan. Two line shapes are
accepted, tried in this order:

    <digest><whitespace><path>
    <size>,<digest>,<path>

A two-field ``<digest>,<path>`` line is also accepted with an unknown size.
Anything else is reported and skipped; one bad line never rejects the file.
"""

from __future__ import annotations

import re
from pathlib import Path
from typing import TYPE_CHECKING, Iterable, Iterator

from pydantic import BaseModel, ConfigDict, Field

from deepsum.core.errors import ManifestError
from deepsum.logging import get_logger

if TYPE_CHECKING:
    from deepsum.scan.walker import TraversedFile

logger = get_logger("audit.manifest")

_WHITESPACE = re.compile(r"\s+")
_SIZE = re.compile(r"[0-9]+")


class ManifestRecord(BaseModel):
    """One successfully parsed manifest line."""

    model_config = ConfigDict(frozen=True)

    digest: str = Field(description="Hex digest as recorded")
    path: str = Field(description="Path as recorded, relative or absolute")
    size: int = Field(default=0, ge=0, description="Recorded size, 0 if unknown")
    line_number: int = Field(default=0, ge=0, description="1-based source line")


def _parse_size(field: str) -> int:
    """Parse a size field, falling back to 0 (unknown) with a warning."""
    text = field.strip()
    if _SIZE.fullmatch(text):
        return int(text)
    logger.warning(f"Cannot parse {text} into a size, setting to 0")
    return 0


def parse_manifest_line(line: str, line_number: int = 0) -> ManifestRecord | None:
    """
    Parse a single manifest line.

    Args:
        line: Raw line text, with or without the trailing newline.
        line_number: 1-based line number used in warnings.

    Returns:
        ManifestRecord, or None for blank and unparsable lines.
    """
    text = line.strip()
    if not text:
        return None

    digest = path = ""
    size = 0

    parts = _WHITESPACE.split(text, maxsplit=1)
    if len(parts) == 2:
        digest, path = parts[0].strip(), parts[1].strip()
    else:
        fields = text.split(",")
        if len(fields) == 3:
            size = _parse_size(fields[0])
            digest, path = fields[1].strip(), fields[2].strip()
        elif len(fields) == 2:
            digest, path = fields[0].strip(), fields[1].strip()

    if not digest or not path:
        logger.warning(f"Failed to parse line {line_number}: {text}")
        return None

    return ManifestRecord(digest=digest, path=path, size=size, line_number=line_number)


def parse_manifest_lines(lines: Iterable[str]) -> Iterator[ManifestRecord]:
    """Parse lines, skipping blank and unparsable ones."""
    for line_number, line in enumerate(lines, 1):
        record = parse_manifest_line(line, line_number)
        if record is not None:
            yield record


def parse_manifest_text(text: str) -> list[ManifestRecord]:
    """Parse a whole manifest held in memory."""
    return list(parse_manifest_lines(text.splitlines()))


def read_manifest(path: str | Path) -> list[ManifestRecord]:
    """
    Read and parse a manifest file.

    Undecodable bytes are kept as surrogate escapes so recorded paths still
    compare equal to the strings the filesystem walk produces.

    Args:
        path: Manifest file path.

    Returns:
        Parsed records in file order.

    Raises:
        ManifestError: If the file cannot be opened or read.
    """
    try:
        with open(path, "r", encoding="utf-8", errors="surrogateescape", newline="") as f:
            return list(parse_manifest_lines(f))
    except OSError as e:
        raise ManifestError(str(path), e) from e


def format_manifest_line(file: TraversedFile, compat_output: bool = False) -> str:
    """
    Render a scanned file as a manifest line.

    Plain lines are ``<digest>  <path>``; compatibility lines are
    ``<size>,<digest>,<canonical path>``. Both shapes read back with
    parse_manifest_line().
    """
    if compat_output:
        return f"{file.size},{file.digest},{file.canonical_path or file.path}"
    return f"{file.digest}  {file.path}"
