"""Read project plans from disk or a stream as plain text.

Only plain-text formats are supported. JSON plans are read as raw text and
analyzed like any other document; they are not parsed.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import BinaryIO

from permrisk.exceptions import ExtractionError

logger = logging.getLogger(__name__)

SUPPORTED_SUFFIXES: tuple[str, ...] = (".md", ".markdown", ".txt", ".json")

# Largest plan accepted, in bytes.
MAX_INPUT_BYTES = 5 * 1024 * 1024


def _decode(data: bytes, source: str) -> str:
    try:
        return data.decode("utf-8-sig")
    except UnicodeDecodeError as exc:
        raise ExtractionError(f"{source} is not valid UTF-8 text") from exc


def read_plan(path: str | Path) -> str:
    """Read a project plan file as text.

    Args:
        path: A ``.md``, ``.markdown``, ``.txt`` or ``.json`` file.

    Returns:
        The decoded file content.

    Raises:
        ExtractionError: If the file is missing, unsupported, larger than
            ``MAX_INPUT_BYTES`` or not UTF-8.
    """
    path = Path(path)
    if path.suffix.lower() not in SUPPORTED_SUFFIXES:
        raise ExtractionError(
            f"Unsupported file type {path.suffix or '(none)'!r}; expected one of "
            + ", ".join(SUPPORTED_SUFFIXES)
        )
    try:
        size = path.stat().st_size
        if size > MAX_INPUT_BYTES:
            raise ExtractionError(
                f"{path.name} is {size} bytes; the limit is {MAX_INPUT_BYTES}"
            )
        data = path.read_bytes()
    except FileNotFoundError as exc:
        raise ExtractionError(f"File not found: {path}") from exc
    except OSError as exc:
        raise ExtractionError(f"Could not read {path}: {exc}") from exc

    logger.debug("Read %d bytes from %s", len(data), path)
    return _decode(data, path.name)


def read_plan_stream(stream: BinaryIO, name: str = "<stdin>") -> str:
    """Read a project plan from a binary stream under the same size limit."""
    data = stream.read(MAX_INPUT_BYTES + 1)
    if len(data) > MAX_INPUT_BYTES:
        raise ExtractionError(f"{name} exceeds the {MAX_INPUT_BYTES} byte limit")
    return _decode(data, name)
