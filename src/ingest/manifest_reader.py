"""Manifest readers for conversion input.

This module loads ``path label`` token pairs from plain-text manifests.
Parsing stops quietly at the first pair whose label does not start with
an integer.
"""

from __future__ import annotations

import re
from pathlib import Path
from typing import Iterator, TextIO

from core.constants import MANIFEST_ENCODING, RAW_BYTES_ERRORS
from core.errors import ImagesetManifestError
from core.logging_config import get_logger
from core.types import ManifestRecord

_LOGGER = get_logger(__name__)
_LABEL_PATTERN = re.compile(r"[+-]?[0-9]+")
_TOKEN_SEPARATOR = re.compile(r"[ \t\n\v\f\r]+")
_LABEL_MIN = -(2**31)
_LABEL_MAX = 2**31 - 1


def read_manifest(list_file: str) -> list[ManifestRecord]:
    """Load manifest records from a local file.

    Args:
        list_file: Path to the manifest file.

    Returns:
        Records in file order.

    Raises:
        ImagesetManifestError: If the file cannot be opened or read.
    """
    manifest_path = Path(list_file).expanduser()
    try:
        with manifest_path.open(
            "r", encoding=MANIFEST_ENCODING, errors=RAW_BYTES_ERRORS
        ) as stream:
            return parse_manifest(stream, source=str(manifest_path))
    except OSError as error:
        raise ImagesetManifestError(
            f"Failed to read manifest at {manifest_path}: {error}. "
            "Provide an existing, readable list file."
        ) from error


def parse_manifest(stream: TextIO, source: str = "<stream>") -> list[ManifestRecord]:
    """Parse manifest records from a text stream.

    Tokens are consumed pairwise regardless of line layout. A label is the
    leading ``[+-]digits`` run of its token; any characters left after it
    start the next path. A missing label, a token without a leading integer,
    or a label outside the 32-bit signed range ends the manifest.

    Args:
        stream: Readable text stream.
        source: Display name used in log events.

    Returns:
        Records parsed before end of input or the first malformed pair.
    """
    records: list[ManifestRecord] = []
    tokens = _iter_tokens(stream)
    carried_path: str | None = None
    while True:
        path = carried_path if carried_path is not None else next(tokens, None)
        if path is None:
            break
        raw_label = next(tokens, None)
        label, carried_path = _split_label(raw_label)
        if label is None:
            _log_truncation(source, len(records), path, raw_label)
            break
        records.append(ManifestRecord(path=path, label=label))
    return records


def _iter_tokens(stream: TextIO) -> Iterator[str]:
    for line in stream:
        yield from (token for token in _TOKEN_SEPARATOR.split(line) if token)


def _split_label(raw_label: str | None) -> tuple[int | None, str | None]:
    """Split a label token into its integer and the unread remainder."""
    if raw_label is None:
        return None, None
    match = _LABEL_PATTERN.match(raw_label)
    if match is None:
        return None, None
    label = int(match.group())
    if not _LABEL_MIN <= label <= _LABEL_MAX:
        return None, None
    remainder = raw_label[match.end():]
    return label, remainder or None


def _log_truncation(
    source: str,
    record_count: int,
    path: str,
    raw_label: str | None,
) -> None:
    """Log where a manifest stopped on a malformed trailing pair."""
    _LOGGER.warning(
        "manifest_truncated",
        source=source,
        records_read=record_count,
        path=path,
        raw_label=raw_label,
    )
