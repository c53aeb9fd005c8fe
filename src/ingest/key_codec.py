"""Record key and value encoding.

This module derives sortable store keys from record positions and paths,
and fixed-width label payloads. Encoded fields must fit the 256-byte
buffers older readers of these stores expect.
"""

from __future__ import annotations

import posixpath

from core.constants import (
    KEY_BUFFER_SIZE,
    KEY_ENCODING,
    KEY_INDEX_WIDTH,
    RAW_BYTES_ERRORS,
    VALUE_BUFFER_SIZE,
    VALUE_LABEL_WIDTH,
)
from core.errors import ImagesetKeyCapacityError
from core.types import EncodedRecord, ManifestRecord


def encode_record(index: int, record: ManifestRecord) -> EncodedRecord:
    """Encode one manifest record at its 0-based processing position.

    Args:
        index: Position of the record in final processing order.
        record: Manifest record to encode.

    Returns:
        Encoded key-value pair.

    Raises:
        ImagesetKeyCapacityError: If key or value exceeds its buffer size.
    """
    return EncodedRecord(
        key=build_record_key(index, record.path),
        value=build_record_value(record.label),
    )


def build_record_key(index: int, path: str) -> bytes:
    """Build an index-prefixed key such as ``00000001_a/img2``."""
    key_text = f"{index:0{KEY_INDEX_WIDTH}d}_{strip_extension(path)}"
    return _encode_bounded(key_text, KEY_BUFFER_SIZE, "key")


def build_record_value(label: int) -> bytes:
    """Build a zero-padded label payload such as ``0007``."""
    value_text = f"{label:0{VALUE_LABEL_WIDTH}d}"
    return _encode_bounded(value_text, VALUE_BUFFER_SIZE, "value")


def strip_extension(path: str) -> str:
    """Drop the extension of the last path component, dot included.

    Paths without an extension, including dotfiles such as ``.cache``,
    are returned unchanged.
    """
    return posixpath.splitext(path)[0]


def decode_label(value: bytes) -> int:
    """Parse a stored label payload back into its integer label."""
    return int(value.decode(KEY_ENCODING))


def _encode_bounded(text: str, buffer_size: int, field_name: str) -> bytes:
    """Encode text and reject payloads that would not fit a C string buffer.

    One byte of the buffer is reserved for the terminating NUL, so the
    largest accepted payload is ``buffer_size - 1`` bytes. Path bytes that were
    not valid UTF-8 in the manifest are restored unchanged.
    """
    encoded = text.encode(KEY_ENCODING, RAW_BYTES_ERRORS)
    if len(encoded) >= buffer_size:
        raise ImagesetKeyCapacityError(
            f"Encoded record {field_name} is {len(encoded)} bytes, "
            f"exceeding the {buffer_size - 1}-byte limit: {text[:64]!r}... "
            "Shorten manifest paths before converting."
        )
    return encoded
