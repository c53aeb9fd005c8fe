"""Public SDK surface for Imageset.

This module provides a stable import path for library users.
It re-exports the primary client and typed option models.
"""

from __future__ import annotations

from core.config import ImagesetConfig
from core.errors import ImagesetError
from core.types import (
    ConversionResult,
    ConvertOptions,
    ManifestRecord,
    StoredRecord,
    StoreSummary,
)
from ingest.key_codec import decode_label, encode_record
from ingest.manifest_reader import read_manifest
from ingest.pipeline import convert_imageset
from store.imageset_sdk import ImagesetClient

__all__ = [
    "ConversionResult",
    "ConvertOptions",
    "ImagesetClient",
    "ImagesetConfig",
    "ImagesetError",
    "ManifestRecord",
    "StoreSummary",
    "StoredRecord",
    "convert_imageset",
    "decode_label",
    "encode_record",
    "read_manifest",
]
