"""Core constants used across Imageset modules.

This module centralizes storage, encoding, and batching constants.
Keeping values here avoids magic literals in business logic.
"""

from __future__ import annotations

LEVELDB_BACKEND = "leveldb"
LMDB_BACKEND = "lmdb"
SUPPORTED_BACKENDS = (LEVELDB_BACKEND, LMDB_BACKEND)
DEFAULT_BACKEND = LMDB_BACKEND
COMMIT_BATCH_SIZE = 1000
KEY_BUFFER_SIZE = 256
VALUE_BUFFER_SIZE = 256
KEY_INDEX_WIDTH = 8
VALUE_LABEL_WIDTH = 4
KEY_ENCODING = "utf-8"
MANIFEST_ENCODING = "utf-8"
RAW_BYTES_ERRORS = "surrogateescape"
LEVELDB_WRITE_BUFFER_SIZE = 268435456
DEFAULT_LMDB_MAP_SIZE = 1099511627776
LMDB_DIR_MODE = 0o744
LMDB_FILE_MODE = 0o664
DEFAULT_RANDOM_SEED = 42
DEFAULT_INSPECT_LIMIT = 10
