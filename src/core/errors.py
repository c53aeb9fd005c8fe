"""Imageset exception hierarchy.

This module defines traceable domain errors with clear boundaries.
Each subsystem raises a specific error type for debuggability.
"""

from __future__ import annotations


class ImagesetError(Exception):
    """Base exception for all Imageset failures."""


class ImagesetConfigError(ImagesetError):
    """Raised for invalid runtime configuration or conversion options."""


class ImagesetManifestError(ImagesetError):
    """Raised when a manifest file cannot be read."""


class ImagesetKeyCapacityError(ImagesetError):
    """Raised when an encoded key or value exceeds its fixed buffer size."""


class ImagesetBackendOpenError(ImagesetError):
    """Raised when a key-value store cannot be created or opened."""


class ImagesetBackendWriteError(ImagesetError):
    """Raised when a put or commit against an open store fails."""


class ImagesetDependencyError(ImagesetError):
    """Raised when an optional storage engine library is missing."""


class ImagesetRunSpecError(ImagesetError):
    """Raised for invalid or unsupported run-spec configuration."""
