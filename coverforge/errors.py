"""
Exception types raised by the cover compositor.
"""

from __future__ import annotations


class CoverError(Exception):
    """Base class for compositor errors."""


class AssetLoadError(CoverError):
    """Raised when a background, logo or font file cannot be loaded."""

    def __init__(self, kind: str, path: str, reason: str):
        super().__init__(f"Failed to load {kind} from {path}: {reason}")
        self.kind = kind
        self.path = path
        self.reason = reason


class InvalidPresetError(CoverError, ValueError):
    """Raised when a persisted preset record is malformed."""
