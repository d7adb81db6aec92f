"""Fatal load errors raised while building the recommendation index."""

from __future__ import annotations


class IndexLoadError(RuntimeError):
    """Raised when a source artifact cannot be read or parsed as a whole."""


class SimilarityOrderError(IndexLoadError):
    """Raised in strict mode when a similarity list is not sorted by score."""
