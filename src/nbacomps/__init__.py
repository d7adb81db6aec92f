"""Similar-player lookups over precomputed NBA similarity tables."""

__version__ = "0.1.0"
