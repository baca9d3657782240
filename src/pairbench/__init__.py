"""pairbench: pairwise micro-benchmark comparison of two routines."""

__version__ = "0.1.0"
