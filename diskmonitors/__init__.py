"""Disk-head scheduling monitors: SCAN with an intermediary driver, C-SCAN separate and nested."""

__version__ = "0.1.0"
__all__ = ["intermediary", "separate", "nested"]