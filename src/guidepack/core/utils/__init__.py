"""Shared utilities (I/O, paths, logging) used across guidepack."""
