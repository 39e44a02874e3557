"""Practical Music Search - interactive terminal client for MPD."""

__version__ = "0.1.0"
