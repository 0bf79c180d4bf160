"""Persistent registry of countdown timers."""

__version__ = "0.1.0"
