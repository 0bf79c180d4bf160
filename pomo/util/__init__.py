"""Small formatting helpers shared by the timer and the status listing."""
from .misc import format_time

__all__ = ["format_time"]
