"""Generate Host & Platform module metadata from flat package lists."""

__version__ = "0.1.0"
