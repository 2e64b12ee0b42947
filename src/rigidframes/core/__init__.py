"""Core module with errors, units, types, logging, and config."""

__all__ = [
    "errors",
    "units",
    "types",
    "logging",
    "config",
]
