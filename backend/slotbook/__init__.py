"""slotbook: fixed-granularity appointment calendar with atomic slot booking."""

__version__ = "0.1.0"
