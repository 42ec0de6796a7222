"""
Shared test helpers for radix64.

Maps to: N/A (shared test fixtures)
"""

from .payloads import (
    BOUNDARY_LENGTHS,
    payload,
)

__all__ = [
    "BOUNDARY_LENGTHS",
    "payload",
]
