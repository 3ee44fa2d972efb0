"""
Core utilities and constants for the hypermedia API.

Contains shared constants, error types, logging setup and HTTP helpers.
"""

from .constants import *

__all__ = [
    # Export the most used constants for easy import
    "API_TITLE",
    "API_VERSION",
    "DEFAULT_HOST",
    "DEFAULT_PORT",
    "HAL_JSON",
    "STARTUP_MESSAGE",
    "SHUTDOWN_MESSAGE",
    # ... other constants available for import
]
