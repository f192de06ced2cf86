"""Validation code constants for pycnab.api.validate().

These constants prevent stringly-typed error codes and ensure
client code uses the correct validation codes.
"""

from enum import Enum


class ValidationCode(str, Enum):
    """Validation error and warning codes."""

    # Errors (blocking)
    INVALID_STRUCTURE = "INVALID_STRUCTURE"
    SOURCE_UNREADABLE = "SOURCE_UNREADABLE"
    EMPTY_DESTINATION = "EMPTY_DESTINATION"
    MISSING_DEFINITION = "MISSING_DEFINITION"

    # Warnings (non-blocking)
    UNKNOWN_ACTION = "UNKNOWN_ACTION"
    NO_INVOCATION_IMAGES = "NO_INVOCATION_IMAGES"
    EMPTY_CREDENTIAL_DESTINATION = "EMPTY_CREDENTIAL_DESTINATION"
