"""
Custom exceptions for SmartFill.
"""


class SmartFillError(Exception):
    """Base exception for SmartFill."""
    pass


class StorageError(SmartFillError):
    """History store read/write errors."""
    pass
