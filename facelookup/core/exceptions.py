"""Custom exceptions for the face lookup handlers."""
from typing import Optional


class FaceLookupError(Exception):
    """Base exception for face lookup operations."""

    def __init__(self, message: str, details: Optional[dict] = None):
        """
        Initialize face lookup error.

        Args:
            message: Error description
            details: Additional error context
        """
        super().__init__(message)
        self.details = details or {}


class InvalidEventError(FaceLookupError):
    """Raised when an inbound event or request is malformed or missing fields."""
    pass


class NoFaceDetectedError(FaceLookupError):
    """Raised when recognition succeeds but no usable face is returned."""
    pass


class RecognitionError(FaceLookupError):
    """Raised when the recognition service call fails."""
    pass


class StoreError(FaceLookupError):
    """Raised when inserting into or querying the record table fails."""
    pass


class ImageFetchError(FaceLookupError):
    """Raised when the query image cannot be downloaded."""
    pass


class ConfigurationError(FaceLookupError):
    """Raised when a required setting is empty at the point of use."""
    pass
