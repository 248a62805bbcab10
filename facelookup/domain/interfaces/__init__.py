"""Service interfaces package."""
from .recognition import FaceRecognitionService
from .record_store import RecordStore

__all__ = ["FaceRecognitionService", "RecordStore"]
