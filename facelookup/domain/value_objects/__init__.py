"""Value objects package."""
from .events import QueryRequest, S3EventNotification, UploadEvent
from .recognition import FaceIndexResult
from .responses import LambdaResponse

__all__ = [
    "FaceIndexResult",
    "LambdaResponse",
    "QueryRequest",
    "S3EventNotification",
    "UploadEvent",
]
