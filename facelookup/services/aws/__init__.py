"""AWS service adapters."""
from .dynamodb import DynamoDBRecordStore
from .rekognition import RekognitionService

__all__ = ["DynamoDBRecordStore", "RekognitionService"]
