"""Face indexing and lookup handlers backed by S3, Rekognition and DynamoDB."""

__version__ = "0.1.0"
