"""AWS Lambda entry points.

``face_index_handler`` is subscribed to the upload bucket's object-created
notifications; ``api_handler`` sits behind API Gateway. Both re-raise on
failure: the Lambda runtime owns redelivery of S3 events, and API Gateway
turns an unhandled error into an error response.
"""
import asyncio
from typing import Any

from facelookup.api.models.faces import FaceIndexResponse
from facelookup.core.container import get_container
from facelookup.core.logging import bind_invocation, get_logger, setup_logging

setup_logging()
logger = get_logger(__name__)


def face_index_handler(event: Any, context: Any = None) -> dict:
    """Index the face in a newly uploaded object and record it."""
    bind_invocation("face_index_handler", context)
    pipeline = get_container().upload_pipeline
    try:
        result = asyncio.run(pipeline.run(event))
    except Exception as e:
        logger.error("Face index invocation failed", error=str(e), error_type=type(e).__name__)
        raise
    return FaceIndexResponse.from_result(result).model_dump(by_alias=True)


def api_handler(event: Any, context: Any = None) -> dict:
    """Return the records matching the face in the image at body.imageURL."""
    bind_invocation("api_handler", context)
    pipeline = get_container().query_pipeline
    try:
        return asyncio.run(pipeline.run(event))
    except Exception as e:
        logger.error("Query invocation failed", error=str(e), error_type=type(e).__name__)
        raise
