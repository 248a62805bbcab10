"""Face index and query API endpoints.

The pipelines re-raise every failure; this module is the boundary that turns
them into HTTP error responses.
"""
from typing import List

from fastapi import APIRouter, Depends, HTTPException

from facelookup.api.dependencies import get_query_pipeline, get_upload_pipeline
from facelookup.api.models.faces import (
    FaceIndexRequest,
    FaceIndexResponse,
    FaceQueryRequest,
    PersonRecordResponse,
)
from facelookup.core.exceptions import (
    ConfigurationError,
    ImageFetchError,
    InvalidEventError,
    NoFaceDetectedError,
    RecognitionError,
    StoreError,
)
from facelookup.core.logging import get_logger
from facelookup.domain.value_objects.events import QueryRequest, UploadEvent
from facelookup.services.query_pipeline import QueryPipeline
from facelookup.services.upload_pipeline import UploadPipeline

logger = get_logger(__name__)
router = APIRouter(
    tags=["faces"],
    responses={
        400: {"description": "Invalid request"},
        422: {"description": "No face detected"},
        502: {"description": "Upstream service failure"},
    }
)


def _to_http_error(e: Exception) -> HTTPException:
    if isinstance(e, InvalidEventError):
        return HTTPException(status_code=400, detail=str(e))
    if isinstance(e, NoFaceDetectedError):
        return HTTPException(status_code=422, detail=str(e))
    if isinstance(e, ImageFetchError):
        return HTTPException(status_code=502, detail=f"Could not download image: {e}")
    if isinstance(e, (RecognitionError, StoreError)):
        return HTTPException(status_code=502, detail=str(e))
    if isinstance(e, ConfigurationError):
        return HTTPException(status_code=500, detail=str(e))
    return HTTPException(
        status_code=500,
        detail="An unexpected error occurred while processing the request"
    )


@router.post(
    "/index",
    response_model=FaceIndexResponse,
    summary="Index the face in a stored image",
    description="Indexes the face in an S3 object and records it under the key's first segment.",
)
async def index_face(
    request: FaceIndexRequest,
    pipeline: UploadPipeline = Depends(get_upload_pipeline),
) -> FaceIndexResponse:
    """Index the face in an image already stored in S3.

    Raises:
        HTTPException: If the request is invalid or processing fails
    """
    try:
        upload = UploadEvent.from_location(bucket=request.bucket, key=request.key)
        result = await pipeline.index_upload(upload)
        return FaceIndexResponse.from_result(result)
    except Exception as e:
        logger.error("Face indexing request failed", error=str(e), error_type=type(e).__name__)
        raise _to_http_error(e) from e


@router.post(
    "/query",
    response_model=List[PersonRecordResponse],
    summary="Find people matching the face in an image",
    description="Downloads the image, matches its face and returns the recorded people.",
)
async def query_faces(
    request: FaceQueryRequest,
    pipeline: QueryPipeline = Depends(get_query_pipeline),
) -> List[PersonRecordResponse]:
    """Return the person records matching the face at request.imageURL.

    Raises:
        HTTPException: If the image or face cannot be resolved
    """
    try:
        records = await pipeline.find_records(QueryRequest(image_url=request.image_url))
        return [PersonRecordResponse.from_record(record) for record in records]
    except Exception as e:
        logger.error("Face query request failed", error=str(e), error_type=type(e).__name__)
        raise _to_http_error(e) from e
