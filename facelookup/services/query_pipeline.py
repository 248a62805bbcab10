"""Query pipeline: find the person records matching the face in a remote image."""
from typing import Any, List, Optional

from facelookup.core.config import settings
from facelookup.core.exceptions import (
    ImageFetchError,
    NoFaceDetectedError,
    RecognitionError,
)
from facelookup.core.logging import get_logger
from facelookup.domain.entities.person import PersonRecord
from facelookup.domain.interfaces.recognition import FaceRecognitionService
from facelookup.domain.interfaces.record_store import RecordStore
from facelookup.domain.value_objects.events import QueryRequest
from facelookup.domain.value_objects.recognition import FaceIndexResult
from facelookup.domain.value_objects.responses import LambdaResponse
from facelookup.services.image_fetcher import ImageFetcher

logger = get_logger(__name__)

SEARCH_MODE = "search"
INDEX_MODE = "index"


class QueryPipeline:
    """Looks up the people whose recorded face matches a face in an image URL.

    This pipeline:
    1. Downloads the image
    2. Resolves its face to a collection face identifier
    3. Scans the record store for that identifier

    In ``search`` mode the face is matched without changing the collection.
    ``index`` mode adds the query face to the collection and uses the new
    face identifier, which only finds records when Rekognition reuses it.

    Example:
        ```python
        pipeline = QueryPipeline(ImageFetcher(), RekognitionService(), DynamoDBRecordStore())
        response = await pipeline.run({"body": {"imageURL": "https://example.com/a.jpg"}})
        ```
    """

    def __init__(
        self,
        image_fetcher: ImageFetcher,
        recognition_service: FaceRecognitionService,
        record_store: RecordStore,
        collection_id: Optional[str] = None,
        mode: Optional[str] = None,
    ) -> None:
        """Initialize the query pipeline.

        Args:
            image_fetcher: Downloads the query image
            recognition_service: Service resolving the query face
            record_store: Store holding the person records
            collection_id: Collection to match against (defaults to settings)
            mode: "search" or "index" (defaults to settings)
        """
        self._image_fetcher = image_fetcher
        self._recognition_service = recognition_service
        self._record_store = record_store
        self._collection_id = collection_id if collection_id is not None else settings.COLLECTION_NAME
        self.mode = mode or settings.QUERY_MODE
        if self.mode not in (SEARCH_MODE, INDEX_MODE):
            raise ValueError(f"Unknown query mode: {self.mode}")

    async def run(self, event: Any) -> dict:
        """Run the pipeline for one API Gateway event.

        Returns:
            Proxy response with status 200 and the matching records as a JSON array

        Raises:
            InvalidEventError: If the body has no imageURL
            ImageFetchError: If the download fails; recognition is not called
            NoFaceDetectedError: If the image has no usable face
            RecognitionError: If the recognition call fails
            StoreError: If the lookup fails
        """
        request = QueryRequest.from_event(event)
        records = await self.find_records(request)
        return LambdaResponse.from_records(records).model_dump()

    async def find_records(self, request: QueryRequest) -> List[PersonRecord]:
        """Resolve a query request to the matching records."""
        try:
            image_bytes = await self._image_fetcher.fetch(request.image_url)
        except ImageFetchError as e:
            logger.error("Query image unavailable", url=request.image_url, error=str(e))
            raise

        try:
            face = await self._resolve_face(image_bytes)
        except NoFaceDetectedError:
            logger.warning("No face detected in query image", url=request.image_url)
            raise
        except RecognitionError as e:
            logger.error("Query recognition failed", url=request.image_url, error=str(e))
            raise

        if face is None:
            return []

        return await self._record_store.find_records_by_face_id(face.face_id)

    async def _resolve_face(self, image_bytes: bytes) -> Optional[FaceIndexResult]:
        if self.mode == INDEX_MODE:
            return await self._recognition_service.index_from_bytes(
                collection_id=self._collection_id,
                image_bytes=image_bytes,
            )
        return await self._recognition_service.search_by_bytes(
            collection_id=self._collection_id,
            image_bytes=image_bytes,
        )
