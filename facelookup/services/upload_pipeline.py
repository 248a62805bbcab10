"""Upload pipeline: index an uploaded image and record the resulting face."""
from datetime import datetime, timezone
from typing import Any, Callable, Optional

from facelookup.core.config import settings
from facelookup.core.exceptions import (
    InvalidEventError,
    NoFaceDetectedError,
    RecognitionError,
    StoreError,
)
from facelookup.core.logging import get_logger
from facelookup.domain.entities.person import PersonRecord
from facelookup.domain.interfaces.recognition import FaceRecognitionService
from facelookup.domain.interfaces.record_store import RecordStore
from facelookup.domain.value_objects.events import UploadEvent
from facelookup.domain.value_objects.recognition import FaceIndexResult
from facelookup.services.identity import derive_external_id

logger = get_logger(__name__)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class UploadPipeline:
    """Reacts to an S3 upload by indexing the face and appending a person record.

    The first segment of the object key names the subject, so uploading
    ``alice/photo.jpg`` records a face for ``alice``.

    Example:
        ```python
        pipeline = UploadPipeline(RekognitionService(), DynamoDBRecordStore())
        result = await pipeline.run(s3_notification)
        ```
    """

    def __init__(
        self,
        recognition_service: FaceRecognitionService,
        record_store: RecordStore,
        collection_id: Optional[str] = None,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        """Initialize the upload pipeline.

        Args:
            recognition_service: Service indexing faces into the collection
            record_store: Store receiving the person records
            collection_id: Collection to index into (defaults to settings)
            clock: Source of record creation timestamps
        """
        self._recognition_service = recognition_service
        self._record_store = record_store
        self._collection_id = collection_id if collection_id is not None else settings.COLLECTION_NAME
        self._clock = clock

    async def run(self, event: Any) -> FaceIndexResult:
        """Run the pipeline for one S3 notification.

        Args:
            event: S3 notification payload; only the first record is used

        Returns:
            FaceIndexResult of the indexed face

        Raises:
            InvalidEventError: If the event is malformed, before any external call
            RecognitionError: If indexing fails
            NoFaceDetectedError: If no face was indexed; nothing is recorded
            StoreError: If the record cannot be written
        """
        try:
            upload = UploadEvent.from_notification(event)
        except InvalidEventError as e:
            logger.error("Rejected upload event", error=str(e), details=e.details)
            raise

        return await self.index_upload(upload)

    async def index_upload(self, upload: UploadEvent) -> FaceIndexResult:
        """Index a validated upload and append its person record."""
        external_id = derive_external_id(upload.bucket, upload.object_key)

        try:
            result = await self._recognition_service.index_from_stored_object(
                collection_id=self._collection_id,
                bucket=upload.bucket,
                key=upload.object_key,
                external_id=external_id,
            )
        except NoFaceDetectedError as e:
            logger.warning(
                "No face indexed from upload",
                bucket=upload.bucket,
                key=upload.object_key,
                error=str(e),
            )
            raise
        except RecognitionError as e:
            logger.error(
                "Indexing failed",
                bucket=upload.bucket,
                key=upload.object_key,
                error=str(e),
            )
            raise
        logger.info(
            "Indexed upload",
            key=upload.object_key,
            collection_id=self._collection_id,
            face_id=result.face_id,
        )

        record = PersonRecord(
            name=upload.subject_name,
            image=upload.object_arn,
            face_id=result.face_id,
            external_image_id=result.external_image_id,
            created_at=self._clock(),
        )
        try:
            await self._record_store.insert_record(record)
        except StoreError as e:
            logger.error(
                "Persisting record failed",
                key=upload.object_key,
                face_id=result.face_id,
                error=str(e),
            )
            raise
        logger.info(
            "Recorded upload",
            key=upload.object_key,
            name=record.name,
            face_id=result.face_id,
        )

        return result
