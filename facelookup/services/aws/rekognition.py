"""
Rekognition service for indexing and matching faces using aioboto3.
"""
from typing import Any, Dict, Optional

import aioboto3
from botocore.exceptions import BotoCoreError, ClientError

from facelookup.core.config import settings
from facelookup.core.exceptions import (
    ConfigurationError,
    NoFaceDetectedError,
    RecognitionError,
)
from facelookup.core.logging import get_logger
from facelookup.domain.interfaces.recognition import FaceRecognitionService
from facelookup.domain.value_objects.recognition import FaceIndexResult

logger = get_logger(__name__)

# Rekognition reports an image without a detectable face with this code and message
NO_FACE_ERROR_CODE = "InvalidParameterException"
NO_FACE_MESSAGE_MARKER = "no faces in the image"


class RekognitionService(FaceRecognitionService):
    """Face recognition backed by an AWS Rekognition collection.

    The aioboto3 session is kept for the life of the process; a client is
    opened from it for each call so that no client outlives the event loop
    it was created on.
    """

    def __init__(
        self,
        session: Optional[aioboto3.Session] = None,
        region_name: Optional[str] = None,
        access_key_id: Optional[str] = None,
        secret_access_key: Optional[str] = None,
        match_threshold: Optional[float] = None,
    ):
        """Store configuration but do not open a client yet."""
        self.region_name = region_name or settings.AWS_REGION
        self.access_key_id = access_key_id or settings.AWS_ACCESS_KEY_ID
        self.secret_access_key = secret_access_key or settings.AWS_SECRET_ACCESS_KEY
        self.match_threshold = (
            match_threshold if match_threshold is not None else settings.FACE_MATCH_THRESHOLD
        )
        self._session = session or aioboto3.Session()

    def _client_args(self) -> Dict[str, Any]:
        client_args: Dict[str, Any] = {"region_name": self.region_name}
        if self.access_key_id and self.secret_access_key:
            client_args["aws_access_key_id"] = self.access_key_id
            client_args["aws_secret_access_key"] = self.secret_access_key
        return client_args

    async def _call(self, operation: str, **params: Any) -> Dict[str, Any]:
        """Invoke a Rekognition operation, wrapping client failures.

        Raises:
            RecognitionError: If the call fails for any reason
        """
        try:
            async with self._session.client("rekognition", **self._client_args()) as client:
                return await getattr(client, operation)(**params)
        except ClientError as e:
            error = e.response.get("Error", {})
            error_code = error.get("Code")
            logger.error(
                "Rekognition call failed",
                operation=operation,
                error_code=error_code,
                error=str(e),
            )
            raise RecognitionError(
                f"Rekognition {operation} failed: {e}",
                details={
                    "operation": operation,
                    "code": error_code,
                    "message": error.get("Message", ""),
                },
            ) from e
        except BotoCoreError as e:
            logger.error(
                "Rekognition call failed before reaching the service",
                operation=operation,
                error=str(e),
                exc_info=True,
            )
            raise RecognitionError(
                f"Rekognition {operation} failed: {e}",
                details={"operation": operation},
            ) from e

    @staticmethod
    def _require_collection(collection_id: str) -> None:
        if not collection_id:
            raise ConfigurationError("COLLECTION_NAME is not configured")

    @staticmethod
    def _is_no_face_error(error: RecognitionError) -> bool:
        """Tell "no face in image" apart from other invalid-parameter failures."""
        return (
            error.details.get("code") == NO_FACE_ERROR_CODE
            and NO_FACE_MESSAGE_MARKER in error.details.get("message", "").lower()
        )

    @staticmethod
    def _first_face(response: Dict[str, Any]) -> FaceIndexResult:
        """Extract the first face record from an IndexFaces response.

        Raises:
            NoFaceDetectedError: If there is no face record or it has no FaceId
        """
        face_records = response.get("FaceRecords") or []
        face = face_records[0].get("Face") if face_records else None
        if not face or not face.get("FaceId"):
            raise NoFaceDetectedError(
                "FaceId is not found",
                details={"unindexed_faces": len(response.get("UnindexedFaces") or [])},
            )
        return FaceIndexResult(
            face_id=face["FaceId"],
            external_image_id=face.get("ExternalImageId"),
        )

    async def index_from_stored_object(
        self,
        collection_id: str,
        bucket: str,
        key: str,
        external_id: str,
    ) -> FaceIndexResult:
        self._require_collection(collection_id)
        response = await self._call(
            "index_faces",
            CollectionId=collection_id,
            Image={"S3Object": {"Bucket": bucket, "Name": key}},
            ExternalImageId=external_id,
        )
        result = self._first_face(response)
        logger.info(
            "Indexed face from stored object",
            collection_id=collection_id,
            bucket=bucket,
            key=key,
            face_id=result.face_id,
        )
        return result

    async def index_from_bytes(
        self,
        collection_id: str,
        image_bytes: bytes,
    ) -> FaceIndexResult:
        self._require_collection(collection_id)
        response = await self._call(
            "index_faces",
            CollectionId=collection_id,
            Image={"Bytes": image_bytes},
        )
        result = self._first_face(response)
        logger.info(
            "Indexed face from image bytes",
            collection_id=collection_id,
            size=len(image_bytes),
            face_id=result.face_id,
        )
        return result

    async def search_by_bytes(
        self,
        collection_id: str,
        image_bytes: bytes,
    ) -> Optional[FaceIndexResult]:
        self._require_collection(collection_id)
        try:
            response = await self._call(
                "search_faces_by_image",
                CollectionId=collection_id,
                Image={"Bytes": image_bytes},
                MaxFaces=1,
                FaceMatchThreshold=self.match_threshold,
            )
        except RecognitionError as e:
            if self._is_no_face_error(e):
                raise NoFaceDetectedError(
                    "No face detected in query image", details=e.details
                ) from e
            raise

        matches = response.get("FaceMatches") or []
        if not matches:
            logger.info("No matching face in collection", collection_id=collection_id)
            return None

        face = matches[0].get("Face") or {}
        if not face.get("FaceId"):
            raise NoFaceDetectedError("FaceId is not found")
        logger.info(
            "Matched face in collection",
            collection_id=collection_id,
            face_id=face["FaceId"],
            similarity=matches[0].get("Similarity"),
        )
        return FaceIndexResult(
            face_id=face["FaceId"],
            external_image_id=face.get("ExternalImageId"),
        )
