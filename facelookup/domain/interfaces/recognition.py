"""Face recognition service interface."""
from abc import ABC, abstractmethod
from typing import Optional

from ..value_objects.recognition import FaceIndexResult


class FaceRecognitionService(ABC):
    """Interface for face recognition operations against a single collection."""

    @abstractmethod
    async def index_from_stored_object(
        self,
        collection_id: str,
        bucket: str,
        key: str,
        external_id: str,
    ) -> FaceIndexResult:
        """
        Index the face in an object already stored in S3.

        The service fetches and analyzes the object itself and adds the face
        to the collection.

        Args:
            collection_id: Collection to index into
            bucket: S3 bucket holding the image
            key: S3 object key of the image
            external_id: Identifier attached to the indexed face

        Returns:
            FaceIndexResult for the first face record

        Raises:
            RecognitionError: If the service call fails
            NoFaceDetectedError: If the response carries no face record
        """
        pass

    @abstractmethod
    async def index_from_bytes(
        self,
        collection_id: str,
        image_bytes: bytes,
    ) -> FaceIndexResult:
        """
        Index the face in raw image bytes, without an external identifier.

        Raises:
            RecognitionError: If the service call fails
            NoFaceDetectedError: If the response carries no face record
        """
        pass

    @abstractmethod
    async def search_by_bytes(
        self,
        collection_id: str,
        image_bytes: bytes,
    ) -> Optional[FaceIndexResult]:
        """
        Find the collection face that best matches the face in raw image bytes.

        Does not modify the collection.

        Returns:
            FaceIndexResult of the best match, or None if nothing matched

        Raises:
            RecognitionError: If the service call fails
            NoFaceDetectedError: If the image contains no face
        """
        pass
