"""Service container holding the process-wide service handles."""
from typing import Optional

import aioboto3

from facelookup.domain.interfaces.recognition import FaceRecognitionService
from facelookup.domain.interfaces.record_store import RecordStore
from facelookup.services.aws.dynamodb import DynamoDBRecordStore
from facelookup.services.aws.rekognition import RekognitionService
from facelookup.services.image_fetcher import ImageFetcher
from facelookup.services.query_pipeline import QueryPipeline
from facelookup.services.upload_pipeline import UploadPipeline


class ServiceContainer:
    """Container for application services.

    Services are built once per process and shared by every invocation the
    process serves. Nothing needs tearing down; the hosting runtime owns the
    process lifetime.

    Example:
        ```python
        container = ServiceContainer()
        container.initialize()

        result = await container.upload_pipeline.run(event)
        ```
    """

    def __init__(self) -> None:
        """Initialize empty container."""
        self.session: Optional[aioboto3.Session] = None
        self.recognition_service: Optional[FaceRecognitionService] = None
        self.record_store: Optional[RecordStore] = None
        self.image_fetcher: Optional[ImageFetcher] = None

        self.upload_pipeline: Optional[UploadPipeline] = None
        self.query_pipeline: Optional[QueryPipeline] = None

    @property
    def initialized(self) -> bool:
        return self.upload_pipeline is not None and self.query_pipeline is not None

    def initialize(self) -> None:
        """Initialize all services in dependency order."""
        if self.initialized:
            return
        self.session = aioboto3.Session()
        self.recognition_service = RekognitionService(session=self.session)
        self.record_store = DynamoDBRecordStore(session=self.session)
        self.image_fetcher = ImageFetcher()
        self.upload_pipeline = UploadPipeline(
            recognition_service=self.recognition_service,
            record_store=self.record_store,
        )
        self.query_pipeline = QueryPipeline(
            image_fetcher=self.image_fetcher,
            recognition_service=self.recognition_service,
            record_store=self.record_store,
        )

    def cleanup(self) -> None:
        """Drop all service references."""
        self.upload_pipeline = None
        self.query_pipeline = None
        self.image_fetcher = None
        self.record_store = None
        self.recognition_service = None
        self.session = None


# Global container instance
container = ServiceContainer()


def get_container() -> ServiceContainer:
    """Return the global container, initializing it on first use."""
    if not container.initialized:
        container.initialize()
    return container
