"""Shared fakes and fixtures."""
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

import pytest

from facelookup.core.exceptions import ImageFetchError
from facelookup.domain.entities.person import PersonRecord
from facelookup.domain.interfaces.recognition import FaceRecognitionService
from facelookup.domain.interfaces.record_store import RecordStore
from facelookup.domain.value_objects.recognition import FaceIndexResult

FIXED_NOW = datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc)


class FakeRecognitionService(FaceRecognitionService):
    """Recognition stub returning a fixed face or raising a fixed error."""

    def __init__(
        self,
        face_id: Optional[str] = "f1",
        external_image_id: Optional[str] = None,
        error: Optional[Exception] = None,
    ) -> None:
        self.face_id = face_id
        self.external_image_id = external_image_id
        self.error = error
        self.calls: List[tuple] = []

    def _respond(self, external_id: Optional[str] = None) -> Optional[FaceIndexResult]:
        if self.error is not None:
            raise self.error
        if self.face_id is None:
            return None
        return FaceIndexResult(
            face_id=self.face_id,
            external_image_id=external_id or self.external_image_id,
        )

    async def index_from_stored_object(self, collection_id, bucket, key, external_id):
        self.calls.append(("index_from_stored_object", collection_id, bucket, key, external_id))
        return self._respond(external_id)

    async def index_from_bytes(self, collection_id, image_bytes):
        self.calls.append(("index_from_bytes", collection_id, image_bytes))
        return self._respond()

    async def search_by_bytes(self, collection_id, image_bytes):
        self.calls.append(("search_by_bytes", collection_id, image_bytes))
        return self._respond()


class FakeRecordStore(RecordStore):
    """In-memory record store."""

    def __init__(
        self,
        records: Optional[Dict[str, List[PersonRecord]]] = None,
        error: Optional[Exception] = None,
    ) -> None:
        self.records = records or {}
        self.error = error
        self.inserted: List[PersonRecord] = []
        self.lookups: List[str] = []

    async def insert_record(self, record: PersonRecord) -> None:
        if self.error is not None:
            raise self.error
        self.inserted.append(record)

    async def find_records_by_face_id(self, face_id: str) -> List[PersonRecord]:
        self.lookups.append(face_id)
        if self.error is not None:
            raise self.error
        return list(self.records.get(face_id, []))


class FakeImageFetcher:
    """Image fetcher returning fixed bytes, or failing."""

    def __init__(self, content: bytes = b"\xff\xd8image", fail: bool = False) -> None:
        self.content = content
        self.fail = fail
        self.urls: List[str] = []

    async def fetch(self, url: str) -> bytes:
        self.urls.append(url)
        if self.fail:
            raise ImageFetchError("Failed to fetch image: connection refused", details={"url": url})
        return self.content


class FakeRekognitionClient:
    """Stands in for an aioboto3 Rekognition client."""

    def __init__(self, response=None, error=None):
        self.response = response
        self.error = error
        self.calls = []

    async def _respond(self, operation, params):
        self.calls.append((operation, params))
        if self.error is not None:
            raise self.error
        return self.response

    async def index_faces(self, **params):
        return await self._respond("index_faces", params)

    async def search_faces_by_image(self, **params):
        return await self._respond("search_faces_by_image", params)


class FakeAWSSession:
    """Stands in for aioboto3.Session, handing out preconfigured clients."""

    def __init__(self, client: Any = None, table: Any = None) -> None:
        self._client = client
        self._table = table
        self.client_calls: List[tuple] = []
        self.resource_calls: List[tuple] = []

    @asynccontextmanager
    async def client(self, service_name: str, **kwargs: Any):
        self.client_calls.append((service_name, kwargs))
        yield self._client

    @asynccontextmanager
    async def resource(self, service_name: str, **kwargs: Any):
        self.resource_calls.append((service_name, kwargs))
        yield FakeDynamoDBResource(self._table)


class FakeDynamoDBResource:
    def __init__(self, table: Any) -> None:
        self._table = table

    async def Table(self, name: str) -> Any:
        self._table.name = name
        return self._table


def make_s3_event(bucket: str = "bucket1", key: str = "alice/photo.jpg") -> dict:
    """Build a minimal S3 object-created notification."""
    return {
        "Records": [
            {
                "eventSource": "aws:s3",
                "eventName": "ObjectCreated:Put",
                "s3": {
                    "bucket": {"name": bucket, "arn": f"arn:aws:s3:::{bucket}"},
                    "object": {"key": key, "size": 1024},
                },
            }
        ]
    }


def make_record(name: str, face_id: str = "f1", millis: int = 1714564800000) -> PersonRecord:
    return PersonRecord(
        name=name,
        image=f"arn:aws:s3:::bucket1/{name}/photo.jpg",
        face_id=face_id,
        external_image_id=f"ext-{name}",
        created_at=millis,
    )


@pytest.fixture
def recognition():
    return FakeRecognitionService()


@pytest.fixture
def store():
    return FakeRecordStore()


@pytest.fixture
def fetcher():
    return FakeImageFetcher()
