"""
DynamoDB record store for person records using aioboto3.
"""
from contextlib import asynccontextmanager
from typing import Any, AsyncGenerator, Dict, List, Optional

import aioboto3
from boto3.dynamodb.conditions import Attr
from botocore.exceptions import BotoCoreError, ClientError
from pydantic import ValidationError

from facelookup.core.config import settings
from facelookup.core.exceptions import ConfigurationError, StoreError
from facelookup.core.logging import get_logger
from facelookup.domain.entities.person import PersonRecord
from facelookup.domain.interfaces.record_store import RecordStore

logger = get_logger(__name__)


class DynamoDBRecordStore(RecordStore):
    """Record store backed by a single DynamoDB table."""

    def __init__(
        self,
        table_name: Optional[str] = None,
        session: Optional[aioboto3.Session] = None,
        region_name: Optional[str] = None,
        access_key_id: Optional[str] = None,
        secret_access_key: Optional[str] = None,
        follow_pages: Optional[bool] = None,
    ):
        """Store configuration but do not open a resource yet."""
        self.table_name = table_name if table_name is not None else settings.TABLE_NAME
        self.region_name = region_name or settings.AWS_REGION
        self.access_key_id = access_key_id or settings.AWS_ACCESS_KEY_ID
        self.secret_access_key = secret_access_key or settings.AWS_SECRET_ACCESS_KEY
        self.follow_pages = follow_pages if follow_pages is not None else settings.SCAN_FOLLOW_PAGES
        self._session = session or aioboto3.Session()

    @asynccontextmanager
    async def _get_table(self) -> AsyncGenerator[Any, None]:
        """Async context manager yielding the table resource."""
        if not self.table_name:
            raise ConfigurationError("TABLE_NAME is not configured")

        resource_args: Dict[str, Any] = {"region_name": self.region_name}
        if self.access_key_id and self.secret_access_key:
            resource_args["aws_access_key_id"] = self.access_key_id
            resource_args["aws_secret_access_key"] = self.secret_access_key

        async with self._session.resource("dynamodb", **resource_args) as dynamodb:
            yield await dynamodb.Table(self.table_name)

    async def insert_record(self, record: PersonRecord) -> None:
        try:
            async with self._get_table() as table:
                await table.put_item(Item=record.to_item())
        except (ClientError, BotoCoreError) as e:
            logger.error(
                "Failed to insert record",
                table=self.table_name,
                face_id=record.face_id,
                error=str(e),
                exc_info=True,
            )
            raise StoreError(
                f"Failed to insert record into '{self.table_name}': {e}",
                details={"table": self.table_name, "face_id": record.face_id},
            ) from e

        logger.info(
            "Inserted record",
            table=self.table_name,
            name=record.name,
            face_id=record.face_id,
        )

    async def find_records_by_face_id(self, face_id: str) -> List[PersonRecord]:
        items: List[Dict[str, Any]] = []
        scan_kwargs: Dict[str, Any] = {"FilterExpression": Attr("faceId").eq(face_id)}
        pages = 0

        try:
            async with self._get_table() as table:
                while True:
                    response = await table.scan(**scan_kwargs)
                    pages += 1
                    items.extend(response.get("Items", []))

                    last_key = response.get("LastEvaluatedKey")
                    if not last_key or not self.follow_pages:
                        break
                    scan_kwargs["ExclusiveStartKey"] = last_key
        except (ClientError, BotoCoreError) as e:
            logger.error(
                "Failed to scan for records",
                table=self.table_name,
                face_id=face_id,
                error=str(e),
                exc_info=True,
            )
            raise StoreError(
                f"Failed to look up records in '{self.table_name}': {e}",
                details={"table": self.table_name, "face_id": face_id},
            ) from e

        try:
            records = [PersonRecord.model_validate(item) for item in items]
        except ValidationError as e:
            raise StoreError(
                f"Malformed record in '{self.table_name}'",
                details={"table": self.table_name, "face_id": face_id},
            ) from e

        logger.info(
            "Found records",
            table=self.table_name,
            face_id=face_id,
            count=len(records),
            pages=pages,
        )
        return records
