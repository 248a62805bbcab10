"""Person record entity persisted in the record table."""
from datetime import datetime, timezone
from decimal import Decimal
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_serializer, field_validator


class PersonRecord(BaseModel):
    """A subject's indexed face, as stored in the record table.

    Attribute names on the wire (table items and JSON responses) are the
    camelCase aliases; the timestamp travels as milliseconds since the epoch.
    """
    name: str = Field(..., description="Subject name, the first segment of the object key")
    image: str = Field(..., description="ARN of the S3 object the face was indexed from")
    face_id: str = Field(..., alias="faceId", description="Rekognition face identifier")
    external_image_id: Optional[str] = Field(
        None, alias="externalImageId", description="Derived identifier of the source object"
    )
    created_at: datetime = Field(
        ..., alias="createdTimestamp", description="When the record was created"
    )

    model_config = ConfigDict(populate_by_name=True)

    @field_validator("created_at", mode="before")
    @classmethod
    def parse_epoch_millis(cls, v: Any) -> Any:
        """Accept epoch milliseconds, including the Decimals DynamoDB returns."""
        if isinstance(v, Decimal):
            v = int(v)
        if isinstance(v, (int, float)) and not isinstance(v, bool):
            return datetime.fromtimestamp(v / 1000, tz=timezone.utc)
        return v

    @field_serializer("created_at")
    def serialize_epoch_millis(self, value: datetime) -> int:
        if value.tzinfo is None:
            value = value.replace(tzinfo=timezone.utc)
        return round(value.timestamp() * 1000)

    def to_item(self) -> dict:
        """Render the record as a table item."""
        return self.model_dump(by_alias=True, exclude_none=True)
