"""Inbound event schemas.

Both handlers receive loosely structured payloads. The models here accept only
the fields the pipelines read, reject anything that does not match, and ignore
the rest of the notification.
"""
import json
from typing import Any, List, Mapping
from urllib.parse import unquote_plus

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from facelookup.core.exceptions import InvalidEventError


class S3Bucket(BaseModel):
    name: str = Field(..., min_length=1)


class S3Object(BaseModel):
    key: str = Field(..., min_length=1)


class S3Entity(BaseModel):
    bucket: S3Bucket
    object: S3Object


class S3EventRecord(BaseModel):
    s3: S3Entity


class S3EventNotification(BaseModel):
    """An S3 event notification. Only the first record is consulted."""
    Records: List[S3EventRecord] = Field(..., min_length=1)


class UploadEvent(BaseModel):
    """A single uploaded object, decoded from a notification."""
    bucket: str = Field(..., min_length=1, description="S3 bucket name")
    object_key: str = Field(..., min_length=1, description="Decoded S3 object key")

    @property
    def subject_name(self) -> str:
        """First `/`-delimited segment of the key."""
        return self.object_key.split("/", 1)[0]

    @property
    def object_arn(self) -> str:
        return f"arn:aws:s3:::{self.bucket}/{self.object_key}"

    @classmethod
    def from_notification(cls, payload: Any) -> "UploadEvent":
        """Parse and validate an S3 notification.

        Args:
            payload: Raw event handed to the handler

        Returns:
            UploadEvent for the first record

        Raises:
            InvalidEventError: If the payload does not match the schema or the
                key has no subject segment
        """
        try:
            notification = S3EventNotification.model_validate(payload)
        except ValidationError as e:
            raise InvalidEventError(
                "Invalid event", details={"errors": e.errors(include_url=False)}
            ) from e

        entity = notification.Records[0].s3
        return cls.from_location(
            bucket=unquote_plus(entity.bucket.name),
            key=unquote_plus(entity.object.key),
        )

    @classmethod
    def from_location(cls, bucket: str, key: str) -> "UploadEvent":
        """Build an event for an already decoded bucket and key.

        Raises:
            InvalidEventError: If either is empty or the key has no subject segment
        """
        try:
            event = cls(bucket=bucket, object_key=key)
        except ValidationError as e:
            raise InvalidEventError(
                "Invalid event", details={"errors": e.errors(include_url=False)}
            ) from e
        if not event.subject_name:
            raise InvalidEventError("Invalid file name", details={"key": key})
        return event


class QueryRequest(BaseModel):
    """Request for the records matching the face in a remote image."""
    image_url: str = Field(..., alias="imageURL", min_length=1)

    model_config = ConfigDict(populate_by_name=True)

    @classmethod
    def from_event(cls, event: Any) -> "QueryRequest":
        """Read the request from an API Gateway event body.

        The body is either an object (direct invocation) or a JSON string
        (proxy integration).

        Raises:
            InvalidEventError: If the body is missing or malformed
        """
        if not isinstance(event, Mapping) or "body" not in event:
            raise InvalidEventError("Request has no body")

        body = event["body"]
        if isinstance(body, (str, bytes)):
            try:
                body = json.loads(body)
            except ValueError as e:
                raise InvalidEventError("Request body is not valid JSON") from e

        try:
            return cls.model_validate(body)
        except ValidationError as e:
            raise InvalidEventError(
                "Request body must contain imageURL",
                details={"errors": e.errors(include_url=False)},
            ) from e
