"""API specific face models."""
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from facelookup.domain.entities.person import PersonRecord
from facelookup.domain.value_objects.recognition import FaceIndexResult


class FaceIndexRequest(BaseModel):
    """Request model for the /index endpoint."""
    bucket: str = Field(
        ...,
        description="S3 bucket containing the image",
        min_length=1, max_length=63, pattern="^[a-z0-9][a-z0-9.-]*[a-z0-9]$"
    )
    key: str = Field(
        ...,
        description="S3 object key; its first segment names the subject",
        min_length=1, max_length=1024
    )


class FaceIndexResponse(BaseModel):
    """Response model for the /index endpoint."""
    face_id: str = Field(..., alias="faceId", description="Indexed face identifier")
    external_image_id: Optional[str] = Field(None, alias="externalImageId")

    model_config = ConfigDict(populate_by_name=True)

    @classmethod
    def from_result(cls, result: FaceIndexResult) -> "FaceIndexResponse":
        return cls(face_id=result.face_id, external_image_id=result.external_image_id)


class FaceQueryRequest(BaseModel):
    """Request model for the /query endpoint."""
    image_url: str = Field(
        ..., alias="imageURL", description="URL of the image to look up", min_length=1
    )

    model_config = ConfigDict(populate_by_name=True)


class PersonRecordResponse(BaseModel):
    """API model for a single person record."""
    name: str
    image: str
    face_id: str = Field(..., alias="faceId")
    external_image_id: Optional[str] = Field(None, alias="externalImageId")
    created_timestamp: int = Field(
        ..., alias="createdTimestamp", description="Milliseconds since the Unix epoch"
    )

    model_config = ConfigDict(populate_by_name=True)

    @classmethod
    def from_record(cls, record: PersonRecord) -> "PersonRecordResponse":
        return cls.model_validate(record.model_dump(mode="json", by_alias=True))
