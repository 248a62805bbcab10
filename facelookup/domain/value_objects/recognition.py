"""Face recognition value objects."""
from typing import Optional

from pydantic import BaseModel, Field


class FaceIndexResult(BaseModel):
    """The fields kept from a recognition response."""
    face_id: str = Field(..., min_length=1, description="Face identifier within the collection")
    external_image_id: Optional[str] = Field(
        None, description="External identifier attached when the face was indexed"
    )
