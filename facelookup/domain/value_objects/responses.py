"""Invocation response shapes."""
import json
from typing import Dict, Sequence

from pydantic import BaseModel, Field

from facelookup.domain.entities.person import PersonRecord

JSON_HEADERS = {"Content-Type": "application/json"}


class LambdaResponse(BaseModel):
    """Proxy-integration response returned to API Gateway."""
    statusCode: int = Field(..., description="HTTP status code")
    headers: Dict[str, str] = Field(default_factory=lambda: dict(JSON_HEADERS))
    body: str = Field(..., description="Serialized response body")

    @classmethod
    def from_records(cls, records: Sequence[PersonRecord]) -> "LambdaResponse":
        """Build a 200 response carrying records as a JSON array, order preserved."""
        body = json.dumps([record.model_dump(mode="json", by_alias=True) for record in records])
        return cls(statusCode=200, body=body)
