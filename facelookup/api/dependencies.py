"""FastAPI dependency providers."""
from typing import AsyncGenerator

from facelookup.core.container import get_container
from facelookup.services.query_pipeline import QueryPipeline
from facelookup.services.upload_pipeline import UploadPipeline


async def get_upload_pipeline() -> AsyncGenerator[UploadPipeline, None]:
    """Provide the process-wide upload pipeline."""
    yield get_container().upload_pipeline


async def get_query_pipeline() -> AsyncGenerator[QueryPipeline, None]:
    """Provide the process-wide query pipeline."""
    yield get_container().query_pipeline
