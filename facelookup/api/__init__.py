"""API v1 router initialization."""
from fastapi import APIRouter

from .faces import router as faces_router

# Create v1 router
router = APIRouter()

router.include_router(
    faces_router,
    prefix="/faces",
    tags=["faces"]
)
