"""Serve the HTTP application: ``python -m facelookup`` or ``facelookup-api``."""
import uvicorn

from facelookup.core.config import settings


def main() -> None:
    """Run the FastAPI app under uvicorn."""
    uvicorn.run(
        "facelookup.main:app",
        host=settings.HOST,
        port=settings.PORT,
        log_config=None,
        reload=settings.ENVIRONMENT == "development",
    )


if __name__ == "__main__":
    main()
