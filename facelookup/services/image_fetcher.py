"""Download of query images over HTTP."""
import asyncio
from typing import Optional

import requests

from facelookup.core.config import settings
from facelookup.core.exceptions import ImageFetchError
from facelookup.core.logging import get_logger

logger = get_logger(__name__)


class ImageFetcher:
    """Fetches an image URL into memory.

    requests is blocking, so each download runs in a worker thread. Every
    download makes its own request so no connection state is shared between
    threads.
    """

    def __init__(self, timeout: Optional[float] = None) -> None:
        self.timeout = timeout if timeout is not None else settings.IMAGE_FETCH_TIMEOUT

    def _get(self, url: str) -> bytes:
        response = requests.get(url, timeout=self.timeout)
        response.raise_for_status()
        return response.content

    async def fetch(self, url: str) -> bytes:
        """Return the full body of a GET on url.

        Raises:
            ImageFetchError: On transport errors and non-success statuses
        """
        try:
            content = await asyncio.to_thread(self._get, url)
        except requests.HTTPError as e:
            status = e.response.status_code if e.response is not None else None
            logger.error("Image download returned an error status", url=url, status=status)
            raise ImageFetchError(
                f"Failed to fetch image: HTTP {status}",
                details={"url": url, "status": status},
            ) from e
        except requests.RequestException as e:
            logger.error("Image download failed", url=url, error=str(e))
            raise ImageFetchError(
                f"Failed to fetch image: {e}", details={"url": url}
            ) from e

        logger.debug("Downloaded image", url=url, size=len(content))
        return content
