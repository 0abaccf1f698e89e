"""HTTP downloads for installers and disk images."""

from pathlib import Path

import aiohttp

from setupmac.core.logging import get_logger

logger = get_logger(__name__)

CHUNK_SIZE = 1024 * 1024


class DownloadError(Exception):
    """Raised when a download fails.

    Attributes:
        url: The URL that failed
        status: HTTP status code, or None for connection errors
    """

    def __init__(self, url: str, status: int | None, reason: str = "") -> None:
        self.url = url
        self.status = status
        detail = f"HTTP {status}" if status is not None else reason or "connection error"
        super().__init__(f"Failed to download {url}: {detail}")


async def download_file(url: str, dest: Path) -> Path:
    """Stream a URL to a file, removing partial output on failure.

    Args:
        url: Source URL (redirects are followed)
        dest: Destination file path

    Returns:
        The destination path

    Raises:
        DownloadError: If the server answers with a non-200 status or the
            connection fails
    """
    dest.parent.mkdir(parents=True, exist_ok=True)

    # Installers can be several hundred megabytes, so no total timeout
    timeout = aiohttp.ClientTimeout(total=None, sock_connect=30)

    logger.debug("Starting download", url=url, dest=str(dest))

    try:
        async with aiohttp.ClientSession(timeout=timeout) as session:
            async with session.get(url) as response:
                if response.status != 200:
                    raise DownloadError(url, response.status)

                with dest.open("wb") as f:
                    async for chunk in response.content.iter_chunked(CHUNK_SIZE):
                        f.write(chunk)
    except aiohttp.ClientError as e:
        dest.unlink(missing_ok=True)
        raise DownloadError(url, None, str(e)) from e
    except BaseException:
        dest.unlink(missing_ok=True)
        raise

    logger.debug("Finished download", url=url, size=dest.stat().st_size)

    return dest
