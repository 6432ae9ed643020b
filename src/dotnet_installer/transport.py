"""HTTP downloader - DownloaderProtocol over httpx."""

import logging
from pathlib import Path

import httpx

logger = logging.getLogger(__name__)

USER_AGENT = "dotnet-runtime-installer/0.1.0"


class HttpDownloader:
    """
    Stream URLs to files with httpx.

    Owns its own timeout policy; the installer imposes none. Errors (connection,
    timeout, non-2xx status) propagate to the caller.
    """

    def __init__(
        self,
        timeout: float = 300.0,
        chunk_size: int = 1024 * 1024,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        """Initialize downloader.

        Args:
            timeout: Per-operation httpx timeout in seconds
            chunk_size: Bytes per write when streaming the body
            transport: Optional httpx transport (e.g. httpx.MockTransport in tests)
        """
        self.timeout = timeout
        self.chunk_size = chunk_size
        self.transport = transport

    async def download(self, uri: str, destination: Path) -> None:
        logger.debug(f"GET {uri}")
        async with httpx.AsyncClient(
            timeout=self.timeout,
            follow_redirects=True,
            transport=self.transport,
            headers={"User-Agent": USER_AGENT},
        ) as client:
            async with client.stream("GET", uri) as response:
                response.raise_for_status()
                with open(destination, "wb") as f:
                    async for chunk in response.aiter_bytes(self.chunk_size):
                        f.write(chunk)

        logger.debug(f"Downloaded {uri} to {destination}")
