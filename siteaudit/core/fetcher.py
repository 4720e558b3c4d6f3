"""
Page Fetcher
============

Retrieves a single page with a bounded timeout. Each call opens its own
session so concurrent analyzers never share connection state.
"""

import asyncio
from dataclasses import dataclass, field

import aiohttp
from bs4 import BeautifulSoup
from loguru import logger

from siteaudit.core.exceptions import FetchError

DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/91.0.4472.124 Safari/537.36"
)
DEFAULT_TIMEOUT = 10.0
MAX_REDIRECTS = 5


@dataclass
class FetchedPage:
    """Raw response for a fetched page."""
    url: str
    status: int = 200
    headers: dict[str, str] = field(default_factory=dict)
    body: bytes = b""
    elapsed_ms: int = 0
    charset: str = "utf-8"

    def header(self, name: str) -> str:
        """Header value by case-insensitive name, empty when absent."""
        return self.headers.get(name.lower(), "")

    @property
    def text(self) -> str:
        try:
            return self.body.decode(self.charset, errors="replace")
        except LookupError:
            return self.body.decode("utf-8", errors="replace")

    def soup(self) -> BeautifulSoup:
        return BeautifulSoup(self.text, "html.parser")


async def fetch_page(
    url: str,
    timeout: float = DEFAULT_TIMEOUT,
    user_agent: str = DEFAULT_USER_AGENT,
) -> FetchedPage:
    """
    Fetch a URL and read its body.

    Args:
        url: Absolute http(s) URL
        timeout: Total time allowed for the request, in seconds
        user_agent: User-Agent header to send

    Returns:
        FetchedPage with lower-cased headers and elapsed wall-clock time

    Raises:
        FetchError: on network failure, timeout or a non-2xx status
    """
    loop = asyncio.get_running_loop()
    start_time = loop.time()

    try:
        async with aiohttp.ClientSession(
            headers={"User-Agent": user_agent},
            timeout=aiohttp.ClientTimeout(total=timeout),
        ) as session:
            async with session.get(url, max_redirects=MAX_REDIRECTS) as response:
                body = await response.read()
                elapsed_ms = round((loop.time() - start_time) * 1000)

                if not 200 <= response.status < 300:
                    raise FetchError(f"Request failed with status code {response.status}")

                page = FetchedPage(
                    url=str(response.url),
                    status=response.status,
                    headers={key.lower(): value for key, value in response.headers.items()},
                    body=body,
                    elapsed_ms=elapsed_ms,
                    charset=response.charset or "utf-8",
                )
    except asyncio.TimeoutError as e:
        raise FetchError(f"Request timed out after {timeout:g}s") from e
    except aiohttp.ClientError as e:
        raise FetchError(str(e) or e.__class__.__name__) from e

    logger.debug("Fetched {} ({} bytes) in {}ms", url, len(page.body), page.elapsed_ms)
    return page
