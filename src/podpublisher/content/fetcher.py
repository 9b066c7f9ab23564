"""Fetch a reference page and convert it to markdown."""

import logging

import httpx

from podpublisher.content.markdown import html_to_markdown
from podpublisher.utils.errors import ConversionError, FetchError

logger = logging.getLogger(__name__)

USER_AGENT = "podpublisher/0.1"


class ContentFetcher:
    """Retrieves a URL and returns its content as markdown.

    One GET per call, no retries. Timeouts are httpx defaults.

    Example:
        >>> fetcher = ContentFetcher()
        >>> markdown = await fetcher.fetch("https://example.com/post")
    """

    def __init__(self, client: httpx.AsyncClient | None = None) -> None:
        """Initialize content fetcher.

        Args:
            client: Shared HTTP client (default: a client per request)
        """
        self.client = client

    async def fetch(self, url: str) -> str:
        """Fetch URL content as markdown.

        Args:
            url: Page to fetch

        Returns:
            Markdown text (may be empty if the page has no text)

        Raises:
            FetchError: If the request fails or returns a non-success status
            ConversionError: If the body cannot be converted to markdown
        """
        logger.info(f"Fetching content from {url}")

        try:
            if self.client is not None:
                response = await self.client.get(url)
            else:
                async with httpx.AsyncClient(
                    follow_redirects=True, headers={"User-Agent": USER_AGENT}
                ) as client:
                    response = await client.get(url)
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            raise FetchError(f"Failed to fetch URL: {url} ({e})", url=url) from e

        if not response.is_success:
            raise FetchError(
                f"Failed to fetch URL: {url} (status: {response.status_code})",
                url=url,
                status_code=response.status_code,
            )

        body = response.text
        content_type = response.headers.get("content-type", "")
        logger.debug(f"Fetched {len(body)} characters ({content_type or 'unknown type'})")

        if not _is_html(content_type, body):
            return body.strip()

        try:
            markdown = html_to_markdown(body)
        except Exception as e:
            raise ConversionError(f"Could not convert {url} to markdown: {e}") from e

        logger.debug(f"Converted page to {len(markdown)} characters of markdown")
        return markdown


def _is_html(content_type: str, body: str) -> bool:
    if "html" in content_type.lower():
        return True
    if content_type and not content_type.lower().startswith("text/"):
        return False
    return body.lstrip()[:1] == "<"
