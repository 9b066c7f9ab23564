"""Episode metadata generation with Claude."""

import json
import logging
from typing import Any

import anthropic
from anthropic import AsyncAnthropic
from pydantic import ValidationError

from podpublisher.config.schema import DEFAULT_MAX_TOKENS, DEFAULT_MODEL
from podpublisher.content.fetcher import ContentFetcher
from podpublisher.metadata.prompts import attribute_description, build_metadata_prompt
from podpublisher.models import EpisodeMetadata
from podpublisher.utils.errors import (
    ContentUnavailableError,
    ConversionError,
    FetchError,
    MetadataParseError,
    MetadataServiceError,
)

logger = logging.getLogger(__name__)


class MetadataGenerator:
    """Generates title, description and keywords from a reference page.

    Steps, each depending on the previous one:
    1. Fetch the page as markdown
    2. Ask Claude for a JSON object with title/description/keywords
    3. Parse and validate the JSON
    4. Add the source line and AI disclosure to the description

    Example:
        >>> generator = MetadataGenerator(api_key="sk-ant-...")
        >>> metadata = await generator.generate("https://example.com/post")
        >>> metadata.title
        'Test'
    """

    def __init__(
        self,
        api_key: str | None = None,
        model: str = DEFAULT_MODEL,
        max_tokens: int = DEFAULT_MAX_TOKENS,
        fetcher: ContentFetcher | None = None,
        client: AsyncAnthropic | None = None,
    ) -> None:
        """Initialize metadata generator.

        Args:
            api_key: Anthropic API key. Not checked here; a missing key
                fails the request.
            model: Claude model name
            max_tokens: Output token cap for the response
            fetcher: Content fetcher (default: new instance)
            client: Anthropic client (default: created on first use)
        """
        self.api_key = api_key
        self.model = model
        self.max_tokens = max_tokens
        self.fetcher = fetcher or ContentFetcher()
        self._client = client
        self._owns_client = client is None

    @property
    def client(self) -> AsyncAnthropic:
        """Anthropic client, created lazily without retries."""
        if self._client is None:
            if not self.api_key:
                raise MetadataServiceError("Claude API key is not configured")
            self._client = AsyncAnthropic(api_key=self.api_key, max_retries=0)
        return self._client

    async def aclose(self) -> None:
        """Close the Anthropic client if this generator created it."""
        if self._client is not None and self._owns_client:
            await self._client.close()
            self._client = None

    async def generate(self, content_url: str) -> EpisodeMetadata:
        """Generate episode metadata for a page.

        Args:
            content_url: Reference page URL

        Returns:
            EpisodeMetadata with attributed description

        Raises:
            ContentUnavailableError: If the page can't be fetched or is empty
            MetadataServiceError: If the Claude API call fails
            MetadataParseError: If the response is not the expected JSON
        """
        logger.info("Generating episode metadata with Claude")

        markdown = await self._fetch_markdown(content_url)
        raw_output = await self._request(build_metadata_prompt(markdown))
        metadata = parse_metadata(raw_output)

        metadata = metadata.model_copy(
            update={"description": attribute_description(metadata.description, content_url)}
        )
        logger.info(f"Generated metadata: {metadata.title!r}")
        logger.debug(f"Keywords: {', '.join(metadata.keywords)}")
        return metadata

    async def _fetch_markdown(self, content_url: str) -> str:
        try:
            markdown = await self.fetcher.fetch(content_url)
        except (FetchError, ConversionError) as e:
            logger.error(f"Error fetching website content: {e}")
            raise ContentUnavailableError(
                "Could not retrieve and convert website content."
            ) from e

        if not markdown or not markdown.strip():
            raise ContentUnavailableError("Could not retrieve and convert website content.")

        return markdown

    async def _request(self, prompt: str) -> str:
        try:
            response = await self.client.messages.create(
                model=self.model,
                max_tokens=self.max_tokens,
                messages=[{"role": "user", "content": prompt}],
            )
        except anthropic.APIStatusError as e:
            details = _error_details(e.response)
            raise MetadataServiceError(
                f"Claude API error: {e.status_code}. Details: {json.dumps(details)}",
                status_code=e.status_code,
                details=details,
            ) from e
        except anthropic.APIError as e:
            raise MetadataServiceError(f"Claude API error: {e}") from e

        text_content = []
        for block in response.content:
            if hasattr(block, "text"):
                text_content.append(block.text)

        if not text_content:
            raise MetadataParseError("Empty response from Claude")

        return "".join(text_content)


def parse_metadata(raw_output: str) -> EpisodeMetadata:
    """Parse the model's JSON answer into EpisodeMetadata.

    Raises:
        MetadataParseError: If the text is not a JSON object with a string
            title and description
    """
    try:
        data = json.loads(raw_output)
    except json.JSONDecodeError as e:
        raise MetadataParseError(
            f"Invalid JSON from Claude: {e}", raw_output=raw_output
        ) from e

    if not isinstance(data, dict):
        raise MetadataParseError(
            "Expected a JSON object from Claude", raw_output=raw_output
        )

    try:
        return EpisodeMetadata(**data)
    except (ValidationError, TypeError) as e:
        raise MetadataParseError(
            f"Unexpected metadata shape from Claude: {e}", raw_output=raw_output
        ) from e


def _error_details(response: Any) -> Any:
    text = response.text if response is not None else ""
    try:
        return json.loads(text)
    except (json.JSONDecodeError, TypeError):
        return {"raw": text}
