"""Reference page retrieval for Podpublisher."""

from podpublisher.content.fetcher import ContentFetcher
from podpublisher.content.markdown import html_to_markdown

__all__ = ["ContentFetcher", "html_to_markdown"]
