"""Prompt text for episode metadata generation."""

DISCLOSURE = "The contents and hosts of this podcast are AI generated."

METADATA_PROMPT = """Here is the content of the website in markdown format:

{markdown}

Based on this content, generate a compelling podcast episode title and description. \
The title of the podcast episode should be based on the h1 tag of the page. \
The description should be based on an overall summary of the contents of the page. \
Do not include any intro text or concluding text. \
Only provide the response directly with the response format as valid JSON with this format \
(without backticks):

{{
  "title": "title",
  "description": "description",
  "keywords": ["keyword1", "keyword2", "keyword3"]
}}"""


def build_metadata_prompt(markdown: str) -> str:
    """Build the single user prompt sent to the model."""
    return METADATA_PROMPT.format(markdown=markdown)


def attribute_description(description: str, content_url: str) -> str:
    """Add the source line and AI disclosure to a description.

    Applied to every generated description, whatever the model returned.
    """
    return f"Source: {content_url}\n\n{description}\n\n{DISCLOSURE}"
