"""Episode metadata generation."""

from podpublisher.metadata.generator import MetadataGenerator, parse_metadata
from podpublisher.metadata.prompts import DISCLOSURE, attribute_description

__all__ = ["DISCLOSURE", "MetadataGenerator", "attribute_description", "parse_metadata"]
