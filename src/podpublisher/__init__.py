"""Podpublisher - publish a recording as a scheduled podcast episode."""

__version__ = "0.1.0"
