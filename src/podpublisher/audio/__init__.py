"""Audio probing and conversion for Podpublisher."""

from podpublisher.audio.converter import AudioConverter, converted_path_for
from podpublisher.audio.prober import AudioProber, ProbeError, seconds_to_minutes

__all__ = [
    "AudioConverter",
    "AudioProber",
    "ProbeError",
    "converted_path_for",
    "seconds_to_minutes",
]
