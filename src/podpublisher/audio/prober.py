"""Audio duration probing with ffprobe."""

import asyncio
import logging
import math
import subprocess
from pathlib import Path

logger = logging.getLogger(__name__)


class ProbeError(Exception):
    """Raised when ffprobe cannot report a duration."""

    pass


def seconds_to_minutes(seconds: float) -> int:
    """Round seconds to whole minutes, halves rounding up (90s -> 2)."""
    if not math.isfinite(seconds) or seconds <= 0:
        return 0
    return math.floor(seconds / 60 + 0.5)


class AudioProber:
    """Reads the duration of a local audio file.

    A failed probe does not stop a run: ``probe_duration`` logs the
    failure and reports zero minutes. Use ``probe_seconds`` to get the
    failure as an exception instead.
    """

    def __init__(self, ffprobe_path: str = "ffprobe") -> None:
        self.ffprobe_path = ffprobe_path

    async def probe_duration(self, path: Path) -> int:
        """Get duration in whole minutes, or 0 if it can't be determined.

        Args:
            path: Audio file to inspect

        Returns:
            Duration in minutes (non-negative)
        """
        minutes, _ = await self.measure(path)
        return minutes

    async def measure(self, path: Path) -> tuple[int, ProbeError | None]:
        """Get duration in minutes along with the probe failure, if any."""
        try:
            seconds = await self.probe_seconds(path)
        except ProbeError as e:
            logger.warning(f"Error getting audio metadata: {e}")
            return 0, e

        minutes = seconds_to_minutes(seconds)
        logger.info(f"Calculated audio duration: {minutes} minutes")
        return minutes, None

    async def probe_seconds(self, path: Path) -> float:
        """Get duration in seconds.

        Raises:
            ProbeError: If ffprobe fails or reports no duration
        """
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(None, self._probe_sync, Path(path))

    def _probe_sync(self, path: Path) -> float:
        """Synchronous ffprobe call for thread pool execution."""
        try:
            result = subprocess.run(
                [
                    self.ffprobe_path,
                    "-v",
                    "error",
                    "-show_entries",
                    "format=duration",
                    "-of",
                    "default=noprint_wrappers=1:nokey=1",
                    str(path),
                ],
                capture_output=True,
                text=True,
                check=True,
            )
        except FileNotFoundError as e:
            raise ProbeError("ffprobe not found - install ffmpeg") from e
        except subprocess.CalledProcessError as e:
            raise ProbeError(f"ffprobe failed for {path}: {e.stderr.strip()}") from e

        output = result.stdout.strip()
        try:
            return float(output)
        except ValueError as e:
            raise ProbeError(f"Could not parse duration {output!r} for {path}") from e
