"""MP3 transcoding with ffmpeg."""

import asyncio
import logging
import subprocess
from pathlib import Path

from podpublisher.utils.errors import ConversionError

logger = logging.getLogger(__name__)

# Stereo, 48 kHz, 192 kbps, source tags kept, ID3v2.3 plus ID3v1
MP3_OUTPUT_OPTIONS = [
    "-f", "mp3",
    "-ac", "2",
    "-ar", "48000",
    "-b:a", "192k",
    "-map_metadata", "0",
    "-id3v2_version", "3",
    "-write_id3v1", "1",
]


def converted_path_for(input_path: Path, output_dir: Path | None = None) -> Path:
    """Where the MP3 for ``input_path`` is written.

    The input's base name with an ``.mp3`` extension, placed in
    ``output_dir`` (default: the current working directory, not the
    input's directory). Two runs for inputs with the same base name and
    output directory write the same file.

    >>> converted_path_for(Path("./recordings/episode42.wav"))
    PosixPath('episode42.mp3')
    """
    name = f"{Path(input_path).stem}.mp3"
    if output_dir is None:
        return Path(name)
    return Path(output_dir) / name


class AudioConverter:
    """Transcodes local audio files to the standard episode MP3 format."""

    def __init__(self, output_dir: Path | None = None, ffmpeg_path: str = "ffmpeg") -> None:
        """Initialize audio converter.

        Args:
            output_dir: Directory for converted files (default: working directory)
            ffmpeg_path: ffmpeg executable
        """
        self.output_dir = output_dir
        self.ffmpeg_path = ffmpeg_path

    async def convert(self, input_path: Path) -> Path:
        """Transcode ``input_path`` to MP3.

        Args:
            input_path: Source audio file

        Returns:
            Path to the converted file

        Raises:
            ConversionError: If ffmpeg fails
        """
        input_path = Path(input_path)
        output_path = converted_path_for(input_path, self.output_dir)

        loop = asyncio.get_running_loop()
        await loop.run_in_executor(None, self._convert_sync, input_path, output_path)

        logger.info(f"Conversion successful: {input_path} -> {output_path}")
        return output_path

    def _convert_sync(self, input_path: Path, output_path: Path) -> None:
        """Synchronous ffmpeg call for thread pool execution."""
        if output_path.parent != Path("."):
            output_path.parent.mkdir(parents=True, exist_ok=True)

        command = [
            self.ffmpeg_path,
            "-y",
            "-hide_banner",
            "-loglevel",
            "error",
            "-i",
            str(input_path),
            *MP3_OUTPUT_OPTIONS,
            str(output_path),
        ]
        logger.debug(f"Running: {' '.join(command)}")

        try:
            subprocess.run(command, capture_output=True, text=True, check=True)
        except FileNotFoundError as e:
            raise ConversionError("ffmpeg not found - install ffmpeg") from e
        except subprocess.CalledProcessError as e:
            stderr = (e.stderr or "").strip()
            logger.error(f"FFmpeg error: {stderr}")
            raise ConversionError(
                f"Failed to convert {input_path} to MP3: {stderr or f'exit code {e.returncode}'}",
                stderr=stderr,
            ) from e
