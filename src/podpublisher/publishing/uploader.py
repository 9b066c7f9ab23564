"""Episode upload to the hosting service."""

import json
import logging
from pathlib import Path
from typing import Any

import aiofiles
import httpx

from podpublisher.config.schema import DEFAULT_TIMEZONE
from podpublisher.publishing.schedule import to_utc_time_of_day
from podpublisher.utils.errors import UploadError

logger = logging.getLogger(__name__)


class EpisodeUploader:
    """Posts an episode to the hosting endpoint as a multipart form.

    Form fields: ``podcast_id``, ``title``, ``description``, ``duration``,
    ``explicit``, ``publish_date`` (local date as given), ``publish_time``
    (UTC time of day) and ``audio_file``. The whole file is read into
    memory before sending.

    Example:
        >>> uploader = EpisodeUploader("https://host.example/api/episodes")
        >>> response = await uploader.upload(
        ...     "pod-1", "Title", "Description", Path("episode42.mp3"), 3,
        ...     "2023-05-15", "10:30",
        ... )
    """

    def __init__(
        self,
        endpoint: str | None,
        source_timezone: str = DEFAULT_TIMEZONE,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        """Initialize uploader.

        Args:
            endpoint: Hosting API endpoint URL
            source_timezone: Zone the publish date/time are given in
            client: Shared HTTP client (default: a client per upload)
        """
        self.endpoint = endpoint
        self.source_timezone = source_timezone
        self.client = client

    async def upload(
        self,
        podcast_id: str | None,
        title: str,
        description: str,
        local_file_path: Path,
        duration_minutes: int,
        date: str,
        time: str,
    ) -> Any:
        """Upload an episode.

        Returns:
            Parsed JSON body of the hosting response

        Raises:
            TimeParseError: If date/time are invalid
            UploadError: If the upload fails or is rejected
        """
        logger.info("Uploading episode to hosting service...")

        utc_time = to_utc_time_of_day(date, time, self.source_timezone)
        logger.debug(f"Publish at {date} {time} ({self.source_timezone}) -> {utc_time} UTC")

        data = {
            "podcast_id": podcast_id or "",
            "title": title,
            "description": description,
            "duration": str(duration_minutes),
            "explicit": "false",
            "publish_date": date,
            "publish_time": utc_time,
        }

        local_file_path = Path(local_file_path)
        try:
            async with aiofiles.open(local_file_path, "rb") as f:
                audio = await f.read()
        except OSError as e:
            raise UploadError(f"Could not read audio file {local_file_path}: {e}") from e

        files = {"audio_file": (local_file_path.name, audio, "audio/mpeg")}

        if not self.endpoint:
            raise UploadError("Hosting API endpoint is not configured")

        try:
            if self.client is not None:
                response = await self.client.post(self.endpoint, data=data, files=files)
            else:
                async with httpx.AsyncClient() as client:
                    response = await client.post(self.endpoint, data=data, files=files)
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            raise UploadError(f"Failed to upload episode to hosting service: {e}") from e

        body = response.text
        logger.info(f"Hosting Upload Response: {body}")
        details = _parse_json(body)

        if not response.is_success:
            raise UploadError(
                f"Failed to upload episode to hosting service (status: {response.status_code})",
                status_code=response.status_code,
                details=details if details is not None else {"raw": body},
            )

        if details is None:
            raise UploadError(
                "Hosting service returned a non-JSON response",
                status_code=response.status_code,
                details={"raw": body},
            )

        return details


def _parse_json(body: str) -> Any:
    try:
        return json.loads(body)
    except json.JSONDecodeError:
        return None
