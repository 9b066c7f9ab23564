"""Tests for EpisodeUploader."""

from pathlib import Path

import httpx
import pytest
import respx

from podpublisher.publishing import EpisodeUploader
from podpublisher.utils.errors import TimeParseError, UploadError

ENDPOINT = "https://hosting.example.com/api/episodes"


def form_fields(request: httpx.Request) -> dict[str, str]:
    """Decode the text fields of a multipart request."""
    content_type = request.headers["content-type"]
    boundary = content_type.split("boundary=")[1].encode()
    fields = {}
    for part in request.content.split(b"--" + boundary):
        if b"Content-Disposition" not in part:
            continue
        headers, _, body = part.partition(b"\r\n\r\n")
        name = headers.split(b'name="')[1].split(b'"')[0].decode()
        if b"filename=" in headers:
            continue
        fields[name] = body.rstrip(b"\r\n").decode()
    return fields


class TestEpisodeUploader:
    """Test EpisodeUploader class."""

    @pytest.fixture
    def audio_file(self, tmp_path: Path) -> Path:
        """Fake converted MP3."""
        path = tmp_path / "episode42.mp3"
        path.write_bytes(b"ID3fake-mp3-bytes")
        return path

    @pytest.fixture
    def uploader(self) -> EpisodeUploader:
        """Uploader for the default zone."""
        return EpisodeUploader(ENDPOINT)

    async def _upload(self, uploader: EpisodeUploader, audio_file: Path, **kwargs):
        args = {
            "podcast_id": "pod-123",
            "title": "Test",
            "description": "Source: x\n\nDescription",
            "local_file_path": audio_file,
            "duration_minutes": 3,
            "date": "2023-05-15",
            "time": "10:30",
        }
        args.update(kwargs)
        return await uploader.upload(**args)

    @pytest.mark.asyncio
    @respx.mock
    async def test_upload_success(self, uploader: EpisodeUploader, audio_file: Path) -> None:
        """Test a successful upload returns the parsed JSON."""
        respx.post(ENDPOINT).mock(
            return_value=httpx.Response(201, json={"id": "ep-1", "status": "scheduled"})
        )

        response = await self._upload(uploader, audio_file)

        assert response == {"id": "ep-1", "status": "scheduled"}

    @pytest.mark.asyncio
    @respx.mock
    async def test_form_fields(self, uploader: EpisodeUploader, audio_file: Path) -> None:
        """Test every form field, with the local date and UTC time."""
        route = respx.post(ENDPOINT).mock(return_value=httpx.Response(200, json={}))

        await self._upload(uploader, audio_file)

        fields = form_fields(route.calls.last.request)
        assert fields == {
            "podcast_id": "pod-123",
            "title": "Test",
            "description": "Source: x\n\nDescription",
            "duration": "3",
            "explicit": "false",
            "publish_date": "2023-05-15",
            "publish_time": "13:30:00",
        }

    @pytest.mark.asyncio
    @respx.mock
    async def test_publish_date_not_converted(
        self, uploader: EpisodeUploader, audio_file: Path
    ) -> None:
        """Test the local date is sent even when UTC is already the next day."""
        route = respx.post(ENDPOINT).mock(return_value=httpx.Response(200, json={}))

        await self._upload(uploader, audio_file, time="22:15")

        fields = form_fields(route.calls.last.request)
        assert fields["publish_date"] == "2023-05-15"
        assert fields["publish_time"] == "01:15:00"

    @pytest.mark.asyncio
    @respx.mock
    async def test_audio_file_part(self, uploader: EpisodeUploader, audio_file: Path) -> None:
        """Test the audio part carries file name and bytes."""
        route = respx.post(ENDPOINT).mock(return_value=httpx.Response(200, json={}))

        await self._upload(uploader, audio_file)

        content = route.calls.last.request.content
        assert b'name="audio_file"; filename="episode42.mp3"' in content
        assert b"ID3fake-mp3-bytes" in content

    @pytest.mark.asyncio
    @respx.mock
    async def test_rejected_upload(self, uploader: EpisodeUploader, audio_file: Path) -> None:
        """Test non-2xx raises UploadError with status and details."""
        respx.post(ENDPOINT).mock(
            return_value=httpx.Response(422, json={"error": "duration required"})
        )

        with pytest.raises(UploadError, match="Failed to upload episode") as exc_info:
            await self._upload(uploader, audio_file)

        assert exc_info.value.status_code == 422
        assert exc_info.value.details == {"error": "duration required"}

    @pytest.mark.asyncio
    @respx.mock
    async def test_rejected_upload_text_body(
        self, uploader: EpisodeUploader, audio_file: Path
    ) -> None:
        """Test non-JSON error bodies are kept raw."""
        respx.post(ENDPOINT).mock(return_value=httpx.Response(502, text="Bad Gateway"))

        with pytest.raises(UploadError) as exc_info:
            await self._upload(uploader, audio_file)

        assert exc_info.value.details == {"raw": "Bad Gateway"}

    @pytest.mark.asyncio
    @respx.mock
    async def test_non_json_success(self, uploader: EpisodeUploader, audio_file: Path) -> None:
        """Test a 200 with a non-JSON body is an UploadError."""
        respx.post(ENDPOINT).mock(return_value=httpx.Response(200, text="OK"))

        with pytest.raises(UploadError, match="non-JSON"):
            await self._upload(uploader, audio_file)

    @pytest.mark.asyncio
    @respx.mock
    async def test_network_error(self, uploader: EpisodeUploader, audio_file: Path) -> None:
        """Test connection failures raise UploadError."""
        respx.post(ENDPOINT).mock(side_effect=httpx.ConnectError("refused"))

        with pytest.raises(UploadError, match="refused"):
            await self._upload(uploader, audio_file)

    @pytest.mark.asyncio
    @respx.mock
    async def test_invalid_time_fails_before_request(
        self, uploader: EpisodeUploader, audio_file: Path
    ) -> None:
        """Test TimeParseError is raised and nothing is posted."""
        route = respx.post(ENDPOINT).mock(return_value=httpx.Response(200, json={}))

        with pytest.raises(TimeParseError):
            await self._upload(uploader, audio_file, date="2023-13-01")

        assert not route.called

    @pytest.mark.asyncio
    async def test_missing_file(self, uploader: EpisodeUploader, tmp_path: Path) -> None:
        """Test an unreadable converted file."""
        with pytest.raises(UploadError, match="Could not read audio file"):
            await self._upload(uploader, tmp_path / "gone.mp3")

    @pytest.mark.asyncio
    async def test_missing_endpoint(self, audio_file: Path) -> None:
        """Test an unconfigured endpoint fails the upload step."""
        with pytest.raises(UploadError, match="not configured"):
            await self._upload(EpisodeUploader(None), audio_file)

    @pytest.mark.asyncio
    @respx.mock
    async def test_custom_timezone(self, audio_file: Path) -> None:
        """Test the configured source zone drives the UTC time."""
        route = respx.post(ENDPOINT).mock(return_value=httpx.Response(200, json={}))
        uploader = EpisodeUploader(ENDPOINT, source_timezone="Europe/Berlin")

        await self._upload(uploader, audio_file)

        assert form_fields(route.calls.last.request)["publish_time"] == "08:30:00"

    @pytest.mark.asyncio
    async def test_malformed_endpoint(self, audio_file: Path) -> None:
        """Test an endpoint httpx can't parse raises UploadError."""
        uploader = EpisodeUploader("https://hosting.example.com/\x01episodes")

        with pytest.raises(UploadError, match="Failed to upload episode"):
            await self._upload(uploader, audio_file)
