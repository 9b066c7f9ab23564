"""Pipeline orchestrator for publishing an episode.

Runs the steps strictly in order:

    START -> METADATA_GENERATED -> DURATION_PROBED -> AUDIO_CONVERTED
          -> UPLOADED -> DONE

Any step failure moves the run to FAILED and skips the remaining steps.
Nothing is cleaned up on failure: a converted MP3 stays where it was
written.
"""

import logging
from collections.abc import Callable
from typing import Any

from podpublisher.audio import AudioConverter, AudioProber
from podpublisher.config.schema import PublisherConfig
from podpublisher.metadata import MetadataGenerator
from podpublisher.models import (
    AudioAsset,
    EpisodeMetadata,
    EpisodeRequest,
    PipelineResult,
    PipelineStage,
)
from podpublisher.publishing import EpisodeUploader
from podpublisher.utils.errors import PublisherError, error_kind

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[str, dict[str, Any]], None]


class PipelineOrchestrator:
    """Sequences metadata generation, probing, conversion and upload.

    Components default to instances built from ``config``; pass your own
    to replace any of them.

    Example:
        >>> orchestrator = PipelineOrchestrator(config)
        >>> result = await orchestrator.run(request)
        >>> result.to_output()["success"]
        True
    """

    def __init__(
        self,
        config: PublisherConfig,
        generator: MetadataGenerator | None = None,
        prober: AudioProber | None = None,
        converter: AudioConverter | None = None,
        uploader: EpisodeUploader | None = None,
    ) -> None:
        self.config = config
        self.generator = generator or MetadataGenerator(
            api_key=config.claude_api_key,
            model=config.model,
            max_tokens=config.max_tokens,
        )
        self.prober = prober or AudioProber()
        self.converter = converter or AudioConverter(output_dir=config.output_dir)
        self.uploader = uploader or EpisodeUploader(
            endpoint=config.hosting_endpoint,
            source_timezone=config.source_timezone,
        )

    async def run(
        self,
        request: EpisodeRequest,
        progress_callback: ProgressCallback | None = None,
    ) -> PipelineResult:
        """Publish one episode.

        Never raises for step failures; they come back as a failed result.

        Args:
            request: Episode inputs
            progress_callback: Called as ``callback(step_name, step_data)``
                when each step starts and completes

        Returns:
            PipelineResult describing success or the first failure
        """
        stage = PipelineStage.START
        warnings: list[str] = []

        def notify(step_name: str, **step_data: Any) -> None:
            if progress_callback:
                progress_callback(step_name, step_data)

        logger.info("Processing new audio upload request")

        try:
            notify("metadata_start", url=request.content_url)
            metadata = await self.generator.generate(request.content_url)
            stage = PipelineStage.METADATA_GENERATED
            notify("metadata_complete", title=metadata.title, keywords=metadata.keywords)

            notify("probe_start", path=str(request.audio_file_path))
            duration_minutes, probe_error = await self.prober.measure(request.audio_file_path)
            if probe_error is not None:
                warnings.append(f"Duration unknown, reporting 0 minutes: {probe_error}")
            stage = PipelineStage.DURATION_PROBED
            notify(
                "probe_complete",
                duration_minutes=duration_minutes,
                probed=probe_error is None,
            )

            notify("conversion_start", path=str(request.audio_file_path))
            converted_path = await self.converter.convert(request.audio_file_path)
            asset = AudioAsset(
                original_path=request.audio_file_path,
                converted_path=converted_path,
                duration_minutes=duration_minutes,
            )
            stage = PipelineStage.AUDIO_CONVERTED
            logger.info(f"Audio converted: {asset.original_path} -> {asset.converted_path}")
            notify("conversion_complete", path=str(asset.converted_path))

            notify("upload_start", endpoint=self.config.hosting_endpoint)
            hosting_response = await self._upload(request, metadata, asset)
            stage = PipelineStage.UPLOADED
            notify("upload_complete", response=hosting_response)

        except Exception as e:
            if not isinstance(e, PublisherError):
                logger.exception("Unexpected error processing audio")
            else:
                logger.error(f"Error processing audio: {e}")

            notify("failed", stage=stage.value, error=str(e), type=error_kind(e))
            return PipelineResult.failed(
                error=str(e),
                error_type=error_kind(e),
                stage=PipelineStage.FAILED,
                warnings=warnings,
            )
        finally:
            await self.generator.aclose()

        result = PipelineResult(
            success=True,
            title=metadata.title,
            description=metadata.description,
            keywords=list(metadata.keywords),
            duration_minutes=asset.duration_minutes,
            hosting_response=hosting_response,
            stage=PipelineStage.DONE,
            warnings=warnings,
        )
        notify("done", title=result.title)
        return result

    async def _upload(
        self,
        request: EpisodeRequest,
        metadata: EpisodeMetadata,
        asset: AudioAsset,
    ) -> Any:
        return await self.uploader.upload(
            self.config.podcast_id,
            metadata.title,
            metadata.description,
            asset.converted_path,
            asset.duration_minutes,
            request.publish_date,
            request.publish_time,
        )
