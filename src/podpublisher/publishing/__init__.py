"""Scheduling and upload to the hosting service."""

from podpublisher.publishing.schedule import parse_local_datetime, to_utc_time_of_day
from podpublisher.publishing.uploader import EpisodeUploader

__all__ = ["EpisodeUploader", "parse_local_datetime", "to_utc_time_of_day"]
