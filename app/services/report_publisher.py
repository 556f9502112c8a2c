"""
app/services/report_publisher.py

Uploads the rendered report to S3.
"""

from __future__ import annotations

import logging
from typing import Any

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from app.config import ReportSettings

logger = logging.getLogger(__name__)


class ReportPublishError(RuntimeError):
    """
    Raised when the report cannot be written to object storage.
    """


def create_s3_client(settings: ReportSettings) -> Any:
    """Create boto3 S3 client for report publishing.

    Credentials come from the standard AWS chain (environment, profile,
    instance role).
    """
    session_kwargs: dict[str, str] = {}
    if settings.s3_profile:
        session_kwargs["profile_name"] = settings.s3_profile
    if settings.s3_region:
        session_kwargs["region_name"] = settings.s3_region
    session = boto3.session.Session(**session_kwargs)
    return session.client("s3")


class ReportPublisher:
    def __init__(self, s3_client: Any, *, bucket: str, key: str) -> None:
        if not bucket:
            raise ValueError("REPORT_S3_BUCKET must be set to publish the report.")
        self._s3_client = s3_client
        self._bucket = bucket
        self._key = key

    @property
    def destination(self) -> str:
        return f"s3://{self._bucket}/{self._key}"

    def publish(self, body: bytes) -> str:
        """Upload `body` as JSON and return the destination URI.

        Raises:
            ReportPublishError: If the upload fails.
        """
        try:
            self._s3_client.put_object(
                Bucket=self._bucket,
                Key=self._key,
                Body=body,
                ContentType="application/json",
            )
        except (BotoCoreError, ClientError) as error:
            raise ReportPublishError(
                f"Failed to publish report to {self.destination}: {error}. "
                "Check AWS credentials and bucket permissions."
            ) from error

        logger.info("Published facility report to %s (%d bytes)", self.destination, len(body))
        return self.destination
