# =============================================================================
# lib/spaces_client.py - S3 Client Factory for DigitalOcean Spaces
# =============================================================================
# Builds a boto3 S3 client for any S3-compatible endpoint from Settings.
#
# The client makes a single attempt per call (no automatic retries) and has
# explicit connect/read timeouts, so a stalled object store surfaces as an
# error instead of hanging the request.
#
# Usage:
#   from lib.spaces_client import create_spaces_client
#   s3 = create_spaces_client(settings)
# =============================================================================

import logging

import boto3
from botocore.config import Config

from app.config import Settings

logger = logging.getLogger(__name__)


def create_spaces_client(settings: Settings):
    """
    Create a boto3 S3 client for the configured Space.

    Args:
        settings: Application settings (endpoint, region, credentials, timeouts)

    Returns:
        botocore S3 client
    """
    client_config = Config(
        region_name=settings.DO_SPACE_REGION,
        connect_timeout=settings.SPACE_CONNECT_TIMEOUT,
        read_timeout=settings.SPACE_READ_TIMEOUT,
        retries={"max_attempts": 1, "mode": "standard"},
        s3={"addressing_style": "virtual"},
    )

    client = boto3.session.Session().client(
        "s3",
        endpoint_url=settings.SPACE_ENDPOINT,
        aws_access_key_id=settings.ACCESS_KEY,
        aws_secret_access_key=settings.SECRET_KEY,
        config=client_config,
    )

    logger.info(f"Spaces client initialized for {settings.SPACE_ENDPOINT} ({settings.DO_SPACE_REGION})")
    return client
