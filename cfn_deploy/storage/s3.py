# cfn_deploy/storage/s3.py
"""AWS S3 storage backend"""

import logging
from pathlib import Path
from typing import Dict, Any
from urllib.parse import quote

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from .base import ObjectStorage
from ..api.exceptions import RemoteServiceError
from ..utils.async_utils import run_blocking

logger = logging.getLogger(__name__)


class S3Storage(ObjectStorage):
    """AWS S3 storage implementation"""

    def __init__(self, config: Dict[str, Any] = None, client=None):
        """
        Initialize S3 storage

        Args:
            config: S3 configuration including:
                - region: AWS region
                - endpoint_url: Custom endpoint (for S3-compatible services)
            client: Pre-built boto3 S3 client
        """
        super().__init__(config)
        self.client = client
        self._owns_client = client is None
        self.region = self.config.get('region')

    async def _do_initialize(self) -> None:
        """Create the S3 client"""
        if self.client is None:
            self.client = boto3.client(
                "s3",
                region_name=self.region,
                endpoint_url=self.config.get('endpoint_url'),
            )

    def object_url(self, bucket: str, key: str) -> str:
        """Build the retrieval URL of an object"""
        endpoint = self.client.meta.endpoint_url.rstrip("/")
        return f"{endpoint}/{bucket}/{quote(key)}"

    async def upload(self, bucket: str, key: str, local_path: Path) -> str:
        """Upload file to S3"""
        await self.initialize()
        logger.debug(f"Uploading {local_path} to s3://{bucket}/{key}")

        # boto3 is synchronous, run in executor
        def _upload():
            with open(local_path, 'rb') as f:
                self.client.upload_fileobj(f, bucket, key)
            return self.object_url(bucket, key)

        try:
            return await run_blocking(_upload)
        except (BotoCoreError, ClientError) as e:
            raise RemoteServiceError(str(e), operation="upload") from e

    async def _do_close(self) -> None:
        """Release the S3 client"""
        if self._owns_client:
            self.client = None
