"""Template validation and upload service"""

import logging
from pathlib import Path
from typing import Callable, Iterable, Optional

import aiofiles

from ..api.exceptions import (
    BundleError,
    MainTemplateNotFoundError,
    TemplateValidationError,
    UploadError,
)
from ..models import TemplateBundle, UploadPlan, UploadResult, UploadResultSet
from ..orchestration import StackOrchestrator
from ..storage import ObjectStorage
from ..utils.async_utils import gather_in_completion_order

logger = logging.getLogger(__name__)


class TemplateService:
    """Validates templates and uploads them to object storage"""

    def __init__(self, orchestrator: StackOrchestrator, storage: ObjectStorage):
        """
        Initialize template service

        Args:
            orchestrator: Stack orchestration client
            storage: Object storage client
        """
        self.orchestrator = orchestrator
        self.storage = storage

    async def validate_template(self, file_path: Path) -> None:
        """Submit a single template body for validation"""
        try:
            async with aiofiles.open(file_path, 'r', encoding='utf-8') as f:
                body = await f.read()
        except (OSError, UnicodeDecodeError) as e:
            raise BundleError(f"Unable to read {file_path}: {e}") from e

        await self.orchestrator.validate_template(body)

    async def validate_templates(self, files: Iterable[Path]) -> None:
        """
        Validate every template concurrently

        All validations run to completion. Failures are collected in the
        order they complete.

        Args:
            files: Template files

        Raises:
            TemplateValidationError: If any template was rejected
        """
        files = list(files)
        outcomes = await gather_in_completion_order(
            self.validate_template(f) for f in files
        )
        failures = [o for o in outcomes if isinstance(o, Exception)]

        if failures:
            logger.debug(f"{len(failures)} of {len(files)} templates failed validation")
            raise TemplateValidationError(failures)

    async def upload_file(self, bucket: str, key: str, file_path: Path) -> UploadResult:
        """Upload a single file, capturing any failure in the result"""
        result = UploadResult(file=Path(file_path), key=key)
        try:
            result.url = await self.storage.upload(bucket, key, Path(file_path))
        except Exception as e:
            logger.debug(f"Upload of {file_path} failed: {e}")
            result.error = e
        return result

    async def upload_templates(self,
                               plan: UploadPlan,
                               callback: Optional[Callable[[int, int], None]] = None
                               ) -> UploadResultSet:
        """
        Upload every planned file concurrently

        Args:
            plan: Upload plan
            callback: Progress callback(completed, total)

        Returns:
            One result per planned file

        Raises:
            UploadError: If any upload failed; carries the full result set
        """
        outcomes = await gather_in_completion_order(
            (self.upload_file(plan.bucket, key, local_path) for local_path, key in plan.items),
            callback=callback
        )
        results = UploadResultSet(results=outcomes)

        if results.has_errors:
            raise UploadError(results)

        return results

    async def upload_bundle(self,
                            bundle: TemplateBundle,
                            bucket: str,
                            prefix: str,
                            callback: Optional[Callable[[int, int], None]] = None
                            ) -> UploadResultSet:
        """Validate and upload a bundle

        Returns:
            Upload results; the main template URL is guaranteed present

        Raises:
            TemplateValidationError: Before any upload is attempted
            UploadError: If any upload failed
            MainTemplateNotFoundError: If the main template URL is missing
        """
        logger.info("Validating templates")
        await self.validate_templates(bundle.files)

        logger.info("Uploading templates")
        plan = UploadPlan.for_bundle(bundle, bucket, prefix)
        results = await self.upload_templates(plan, callback=callback)

        if results.url_for(bundle.main_template_path) is None:
            raise MainTemplateNotFoundError(bundle.main_template, results)

        return results
