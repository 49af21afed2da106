"""Deploy service implementation"""

import logging
from typing import Callable, Dict, Optional, Tuple

from ..api.exceptions import (
    CfnDeployError,
    MainTemplateNotFoundError,
    UnexpectedStatusError,
    UploadError,
)
from ..constants import POLL_INTERVAL, STACK_TIMEOUT, StackStatus
from ..core import load_bundle
from ..models import (
    DeployAction,
    DeployRequest,
    DeployResult,
    DeploymentOutcome,
    OperationStatus,
)
from ..orchestration import StackOrchestrator
from ..storage import ObjectStorage
from ..utils.hash_utils import compute_version
from ..utils.stack_utils import base_url, templates_prefix
from .event_tailer import EventCallback
from .stack_service import StackService
from .template_service import TemplateService

logger = logging.getLogger(__name__)


class DeployService:
    """Runs a complete deployment: bundle, version, upload, create or update, wait"""

    def __init__(self,
                 orchestrator: StackOrchestrator,
                 storage: ObjectStorage,
                 poll_interval: float = POLL_INTERVAL,
                 timeout: float = STACK_TIMEOUT):
        """
        Initialize deploy service

        Args:
            orchestrator: Stack orchestration client
            storage: Object storage client
            poll_interval: Seconds between stack polls
            timeout: Seconds to wait for the stack to converge
        """
        self.orchestrator = orchestrator
        self.storage = storage
        self.template_service = TemplateService(orchestrator, storage)
        self.stack_service = StackService(orchestrator, poll_interval, timeout)

    async def dispatch(self,
                       exists: bool,
                       request: DeployRequest,
                       parameters: Dict[str, str],
                       template_url: str) -> Tuple[DeployAction, str, str]:
        """
        Create or update the stack

        Args:
            exists: Whether the stack already exists
            request: Deployment request
            parameters: Parameters including the reserved keys
            template_url: Retrieval URL of the main template

        Returns:
            Tuple of (action, stack_id, status to wait for)

        Raises:
            RemoteServiceError: If the request is rejected
        """
        if exists:
            logger.info(f"Updating stack {request.stack_name}")
            stack_id = await self.orchestrator.update_stack(
                request.stack_name, parameters, dict(request.tags), template_url
            )
            return DeployAction.UPDATE, stack_id, StackStatus.UPDATE_COMPLETE

        logger.info(f"Creating stack {request.stack_name}")
        stack_id = await self.orchestrator.create_stack(
            request.stack_name, parameters, dict(request.tags), template_url
        )
        return DeployAction.CREATE, stack_id, StackStatus.CREATE_COMPLETE

    async def deploy(self,
                     request: DeployRequest,
                     on_event: Optional[EventCallback] = None,
                     on_upload: Optional[Callable[[int, int], None]] = None) -> DeployResult:
        """
        Deploy workflow

        Args:
            request: Deployment request
            on_event: Receives stack events while waiting for convergence
            on_upload: Upload progress callback(completed, total)

        Returns:
            DeployResult; failures are reported in the result, not raised
        """
        result = DeployResult(status=OperationStatus.FAILED, stack_name=request.stack_name)

        try:
            # 1. Resolve bundle and version
            bundle = load_bundle(request.template_folder, request.main_template)
            result.version = await compute_version(bundle.files, root=bundle.root)
            logger.info(f"Template bundle version {result.version} ({len(bundle)} files)")

            # 2. Validate and upload
            prefix = templates_prefix(request.bucket_folder, request.stack_name, result.version)
            result.uploads = await self.template_service.upload_bundle(
                bundle, request.bucket, prefix, callback=on_upload
            )
            result.template_url = result.uploads.url_for(bundle.main_template_path)

            # 3. Create or update
            logger.info("Checking if stack already exists")
            for name in request.overridden_parameters:
                logger.warning(f"Parameter {name} is set by the deployer; the supplied value is ignored")
            exists = await self.stack_service.stack_exists(request.stack_name)
            parameters = request.stack_parameters(result.version, base_url(result.template_url))
            result.action, stack_id, desired_status = await self.dispatch(
                exists, request, parameters, result.template_url
            )

            # 4. Wait for convergence
            result.outcome = DeploymentOutcome(
                stack_id=stack_id, status="", expected_status=desired_status
            )
            result.outcome = await self._wait(stack_id, desired_status, on_event)

            return result.complete(OperationStatus.SUCCESS)

        except (UploadError, MainTemplateNotFoundError) as e:
            result.uploads = e.results
            result.error = e
        except UnexpectedStatusError as e:
            result.outcome = DeploymentOutcome(
                stack_id=e.stack_id, status=e.actual, expected_status=e.expected
            )
            result.error = e
        except CfnDeployError as e:
            result.error = e

        logger.debug(f"Deployment of {request.stack_name} failed: {result.error}")
        return result.complete(OperationStatus.FAILED)

    async def _wait(self,
                    stack_id: str,
                    desired_status: str,
                    on_event: Optional[EventCallback]) -> DeploymentOutcome:
        """Wait for the stack, streaming events alongside when requested"""
        if on_event is None:
            return await self.stack_service.wait_for_stack(stack_id, desired_status)

        tailer = self.stack_service.tail_events(stack_id, on_event)
        try:
            return await self.stack_service.wait_for_stack(stack_id, desired_status)
        finally:
            await tailer.stop()
            # Report events that arrived after the last tick
            await tailer.poll_once()
