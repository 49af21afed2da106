"""Deployer API for deployment operations"""

from typing import Callable, Dict, Optional

from ..constants import DEFAULT_MAIN_TEMPLATE, DEFAULT_REGION, POLL_INTERVAL, STACK_TIMEOUT
from ..models import DeployRequest, DeployResult
from ..orchestration import CloudFormationOrchestrator, StackOrchestrator
from ..services import DeployService
from ..services.event_tailer import EventCallback
from ..storage import ObjectStorage, S3Storage
from ..utils.async_utils import run_async


class Deployer:
    """Deployer class for deployment operations"""

    def __init__(self,
                 region: str = DEFAULT_REGION,
                 orchestrator: Optional[StackOrchestrator] = None,
                 storage: Optional[ObjectStorage] = None,
                 poll_interval: float = POLL_INTERVAL,
                 timeout: float = STACK_TIMEOUT):
        """
        Initialize deployer

        Args:
            region: AWS region used when building the default clients
            orchestrator: Stack orchestration client (CloudFormation by default)
            storage: Object storage client (S3 by default)
            poll_interval: Seconds between stack polls
            timeout: Seconds to wait for the stack to converge
        """
        self.region = region
        self.orchestrator = orchestrator or CloudFormationOrchestrator(region=region)
        self.storage = storage or S3Storage({'region': region})
        self.service = DeployService(
            self.orchestrator,
            self.storage,
            poll_interval=poll_interval,
            timeout=timeout
        )

    async def deploy_async(self,
                           request: DeployRequest,
                           on_event: Optional[EventCallback] = None,
                           on_upload: Optional[Callable[[int, int], None]] = None
                           ) -> DeployResult:
        """
        Deploy a template bundle asynchronously

        Args:
            request: Deployment request
            on_event: Receives (event, error) while waiting for the stack
            on_upload: Upload progress callback(completed, total)

        Returns:
            DeployResult: Deployment result
        """
        async with self.storage:
            return await self.service.deploy(request, on_event=on_event, on_upload=on_upload)

    def deploy(self,
               request: DeployRequest,
               on_event: Optional[EventCallback] = None,
               on_upload: Optional[Callable[[int, int], None]] = None) -> DeployResult:
        """
        Deploy a template bundle

        Args:
            request: Deployment request
            on_event: Receives (event, error) while waiting for the stack
            on_upload: Upload progress callback(completed, total)

        Returns:
            DeployResult: Deployment result
        """
        return run_async(self.deploy_async(request, on_event=on_event, on_upload=on_upload))


def deploy(stack_name: str,
           template_folder: str,
           bucket: str,
           main_template: str = DEFAULT_MAIN_TEMPLATE,
           region: str = DEFAULT_REGION,
           bucket_folder: str = "",
           parameters: Optional[Dict[str, str]] = None,
           tags: Optional[Dict[str, str]] = None,
           on_event: Optional[EventCallback] = None) -> DeployResult:
    """
    Convenience function to deploy a template folder

    Args:
        stack_name: Stack to create or update
        template_folder: Folder holding the templates
        bucket: Bucket the templates are uploaded to
        main_template: Main template, relative to template_folder
        region: AWS region
        bucket_folder: Optional folder within the bucket
        parameters: Stack parameters
        tags: Stack tags
        on_event: Receives stack events while waiting

    Returns:
        DeployResult: Deployment result
    """
    request = DeployRequest(
        stack_name=stack_name,
        template_folder=template_folder,
        bucket=bucket,
        main_template=main_template,
        region=region,
        bucket_folder=bucket_folder,
        parameters=dict(parameters or {}),
        tags=dict(tags or {}),
    )
    return Deployer(region=region).deploy(request, on_event=on_event)
