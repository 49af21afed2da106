# cfn_deploy/orchestration/cloudformation.py
"""AWS CloudFormation implementation of the orchestration interface"""

import logging
from typing import AsyncIterator, Dict, List

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from .base import StackOrchestrator
from ..api.exceptions import RemoteServiceError
from ..models import StackEvent, StackSummary
from ..utils.async_utils import run_blocking
from ..utils.stack_utils import to_aws_parameters, to_aws_tags

logger = logging.getLogger(__name__)

_SENTINEL = object()


class CloudFormationOrchestrator(StackOrchestrator):
    """Talks to CloudFormation through boto3

    boto3 clients are thread safe, so concurrent calls share one client and
    each blocking call runs in the default executor.
    """

    def __init__(self, region: str = None, client=None, endpoint_url: str = None):
        self.client = client or boto3.client(
            "cloudformation",
            region_name=region,
            endpoint_url=endpoint_url,
        )

    async def _call(self, operation: str, **kwargs):
        method = getattr(self.client, operation)
        try:
            return await run_blocking(method, **kwargs)
        except (BotoCoreError, ClientError) as e:
            raise RemoteServiceError(str(e), operation=operation) from e

    async def list_stacks(self, status_filter: List[str]) -> AsyncIterator[List[StackSummary]]:
        paginator = self.client.get_paginator("list_stacks")
        pages = iter(paginator.paginate(StackStatusFilter=status_filter))

        while True:
            try:
                page = await run_blocking(next, pages, _SENTINEL)
            except (BotoCoreError, ClientError) as e:
                raise RemoteServiceError(str(e), operation="list_stacks") from e

            if page is _SENTINEL:
                break

            yield [StackSummary.from_dict(s) for s in page.get("StackSummaries", [])]

    async def validate_template(self, body: str) -> None:
        await self._call("validate_template", TemplateBody=body)

    async def describe_stacks(self, stack_id: str) -> List[StackSummary]:
        try:
            resp = await self._call("describe_stacks", StackName=stack_id)
        except RemoteServiceError as e:
            # Unknown stacks come back as a ValidationError, not an empty list
            cause = e.__cause__
            if isinstance(cause, ClientError) and "does not exist" in str(cause):
                return []
            raise

        return [StackSummary.from_dict(s) for s in resp.get("Stacks", [])]

    async def create_stack(self,
                           stack_name: str,
                           parameters: Dict[str, str],
                           tags: Dict[str, str],
                           template_url: str) -> str:
        resp = await self._call(
            "create_stack",
            StackName=stack_name,
            Parameters=to_aws_parameters(parameters),
            Tags=to_aws_tags(tags),
            TemplateURL=template_url,
        )
        return resp["StackId"]

    async def update_stack(self,
                           stack_name: str,
                           parameters: Dict[str, str],
                           tags: Dict[str, str],
                           template_url: str) -> str:
        resp = await self._call(
            "update_stack",
            StackName=stack_name,
            Parameters=to_aws_parameters(parameters),
            Tags=to_aws_tags(tags),
            TemplateURL=template_url,
        )
        return resp["StackId"]

    async def describe_stack_events(self, stack_id: str) -> List[StackEvent]:
        resp = await self._call("describe_stack_events", StackName=stack_id)
        return [StackEvent.from_dict(e) for e in resp.get("StackEvents", [])]
