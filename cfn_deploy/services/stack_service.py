"""Stack lifecycle service"""

import asyncio
import logging
import time
from typing import Callable, Optional

from ..api.exceptions import (
    AmbiguousStackError,
    ConvergenceTimeoutError,
    StackNotFoundError,
    UnexpectedStatusError,
)
from ..constants import (
    EXISTING_STACK_STATUSES,
    IN_PROGRESS_PATTERN,
    POLL_INTERVAL,
    STACK_TIMEOUT,
)
from ..models import DeploymentOutcome, StackEvent
from ..orchestration import StackOrchestrator
from .event_tailer import EventTailer

logger = logging.getLogger(__name__)


class StackService:
    """Existence checks, convergence waiting and event tailing for stacks"""

    def __init__(self,
                 orchestrator: StackOrchestrator,
                 poll_interval: float = POLL_INTERVAL,
                 timeout: float = STACK_TIMEOUT):
        """
        Initialize stack service

        Args:
            orchestrator: Stack orchestration client
            poll_interval: Seconds between status and event polls
            timeout: Seconds to wait for a stack to converge
        """
        self.orchestrator = orchestrator
        self.poll_interval = poll_interval
        self.timeout = timeout

    async def stack_exists(self, name: str) -> bool:
        """
        Check whether a stack with the given name exists

        Stacks in any status other than deleted count as existing. Paging
        stops at the first match.

        Args:
            name: Stack name

        Returns:
            True if the stack exists

        Raises:
            RemoteServiceError: If listing fails
        """
        async for page in self.orchestrator.list_stacks(EXISTING_STACK_STATUSES):
            for summary in page:
                if summary.stack_name == name:
                    return True
        return False

    async def wait_for_stack(self, stack_id: str, desired_status: str) -> DeploymentOutcome:
        """
        Poll a stack until it reaches the desired status

        Args:
            stack_id: Stack ID or name
            desired_status: Terminal status that counts as success

        Returns:
            Outcome with the desired status

        Raises:
            StackNotFoundError: No stack matches stack_id
            AmbiguousStackError: More than one stack matches stack_id
            UnexpectedStatusError: Stack settled in another terminal status
            ConvergenceTimeoutError: Still in progress after the timeout
            RemoteServiceError: If describing the stack fails
        """
        start = time.monotonic()

        while True:
            stacks = await self.orchestrator.describe_stacks(stack_id)

            if not stacks:
                raise StackNotFoundError(stack_id)

            if len(stacks) != 1:
                raise AmbiguousStackError(stack_id)

            status = stacks[0].status

            if status == desired_status:
                return DeploymentOutcome(
                    stack_id=stacks[0].stack_id or stack_id,
                    status=status,
                    expected_status=desired_status
                )

            if not IN_PROGRESS_PATTERN.match(status):
                raise UnexpectedStatusError(stack_id, desired_status, status)

            if time.monotonic() - start > self.timeout:
                raise ConvergenceTimeoutError(stack_id, desired_status, self.timeout)

            logger.debug(f"Stack {stack_id} is {status}, waiting for {desired_status}")
            await asyncio.sleep(self.poll_interval)

    def tail_events(self,
                    stack_id: str,
                    on_event: Callable[[Optional[StackEvent], Optional[Exception]], None]
                    ) -> EventTailer:
        """
        Start streaming stack events in the background

        Args:
            stack_id: Stack ID
            on_event: Called with (event, None) per new event or (None, error)

        Returns:
            Running tailer; call cancel() or await stop() to end it
        """
        tailer = EventTailer(self.orchestrator, stack_id, on_event,
                             poll_interval=self.poll_interval)
        tailer.start()
        return tailer
