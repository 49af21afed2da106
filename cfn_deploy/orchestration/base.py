# cfn_deploy/orchestration/base.py
"""Stack orchestration service interface"""

from abc import ABC, abstractmethod
from typing import AsyncIterator, Dict, List

from ..models import StackEvent, StackSummary


class StackOrchestrator(ABC):
    """Capabilities of a stack orchestration service used by the deployer"""

    @abstractmethod
    def list_stacks(self, status_filter: List[str]) -> AsyncIterator[List[StackSummary]]:
        """
        List stacks page by page

        Args:
            status_filter: Only stacks in one of these statuses

        Yields:
            One list of stack summaries per page
        """
        pass

    @abstractmethod
    async def validate_template(self, body: str) -> None:
        """
        Validate a template body

        Raises:
            RemoteServiceError: If the template is rejected
        """
        pass

    @abstractmethod
    async def describe_stacks(self, stack_id: str) -> List[StackSummary]:
        """Describe stacks matching a name or ID"""
        pass

    @abstractmethod
    async def create_stack(self,
                           stack_name: str,
                           parameters: Dict[str, str],
                           tags: Dict[str, str],
                           template_url: str) -> str:
        """Create a stack, returning its ID"""
        pass

    @abstractmethod
    async def update_stack(self,
                           stack_name: str,
                           parameters: Dict[str, str],
                           tags: Dict[str, str],
                           template_url: str) -> str:
        """Update a stack, returning its ID"""
        pass

    @abstractmethod
    async def describe_stack_events(self, stack_id: str) -> List[StackEvent]:
        """Most recent page of stack events, newest first"""
        pass
