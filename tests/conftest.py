"""Shared test fixtures."""

from datetime import datetime, timedelta
from pathlib import Path
from typing import Dict, List, Optional, Union

import pytest

from cfn_deploy.api.exceptions import RemoteServiceError
from cfn_deploy.models import StackEvent, StackSummary
from cfn_deploy.orchestration import StackOrchestrator
from cfn_deploy.services import DeployService
from cfn_deploy.storage import ObjectStorage

STACK_ID = "arn:aws:cloudformation:ap-southeast-2:123456789012:stack/test-stack/0001"


def make_events(*event_ids: str) -> List[StackEvent]:
    """Build a newest-first event page from ids given oldest first."""
    start = datetime(2024, 1, 1, 12, 0, 0)
    events = [
        StackEvent(
            event_id=event_id,
            stack_id=STACK_ID,
            timestamp=start + timedelta(seconds=i),
            resource_status="CREATE_IN_PROGRESS",
            logical_resource_id=f"Resource{i}",
            resource_type="AWS::S3::Bucket",
        )
        for i, event_id in enumerate(event_ids)
    ]
    return list(reversed(events))


class FakeOrchestrator(StackOrchestrator):
    """In-memory orchestrator with scripted responses."""

    def __init__(self) -> None:
        self.stack_pages: List[List[StackSummary]] = []
        self.list_error: Optional[Exception] = None
        self.pages_listed = 0
        self.validated: List[str] = []
        self.statuses: List[str] = ["CREATE_COMPLETE"]
        self.describe_override: Optional[List[StackSummary]] = None
        self.event_pages: List[Union[List[StackEvent], Exception]] = [[]]
        self.event_polls = 0
        self.created: List[Dict] = []
        self.updated: List[Dict] = []
        self.dispatch_error: Optional[Exception] = None

    async def list_stacks(self, status_filter):
        if self.list_error is not None:
            raise self.list_error
        for page in self.stack_pages:
            self.pages_listed += 1
            yield page

    async def validate_template(self, body: str) -> None:
        self.validated.append(body)
        if "INVALID" in body:
            raise RemoteServiceError(f"Template format error: {body.strip()}", "ValidateTemplate")

    async def describe_stacks(self, stack_id: str) -> List[StackSummary]:
        if self.describe_override is not None:
            return self.describe_override
        status = self.statuses.pop(0) if len(self.statuses) > 1 else self.statuses[0]
        return [StackSummary(stack_id=STACK_ID, stack_name="test-stack", status=status)]

    async def create_stack(self, stack_name, parameters, tags, template_url) -> str:
        if self.dispatch_error is not None:
            raise self.dispatch_error
        self.created.append({
            "stack_name": stack_name,
            "parameters": parameters,
            "tags": tags,
            "template_url": template_url,
        })
        return STACK_ID

    async def update_stack(self, stack_name, parameters, tags, template_url) -> str:
        if self.dispatch_error is not None:
            raise self.dispatch_error
        self.updated.append({
            "stack_name": stack_name,
            "parameters": parameters,
            "tags": tags,
            "template_url": template_url,
        })
        return STACK_ID

    async def describe_stack_events(self, stack_id: str) -> List[StackEvent]:
        self.event_polls += 1
        page = self.event_pages.pop(0) if len(self.event_pages) > 1 else self.event_pages[0]
        if isinstance(page, Exception):
            raise page
        return page


class FakeStorage(ObjectStorage):
    """Records uploads and fails for configured file names."""

    def __init__(self) -> None:
        super().__init__()
        self.uploads: Dict[str, Path] = {}
        self.fail_names: List[str] = []
        self.empty_url_names: List[str] = []

    async def upload(self, bucket: str, key: str, local_path: Path) -> str:
        if local_path.name in self.fail_names:
            raise RemoteServiceError(f"Access Denied: {local_path.name}", "PutObject")
        self.uploads[key] = local_path
        if local_path.name in self.empty_url_names:
            return ""
        return f"https://s3.example.com/{bucket}/{key}"


@pytest.fixture
def orchestrator() -> FakeOrchestrator:
    """Scripted stack orchestrator."""
    return FakeOrchestrator()


@pytest.fixture
def storage() -> FakeStorage:
    """Recording object storage."""
    return FakeStorage()


@pytest.fixture
def template_dir(tmp_path: Path) -> Path:
    """Template folder with a main template and a nested child template."""
    root = tmp_path / "templates"
    (root / "nested").mkdir(parents=True)
    (root / "Stack.json").write_text('{"Resources": {"Child": {}}}')
    (root / "nested" / "Child.json").write_text('{"Resources": {"Bucket": {}}}')
    (root / "params.json").write_text('{"Env": "test"}')
    return root


@pytest.fixture
def deploy_service(orchestrator: FakeOrchestrator, storage: FakeStorage) -> DeployService:
    """DeployService wired to the fakes with fast polling."""
    return DeployService(orchestrator, storage, poll_interval=0.01, timeout=1)


@pytest.fixture
def make_event_page():
    """Factory for newest-first event pages."""
    return make_events


@pytest.fixture
def stack_id() -> str:
    """ID returned by the fake orchestrator."""
    return STACK_ID
