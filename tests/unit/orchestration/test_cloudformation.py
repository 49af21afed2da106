"""Tests for the CloudFormation orchestrator."""

from unittest.mock import MagicMock

import pytest
from botocore.exceptions import ClientError

from cfn_deploy.api.exceptions import RemoteServiceError
from cfn_deploy.orchestration import CloudFormationOrchestrator


def _client_error(message: str, operation: str) -> ClientError:
    return ClientError({"Error": {"Code": "ValidationError", "Message": message}}, operation)


@pytest.fixture
def cfn_client() -> MagicMock:
    return MagicMock()


@pytest.fixture
def cfn(cfn_client: MagicMock) -> CloudFormationOrchestrator:
    return CloudFormationOrchestrator(client=cfn_client)


class TestListStacks:
    async def test_yields_pages(self, cfn: CloudFormationOrchestrator, cfn_client: MagicMock) -> None:
        cfn_client.get_paginator.return_value.paginate.return_value = [
            {"StackSummaries": [{"StackId": "1", "StackName": "a", "StackStatus": "CREATE_COMPLETE"}]},
            {"StackSummaries": [{"StackId": "2", "StackName": "b", "StackStatus": "UPDATE_COMPLETE"}]},
        ]

        pages = [page async for page in cfn.list_stacks(["CREATE_COMPLETE", "UPDATE_COMPLETE"])]

        assert [[s.stack_name for s in page] for page in pages] == [["a"], ["b"]]
        cfn_client.get_paginator.return_value.paginate.assert_called_once_with(
            StackStatusFilter=["CREATE_COMPLETE", "UPDATE_COMPLETE"]
        )


class TestDescribeStacks:
    async def test_unknown_stack_is_empty(self, cfn: CloudFormationOrchestrator, cfn_client: MagicMock) -> None:
        cfn_client.describe_stacks.side_effect = _client_error("Stack with id s does not exist", "DescribeStacks")
        assert await cfn.describe_stacks("s") == []

    async def test_other_errors_propagate(self, cfn: CloudFormationOrchestrator, cfn_client: MagicMock) -> None:
        cfn_client.describe_stacks.side_effect = _client_error("Rate exceeded", "DescribeStacks")
        with pytest.raises(RemoteServiceError) as exc_info:
            await cfn.describe_stacks("s")
        assert exc_info.value.operation == "describe_stacks"

    async def test_summaries(self, cfn: CloudFormationOrchestrator, cfn_client: MagicMock) -> None:
        cfn_client.describe_stacks.return_value = {
            "Stacks": [{"StackId": "1", "StackName": "s", "StackStatus": "CREATE_IN_PROGRESS"}]
        }
        stacks = await cfn.describe_stacks("s")
        assert stacks[0].status == "CREATE_IN_PROGRESS"


class TestStackChanges:
    async def test_create_stack(self, cfn: CloudFormationOrchestrator, cfn_client: MagicMock) -> None:
        cfn_client.create_stack.return_value = {"StackId": "arn:stack/s/1"}

        stack_id = await cfn.create_stack("s", {"Version": "1a2b3c4d"}, {"Team": "infra"}, "https://h/Stack.json")

        assert stack_id == "arn:stack/s/1"
        cfn_client.create_stack.assert_called_once_with(
            StackName="s",
            Parameters=[{"ParameterKey": "Version", "ParameterValue": "1a2b3c4d"}],
            Tags=[{"Key": "Team", "Value": "infra"}],
            TemplateURL="https://h/Stack.json",
        )

    async def test_update_rejected(self, cfn: CloudFormationOrchestrator, cfn_client: MagicMock) -> None:
        cfn_client.update_stack.side_effect = _client_error("No updates are to be performed.", "UpdateStack")
        with pytest.raises(RemoteServiceError) as exc_info:
            await cfn.update_stack("s", {}, {}, "https://h/Stack.json")
        assert "No updates are to be performed." in str(exc_info.value)

    async def test_validate_template(self, cfn: CloudFormationOrchestrator, cfn_client: MagicMock) -> None:
        await cfn.validate_template("{}")
        cfn_client.validate_template.assert_called_once_with(TemplateBody="{}")


class TestDescribeStackEvents:
    async def test_events(self, cfn: CloudFormationOrchestrator, cfn_client: MagicMock) -> None:
        cfn_client.describe_stack_events.return_value = {
            "StackEvents": [
                {"EventId": "e2", "ResourceStatus": "CREATE_COMPLETE", "LogicalResourceId": "s"},
                {"EventId": "e1", "ResourceStatus": "CREATE_IN_PROGRESS", "LogicalResourceId": "s"},
            ]
        }
        events = await cfn.describe_stack_events("s")
        assert [e.event_id for e in events] == ["e2", "e1"]
