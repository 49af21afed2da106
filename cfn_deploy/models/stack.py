"""Stack and deployment request models"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Dict, List, Optional, Any

from ..constants import (
    DEFAULT_MAIN_TEMPLATE,
    DEFAULT_REGION,
    IN_PROGRESS_PATTERN,
    PARAM_TEMPLATE_BASE_URL,
    PARAM_VERSION,
    RESERVED_PARAMETERS,
    ConvergenceState,
)


@dataclass
class StackSummary:
    """Stack as reported by list/describe calls"""

    stack_id: str
    stack_name: str
    status: str
    status_reason: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'StackSummary':
        """Create from a CloudFormation response item"""
        return cls(
            stack_id=data.get("StackId", ""),
            stack_name=data.get("StackName", ""),
            status=data.get("StackStatus", ""),
            status_reason=data.get("StackStatusReason"),
        )


@dataclass
class StackEvent:
    """Single entry from a stack's event history"""

    event_id: str
    stack_id: str = ""
    timestamp: Optional[datetime] = None
    resource_status: str = ""
    logical_resource_id: str = ""
    resource_type: str = ""
    status_reason: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'StackEvent':
        """Create from a CloudFormation response item"""
        return cls(
            event_id=data["EventId"],
            stack_id=data.get("StackId", ""),
            timestamp=data.get("Timestamp"),
            resource_status=data.get("ResourceStatus", ""),
            logical_resource_id=data.get("LogicalResourceId", ""),
            resource_type=data.get("ResourceType", ""),
            status_reason=data.get("ResourceStatusReason"),
        )


@dataclass(frozen=True)
class DeployRequest:
    """Everything needed for one deployment, passed through the pipeline"""

    stack_name: str
    template_folder: str
    bucket: str
    main_template: str = DEFAULT_MAIN_TEMPLATE
    region: str = DEFAULT_REGION
    bucket_folder: str = ""
    parameters: Dict[str, str] = field(default_factory=dict)
    tags: Dict[str, str] = field(default_factory=dict)

    def stack_parameters(self, version: str, template_base_url: str) -> Dict[str, str]:
        """Caller parameters with the reserved version and base URL keys set"""
        params = dict(self.parameters)
        params[PARAM_VERSION] = version
        params[PARAM_TEMPLATE_BASE_URL] = template_base_url
        return params

    @property
    def overridden_parameters(self) -> List[str]:
        """Reserved parameter names the caller supplied; their values are replaced"""
        return [name for name in RESERVED_PARAMETERS if name in self.parameters]

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary"""
        return {
            "stack_name": self.stack_name,
            "template_folder": self.template_folder,
            "main_template": self.main_template,
            "region": self.region,
            "bucket": self.bucket,
            "bucket_folder": self.bucket_folder,
            "parameters": dict(self.parameters),
            "tags": dict(self.tags),
        }


@dataclass
class DeploymentOutcome:
    """Terminal status reached by a create or update"""

    stack_id: str
    status: str
    expected_status: str

    @property
    def success(self) -> bool:
        return self.status == self.expected_status

    @property
    def state(self) -> ConvergenceState:
        if self.status == self.expected_status:
            return ConvergenceState.MATCHED_EXPECTED
        if not self.status or IN_PROGRESS_PATTERN.match(self.status):
            return ConvergenceState.PENDING
        return ConvergenceState.UNEXPECTED_TERMINAL
