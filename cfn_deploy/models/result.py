"""Operation result models"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Dict, Optional, Any

from .stack import DeploymentOutcome
from .upload import UploadResultSet


class OperationStatus(Enum):
    """Operation status"""
    SUCCESS = "success"
    FAILED = "failed"


class DeployAction(Enum):
    """Which remote verb a deployment used"""
    CREATE = "create"
    UPDATE = "update"


@dataclass
class DeployResult:
    """Result of a deploy operation"""

    status: OperationStatus
    stack_name: str
    error: Optional[Exception] = None
    version: Optional[str] = None
    template_url: Optional[str] = None
    action: Optional[DeployAction] = None
    outcome: Optional[DeploymentOutcome] = None
    uploads: Optional[UploadResultSet] = None
    start_time: datetime = field(default_factory=datetime.utcnow)
    end_time: Optional[datetime] = None

    @property
    def success(self) -> bool:
        """Check if operation was successful"""
        return self.status == OperationStatus.SUCCESS

    @property
    def stack_id(self) -> Optional[str]:
        return self.outcome.stack_id if self.outcome else None

    @property
    def duration(self) -> Optional[float]:
        """Get operation duration in seconds"""
        if self.end_time:
            return (self.end_time - self.start_time).total_seconds()
        return None

    @property
    def error_code(self) -> Optional[str]:
        return getattr(self.error, "error_code", None)

    def complete(self, status: OperationStatus) -> 'DeployResult':
        """Mark operation as complete"""
        self.end_time = datetime.utcnow()
        self.status = status
        return self

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary"""
        data = {
            "status": self.status.value,
            "stack_name": self.stack_name,
            "version": self.version,
            "template_url": self.template_url,
            "action": self.action.value if self.action else None,
            "stack_id": self.stack_id,
            "duration": self.duration,
        }
        if self.outcome:
            data["stack_status"] = self.outcome.status
            data["convergence_state"] = self.outcome.state.value
        if self.error:
            data["error"] = str(self.error)
            data["error_code"] = self.error_code
        if self.uploads is not None:
            data["uploads"] = [r.to_dict() for r in self.uploads]
        return data
