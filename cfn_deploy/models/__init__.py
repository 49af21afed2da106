# cfn_deploy/models/__init__.py
"""Data models for cfn-deploy"""

from .bundle import TemplateBundle, UploadPlan
from .upload import UploadResult, UploadResultSet
from .stack import StackSummary, StackEvent, DeployRequest, DeploymentOutcome
from .result import DeployResult, DeployAction, OperationStatus

__all__ = [
    # Bundle models
    "TemplateBundle",
    "UploadPlan",

    # Upload models
    "UploadResult",
    "UploadResultSet",

    # Stack models
    "StackSummary",
    "StackEvent",
    "DeployRequest",
    "DeploymentOutcome",

    # Result models
    "DeployResult",
    "DeployAction",
    "OperationStatus",
]
