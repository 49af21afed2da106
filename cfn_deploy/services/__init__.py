"""Service layer for cfn-deploy"""

from .event_tailer import EventTailer
from .template_service import TemplateService
from .stack_service import StackService
from .deploy_service import DeployService

__all__ = [
    "EventTailer",
    "TemplateService",
    "StackService",
    "DeployService",
]
