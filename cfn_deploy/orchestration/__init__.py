# cfn_deploy/orchestration/__init__.py
"""Stack orchestration services for cfn-deploy"""

from .base import StackOrchestrator
from .cloudformation import CloudFormationOrchestrator

__all__ = [
    'StackOrchestrator',
    'CloudFormationOrchestrator',
]
