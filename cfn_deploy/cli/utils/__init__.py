"""CLI utility functions"""

from .output import (
    format_deploy_request,
    format_deploy_result,
    format_stack_event,
    print_stack_event,
)
from .progress import deploy_progress, upload_callback

__all__ = [
    # Output utilities
    'format_deploy_request',
    'format_deploy_result',
    'format_stack_event',
    'print_stack_event',

    # Progress utilities
    'deploy_progress',
    'upload_callback',
]
