"""Global constants for cfn-deploy"""

from enum import Enum
import re

APP_NAME = "cfn-deploy"

# Logging
LOG_FORMAT = "%(message)s"

# Project configuration
PROJECT_CONFIG_FILE = ".cfn-deploy.yaml"
CONFIG_DEPLOY_SECTION = "deploy"

# CLI defaults
DEFAULT_REGION = "ap-southeast-2"
DEFAULT_MAIN_TEMPLATE = "Stack.json"

# Bucket layout
TEMPLATES_KEY_SEGMENT = "templates"
VERSION_LENGTH = 8
VERSION_HASH_ALGORITHM = "sha1"
DEFAULT_CHUNK_SIZE = 64 * 1024

# Parameters injected into every stack
PARAM_VERSION = "Version"
PARAM_TEMPLATE_BASE_URL = "TemplateBaseUrl"
RESERVED_PARAMETERS = (PARAM_VERSION, PARAM_TEMPLATE_BASE_URL)

# Convergence polling
POLL_INTERVAL = 5  # seconds
STACK_TIMEOUT = 20 * 60  # seconds
IN_PROGRESS_PATTERN = re.compile(r".+_IN_PROGRESS$")


class StackStatus:
    """CloudFormation stack status values"""
    CREATE_IN_PROGRESS = "CREATE_IN_PROGRESS"
    CREATE_FAILED = "CREATE_FAILED"
    CREATE_COMPLETE = "CREATE_COMPLETE"
    ROLLBACK_IN_PROGRESS = "ROLLBACK_IN_PROGRESS"
    ROLLBACK_FAILED = "ROLLBACK_FAILED"
    ROLLBACK_COMPLETE = "ROLLBACK_COMPLETE"
    DELETE_IN_PROGRESS = "DELETE_IN_PROGRESS"
    DELETE_FAILED = "DELETE_FAILED"
    DELETE_COMPLETE = "DELETE_COMPLETE"
    UPDATE_IN_PROGRESS = "UPDATE_IN_PROGRESS"
    UPDATE_COMPLETE_CLEANUP_IN_PROGRESS = "UPDATE_COMPLETE_CLEANUP_IN_PROGRESS"
    UPDATE_COMPLETE = "UPDATE_COMPLETE"
    UPDATE_FAILED = "UPDATE_FAILED"
    UPDATE_ROLLBACK_IN_PROGRESS = "UPDATE_ROLLBACK_IN_PROGRESS"
    UPDATE_ROLLBACK_FAILED = "UPDATE_ROLLBACK_FAILED"
    UPDATE_ROLLBACK_COMPLETE_CLEANUP_IN_PROGRESS = "UPDATE_ROLLBACK_COMPLETE_CLEANUP_IN_PROGRESS"
    UPDATE_ROLLBACK_COMPLETE = "UPDATE_ROLLBACK_COMPLETE"


# Every status in which a stack still exists under its name
EXISTING_STACK_STATUSES = [
    StackStatus.CREATE_COMPLETE,
    StackStatus.CREATE_FAILED,
    StackStatus.CREATE_IN_PROGRESS,
    StackStatus.ROLLBACK_COMPLETE,
    StackStatus.ROLLBACK_FAILED,
    StackStatus.ROLLBACK_IN_PROGRESS,
    StackStatus.UPDATE_COMPLETE,
    StackStatus.UPDATE_COMPLETE_CLEANUP_IN_PROGRESS,
    StackStatus.UPDATE_IN_PROGRESS,
    StackStatus.UPDATE_ROLLBACK_COMPLETE,
    StackStatus.UPDATE_ROLLBACK_COMPLETE_CLEANUP_IN_PROGRESS,
    StackStatus.UPDATE_ROLLBACK_FAILED,
    StackStatus.UPDATE_ROLLBACK_IN_PROGRESS,
]


# Error codes
class ErrorCode:
    PARAMETER_FORMAT_ERROR = "CD001"
    MAIN_TEMPLATE_MISSING = "CD002"
    BUNDLE_READ_FAILED = "CD003"
    TEMPLATE_VALIDATION_FAILED = "CD004"
    UPLOAD_FAILED = "CD005"
    MAIN_TEMPLATE_URL_NOT_FOUND = "CD006"
    REMOTE_SERVICE_ERROR = "CD007"
    STACK_NOT_FOUND = "CD008"
    AMBIGUOUS_STACK_ID = "CD009"
    UNEXPECTED_STACK_STATUS = "CD010"
    STACK_TIMEOUT = "CD011"
    CONFIG_FORMAT_ERROR = "CD012"


# Environment variables
ENV_STACK_NAME = "CFNDEPLOY_STACKNAME"
ENV_REGION = "CFNDEPLOY_REGION"
ENV_MAIN_TEMPLATE = "CFNDEPLOY_MAIN"
ENV_BUCKET = "CFNDEPLOY_BUCKET"
ENV_BUCKET_FOLDER = "CFNDEPLOY_BUCKET_FOLDER"
ENV_CONFIG_PATH = "CFNDEPLOY_CONFIG"

# Console symbols
EMOJI_SUCCESS = "✓"
EMOJI_ERROR = "✗"


# Convergence poller states
class ConvergenceState(Enum):
    PENDING = "pending"
    MATCHED_EXPECTED = "matched_expected"
    UNEXPECTED_TERMINAL = "unexpected_terminal"
    TIMED_OUT = "timed_out"
    LOOKUP_ERROR = "lookup_error"
