"""cfn-deploy - Deploy versioned CloudFormation template bundles.

Uploads a folder of templates to S3 under a content-derived version and
creates or updates a CloudFormation stack from it, waiting for the stack
to settle while streaming its events.
"""

from .__version__ import __version__, __version_info__, __license__

# Core API
from .api.deployer import Deployer, deploy

# Data models
from .models import (
    TemplateBundle,
    UploadPlan,
    UploadResult,
    UploadResultSet,
    StackEvent,
    DeployRequest,
    DeploymentOutcome,
    DeployResult,
)

# Exceptions
from .api.exceptions import (
    CfnDeployError,
    InputError,
    ParameterParseError,
    MissingMainTemplateError,
    BundleError,
    TemplateValidationError,
    UploadError,
    MainTemplateNotFoundError,
    RemoteServiceError,
    ConvergenceError,
    StackNotFoundError,
    AmbiguousStackError,
    UnexpectedStatusError,
    ConvergenceTimeoutError,
)

# Utility functions
from .core import resolve_bundle, load_bundle
from .utils import compute_version, parse_key_value_list, bucket_prefix, base_url

__all__ = [
    # Version information
    "__version__",
    "__version_info__",
    "__license__",

    # Main classes
    "Deployer",

    # Core API functions
    "deploy",

    # Data models
    "TemplateBundle",
    "UploadPlan",
    "UploadResult",
    "UploadResultSet",
    "StackEvent",
    "DeployRequest",
    "DeploymentOutcome",
    "DeployResult",

    # Exceptions
    "CfnDeployError",
    "InputError",
    "ParameterParseError",
    "MissingMainTemplateError",
    "BundleError",
    "TemplateValidationError",
    "UploadError",
    "MainTemplateNotFoundError",
    "RemoteServiceError",
    "ConvergenceError",
    "StackNotFoundError",
    "AmbiguousStackError",
    "UnexpectedStatusError",
    "ConvergenceTimeoutError",

    # Utility functions
    "resolve_bundle",
    "load_bundle",
    "compute_version",
    "parse_key_value_list",
    "bucket_prefix",
    "base_url",
]
