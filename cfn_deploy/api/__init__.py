# cfn_deploy/api/__init__.py
"""API layer for cfn-deploy"""

from .exceptions import (
    CfnDeployError,
    InputError,
    ParameterParseError,
    MissingMainTemplateError,
    ConfigError,
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
from .deployer import Deployer, deploy

__all__ = [
    # Main classes
    "Deployer",

    # Convenience functions
    "deploy",

    # Exceptions
    "CfnDeployError",
    "InputError",
    "ParameterParseError",
    "MissingMainTemplateError",
    "ConfigError",
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
]
