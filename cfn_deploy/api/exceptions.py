"""Exception definitions for cfn-deploy API"""

from typing import List, Optional

from ..constants import ConvergenceState, ErrorCode


class CfnDeployError(Exception):
    """Base exception for cfn-deploy"""

    def __init__(self, message: str, error_code: str = None):
        super().__init__(message)
        self.error_code = error_code


class InputError(CfnDeployError):
    """Invalid user input, detected before any network call"""
    pass


class ParameterParseError(InputError):
    """Badly formed key=value list"""

    def __init__(self, pair: str):
        message = f"Badly formed command line param '{pair}'. Expected format 'key=value'"
        super().__init__(message, ErrorCode.PARAMETER_FORMAT_ERROR)
        self.pair = pair


class MissingMainTemplateError(InputError):
    """Main template is not part of the template bundle"""

    def __init__(self, main_template: str, folder: str):
        message = f"Main template {main_template} not found in {folder}"
        super().__init__(message, ErrorCode.MAIN_TEMPLATE_MISSING)
        self.main_template = main_template
        self.folder = folder


class ConfigError(InputError):
    """Configuration file error"""

    def __init__(self, message: str):
        super().__init__(message, ErrorCode.CONFIG_FORMAT_ERROR)


class BundleError(CfnDeployError):
    """Template bundle could not be walked or read"""

    def __init__(self, message: str):
        super().__init__(message, ErrorCode.BUNDLE_READ_FAILED)


class TemplateValidationError(CfnDeployError):
    """One or more templates were rejected by the orchestration service"""

    def __init__(self, failures: List[Exception]):
        self.failures = list(failures)
        message = "Template validation failed: " + ", ".join(str(e) for e in self.failures)
        super().__init__(message, ErrorCode.TEMPLATE_VALIDATION_FAILED)

    @property
    def first(self) -> Optional[Exception]:
        """First failure to complete"""
        return self.failures[0] if self.failures else None


class UploadError(CfnDeployError):
    """One or more template uploads failed"""

    def __init__(self, results):
        self.results = results
        message = "Template upload failed: " + ", ".join(str(e) for e in results.errors)
        super().__init__(message, ErrorCode.UPLOAD_FAILED)


class MainTemplateNotFoundError(CfnDeployError):
    """Uploaded files did not include the main template"""

    def __init__(self, main_template: str, results=None):
        super().__init__(
            f"Unable to find url of main template {main_template}",
            ErrorCode.MAIN_TEMPLATE_URL_NOT_FOUND
        )
        self.main_template = main_template
        self.results = results


class RemoteServiceError(CfnDeployError):
    """Error returned by a remote service, surfaced verbatim"""

    def __init__(self, message: str, operation: str = None):
        super().__init__(message, ErrorCode.REMOTE_SERVICE_ERROR)
        self.operation = operation


class ConvergenceError(CfnDeployError):
    """Stack did not reach the expected terminal status"""

    state = ConvergenceState.LOOKUP_ERROR

    def __init__(self, message: str, error_code: str, stack_id: str):
        super().__init__(message, error_code)
        self.stack_id = stack_id


class StackNotFoundError(ConvergenceError):
    """Describe returned no stack"""

    def __init__(self, stack_id: str):
        super().__init__(f"Stack with ID {stack_id} not found",
                         ErrorCode.STACK_NOT_FOUND, stack_id)


class AmbiguousStackError(ConvergenceError):
    """Describe returned more than one stack"""

    def __init__(self, stack_id: str):
        super().__init__(f"Ambiguous stack ID {stack_id}",
                         ErrorCode.AMBIGUOUS_STACK_ID, stack_id)


class UnexpectedStatusError(ConvergenceError):
    """Stack settled in a status other than the desired one"""

    state = ConvergenceState.UNEXPECTED_TERMINAL

    def __init__(self, stack_id: str, expected: str, actual: str):
        super().__init__(
            f"Unexpected stack status. Wanted {expected}, but got {actual}",
            ErrorCode.UNEXPECTED_STACK_STATUS, stack_id
        )
        self.expected = expected
        self.actual = actual


class ConvergenceTimeoutError(ConvergenceError):
    """Stack was still in progress when the timeout expired"""

    state = ConvergenceState.TIMED_OUT

    def __init__(self, stack_id: str, expected: str, timeout: float):
        super().__init__(
            f"Stack {stack_id} failed to reach state {expected} within {timeout:g}s",
            ErrorCode.STACK_TIMEOUT, stack_id
        )
        self.expected = expected
        self.timeout = timeout
