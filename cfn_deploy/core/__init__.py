"""Core functionality for cfn-deploy"""

from .bundle_resolver import resolve_bundle, load_bundle
from .config_loader import find_config_file, load_config, deploy_defaults

__all__ = [
    "resolve_bundle",
    "load_bundle",
    "find_config_file",
    "load_config",
    "deploy_defaults",
]
