"""Utility functions for cfn-deploy"""

from .async_utils import (
    run_async,
    run_blocking,
    gather_in_completion_order,
)

from .hash_utils import (
    compute_version,
    sort_for_hashing,
)

from .stack_utils import (
    parse_key_value_list,
    join_key,
    bucket_prefix,
    templates_prefix,
    base_url,
    to_aws_parameters,
    to_aws_tags,
)

__all__ = [
    # Async utilities
    "run_async",
    "run_blocking",
    "gather_in_completion_order",

    # Hash utilities
    "compute_version",
    "sort_for_hashing",

    # Stack utilities
    "parse_key_value_list",
    "join_key",
    "bucket_prefix",
    "templates_prefix",
    "base_url",
    "to_aws_parameters",
    "to_aws_tags",
]
