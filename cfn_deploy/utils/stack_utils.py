"""Helpers for stack parameters, tags and bucket layout"""

from typing import Dict, List, Optional

from ..api.exceptions import ParameterParseError
from ..constants import TEMPLATES_KEY_SEGMENT


def parse_key_value_list(text: Optional[str]) -> Dict[str, str]:
    """
    Parse a comma separated list of key=value pairs

    Args:
        text: Input such as "ParamOne=ValueOne,ParamTwo=ValueTwo"

    Returns:
        Mapping of keys to values, empty for empty input

    Raises:
        ParameterParseError: If a pair is not exactly key=value
    """
    result: Dict[str, str] = {}

    if not text:
        return result

    for pair in text.split(","):
        parts = pair.split("=")
        if len(parts) != 2:
            raise ParameterParseError(pair)

        result[parts[0].strip()] = parts[1].strip()

    return result


def join_key(*segments: str) -> str:
    """Join bucket key segments with '/', skipping empty ones"""
    parts: List[str] = []
    for segment in segments:
        if segment:
            parts.extend(p for p in str(segment).split("/") if p)
    return "/".join(parts)


def bucket_prefix(bucket_folder: str, stack_name: str, version: str) -> str:
    """
    Bucket key prefix for a stack version

    Args:
        bucket_folder: Optional folder within the bucket
        stack_name: Stack name
        version: Bundle version

    Returns:
        Prefix such as "folder/stack/1a2b3c4d"
    """
    return join_key(bucket_folder, stack_name, version)


def templates_prefix(bucket_folder: str, stack_name: str, version: str) -> str:
    """Bucket key prefix under which the template files are uploaded"""
    return join_key(bucket_prefix(bucket_folder, stack_name, version), TEMPLATES_KEY_SEGMENT)


def base_url(url: str) -> str:
    """Return all but the file part of a URL, keeping the trailing slash"""
    return url[:url.rfind("/") + 1]


def to_aws_parameters(params: Dict[str, str]) -> List[Dict[str, str]]:
    """Convert parameters to CloudFormation Parameter structures"""
    return [
        {"ParameterKey": key, "ParameterValue": value}
        for key, value in params.items()
    ]


def to_aws_tags(tags: Dict[str, str]) -> List[Dict[str, str]]:
    """Convert tags to CloudFormation Tag structures"""
    return [{"Key": key, "Value": value} for key, value in tags.items()]
