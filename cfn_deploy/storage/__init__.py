# cfn_deploy/storage/__init__.py
"""Object storage backends for cfn-deploy"""

from .base import ObjectStorage
from .s3 import S3Storage

__all__ = [
    'ObjectStorage',
    'S3Storage',
]
