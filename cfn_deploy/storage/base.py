# cfn_deploy/storage/base.py
"""Object storage abstract base class"""

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Dict, Any


class ObjectStorage(ABC):
    """Abstract base class for object storage backends"""

    def __init__(self, config: Dict[str, Any] = None):
        """
        Initialize storage backend

        Args:
            config: Backend-specific configuration
        """
        self.config = config or {}
        self._initialized = False

    async def initialize(self) -> None:
        """Initialize storage backend (e.g., create clients)"""
        if not self._initialized:
            await self._do_initialize()
            self._initialized = True

    async def _do_initialize(self) -> None:
        """Actual initialization logic, overridden by subclasses"""
        pass

    @abstractmethod
    async def upload(self, bucket: str, key: str, local_path: Path) -> str:
        """
        Upload a local file

        Args:
            bucket: Bucket name
            key: Object key
            local_path: File to upload, opened read-only

        Returns:
            Retrieval URL of the uploaded object
        """
        pass

    async def close(self) -> None:
        """Close storage backend connections"""
        if self._initialized:
            await self._do_close()
            self._initialized = False

    async def _do_close(self) -> None:
        """Actual cleanup logic to be implemented by subclasses"""
        pass

    async def __aenter__(self):
        """Async context manager entry"""
        await self.initialize()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """Async context manager exit"""
        await self.close()
