"""Upload result models"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Iterator, List, Optional, Any


@dataclass
class UploadResult:
    """Result of uploading a single file"""

    file: Path
    key: str = ""
    url: str = ""
    error: Optional[Exception] = None

    @property
    def success(self) -> bool:
        """Check if upload succeeded"""
        return self.error is None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary"""
        data = {
            "file": str(self.file),
            "key": self.key,
            "url": self.url,
        }
        if self.error:
            data["error"] = str(self.error)
        return data


@dataclass
class UploadResultSet:
    """Results of a complete upload fan-out, one per file"""

    results: List[UploadResult] = field(default_factory=list)

    def __iter__(self) -> Iterator[UploadResult]:
        return iter(self.results)

    def __len__(self) -> int:
        return len(self.results)

    @property
    def has_errors(self) -> bool:
        """True if any upload failed"""
        return any(not r.success for r in self.results)

    @property
    def errors(self) -> List[Exception]:
        """All upload failures"""
        return [r.error for r in self.results if r.error is not None]

    @property
    def successful(self) -> List[UploadResult]:
        """Uploads that completed without error"""
        return [r for r in self.results if r.success]

    def url_for(self, file_path: Path) -> Optional[str]:
        """Retrieval URL of a successfully uploaded file"""
        target = Path(file_path)
        for result in self.results:
            if result.file == target and result.success and result.url:
                return result.url
        return None
