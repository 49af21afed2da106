"""Template bundle models"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Tuple


@dataclass
class TemplateBundle:
    """All template files under a root folder plus the main template"""

    root: Path
    main_template: str
    files: List[Path] = field(default_factory=list)

    def __post_init__(self):
        """Post-initialization processing"""
        if isinstance(self.root, str):
            self.root = Path(self.root)
        self.files = [Path(f) for f in self.files]

    @property
    def main_template_path(self) -> Path:
        """Resolved path of the main template"""
        return self.root / self.main_template

    def relative_path(self, file_path: Path) -> str:
        """Path of a bundle file relative to the root, with '/' separators"""
        return Path(file_path).relative_to(self.root).as_posix()

    def contains(self, file_path: Path) -> bool:
        """Check whether a path is a member of the bundle"""
        return Path(file_path) in self.files

    def __len__(self) -> int:
        return len(self.files)


@dataclass
class UploadPlan:
    """Where each bundle file goes in object storage"""

    bucket: str
    prefix: str
    items: List[Tuple[Path, str]] = field(default_factory=list)

    @classmethod
    def for_bundle(cls, bundle: TemplateBundle, bucket: str, prefix: str) -> 'UploadPlan':
        """Map every bundle file to prefix/relativePath"""
        items = [
            (file_path, f"{prefix}/{bundle.relative_path(file_path)}" if prefix
             else bundle.relative_path(file_path))
            for file_path in bundle.files
        ]
        return cls(bucket=bucket, prefix=prefix, items=items)

    def key_for(self, file_path: Path) -> str:
        """Get bucket key planned for a local file"""
        for local_path, key in self.items:
            if local_path == Path(file_path):
                return key
        raise KeyError(str(file_path))
