"""Template bundle discovery"""

import logging
import os
import stat
from pathlib import Path
from typing import List, Set, Union

from ..api.exceptions import BundleError, MissingMainTemplateError
from ..models import TemplateBundle

logger = logging.getLogger(__name__)


def resolve_bundle(root_folder: Union[str, Path]) -> List[Path]:
    """Recursively list every regular file under a folder

    Directories are not included; symlinks to files and directories are
    followed. The order follows the filesystem and is not guaranteed to be
    stable.

    Args:
        root_folder: Folder to walk

    Returns:
        Paths of all files, each prefixed with root_folder

    Raises:
        BundleError: If the folder or any entry below it cannot be read or
            statted, or if directory links form a loop
    """
    root = Path(root_folder)
    files: List[Path] = []
    visited: Set[str] = set()

    if not root.is_dir():
        raise BundleError(f"Template folder not found or not a directory: {root}")

    def _walk(directory: Path) -> None:
        real = os.path.realpath(directory)
        if real in visited:
            raise BundleError(f"Symlink loop in template folder at {directory}")
        visited.add(real)

        try:
            with os.scandir(directory) as entries:
                for entry in entries:
                    # Symlinks are followed; a dangling link fails the stat
                    info = entry.stat()
                    if stat.S_ISDIR(info.st_mode):
                        _walk(Path(entry.path))
                    elif stat.S_ISREG(info.st_mode):
                        files.append(Path(entry.path))
        except OSError as e:
            raise BundleError(f"Unable to read template folder {directory}: {e}") from e

        visited.discard(real)

    _walk(root)
    logger.debug(f"Found {len(files)} template files under {root}")
    return files


def load_bundle(root_folder: Union[str, Path], main_template: str) -> TemplateBundle:
    """Resolve a template bundle and check that it holds the main template

    Args:
        root_folder: Template folder
        main_template: Main template path, relative to root_folder

    Returns:
        TemplateBundle instance

    Raises:
        BundleError: If the folder cannot be walked
        MissingMainTemplateError: If the main template is not in the folder
    """
    root = Path(root_folder)
    bundle = TemplateBundle(root=root, main_template=main_template,
                            files=resolve_bundle(root))

    if not bundle.contains(bundle.main_template_path):
        raise MissingMainTemplateError(main_template, str(root))

    return bundle
