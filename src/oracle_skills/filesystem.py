"""Filesystem abstraction for testability.

The RealFileSystem implementation wraps standard library operations so the
installer can be tested against a mock without touching real files.
"""

from __future__ import annotations

import shutil
from pathlib import Path


class RealFileSystem:
    """Production filesystem implementation.

    Satisfies the FileSystem protocol structurally.
    """

    def exists(self, path: Path) -> bool:
        """Check if a path exists (symlinks are checked, not followed)."""
        return path.exists() or path.is_symlink()

    def is_dir(self, path: Path) -> bool:
        """Check if a path is a real directory."""
        return path.is_dir() and not path.is_symlink()

    def mkdir(self, path: Path, parents: bool = False, exist_ok: bool = False) -> None:
        """Create a directory."""
        path.mkdir(parents=parents, exist_ok=exist_ok)

    def unlink(self, path: Path) -> None:
        """Remove a file or symlink."""
        path.unlink()

    def rmtree(self, path: Path) -> None:
        """Remove a directory tree."""
        shutil.rmtree(path)

    def copytree(self, src: Path, dst: Path) -> None:
        """Copy a directory tree, preserving symlinks as links."""
        shutil.copytree(src, dst, symlinks=True)
