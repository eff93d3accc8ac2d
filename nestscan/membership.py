"""Root membership — decide which children belong to the scanned Subversion tree."""

from __future__ import annotations

import logging
import os
from typing import Iterable, Optional

from nestscan.svn import admin_directory_names

logger = logging.getLogger(__name__)

# Markers of a directory owned by some other version control system.
FOREIGN_VCS_MARKERS = (".git", ".hg", ".bzr", "_darcs", "CVS")


def accept_all(root: str, child: str) -> bool:
    return True


def _is_within(path: str, parent: str) -> bool:
    try:
        return os.path.commonpath([path, parent]) == parent
    except ValueError:
        # Different drives on Windows
        return False


class RootFilter:
    """Prune children that are excluded, foreign to Subversion, or outside the root."""

    def __init__(
        self,
        exclude_names: Iterable[str] = (),
        exclude_paths: Iterable[str] = (),
        foreign_markers: Iterable[str] = FOREIGN_VCS_MARKERS,
        admin_names: Optional[Iterable[str]] = None,
    ) -> None:
        self.exclude_names = frozenset(exclude_names)
        self.exclude_paths = tuple(os.path.abspath(p) for p in exclude_paths)
        self.foreign_markers = tuple(foreign_markers)
        self.admin_names = frozenset(admin_directory_names() if admin_names is None else admin_names)

    def __call__(self, root: str, child: str) -> bool:
        return self.accepts(root, child)

    def _has_marker(self, path: str, markers: Iterable[str]) -> bool:
        return any(os.path.exists(os.path.join(path, m)) for m in markers)

    def accepts(self, root: str, child: str) -> bool:
        name = os.path.basename(os.path.normpath(child))
        if name in self.exclude_names:
            return False

        abs_child = os.path.abspath(child)
        if any(_is_within(abs_child, p) for p in self.exclude_paths):
            return False

        if os.path.isdir(child) and not os.path.islink(child):
            # A checkout carrying both .svn and .git still belongs to us
            if self._has_marker(child, self.foreign_markers) and not self._has_marker(child, self.admin_names):
                logger.debug("Skipping %s: owned by another VCS", child)
                return False

        if not _is_within(os.path.realpath(child), os.path.realpath(root)):
            logger.debug("Skipping %s: resolves outside %s", child, root)
            return False

        return True
