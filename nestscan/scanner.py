"""Working-copy discovery — breadth-first search for nested Subversion checkouts."""

from __future__ import annotations

import functools
import logging
import os
import threading
from collections import deque
from typing import Callable, Optional

from nestscan.config import ScanConfig, load_config
from nestscan.membership import RootFilter, accept_all
from nestscan.models import BoundaryNode, Cancelled, Completed, ScanResult
from nestscan.resolver import Describer, resolve
from nestscan.svn import describe, is_admin_directory

logger = logging.getLogger(__name__)

MembershipCheck = Callable[[str, str], bool]


class CancellationToken:
    """Thread-safe cancel flag, polled by the scanner."""

    def __init__(self) -> None:
        self._event = threading.Event()

    def cancel(self) -> None:
        self._event.set()

    def is_cancelled(self) -> bool:
        return self._event.is_set()

    __call__ = is_cancelled


def never_cancelled() -> bool:
    return False


def list_children(path: str) -> list[str]:
    """Direct children of a directory, sorted by name. Unreadable → []."""
    try:
        with os.scandir(path) as it:
            names = sorted(entry.name for entry in it)
    except (PermissionError, OSError):
        return []
    return [os.path.join(path, name) for name in names]


def is_directory(path: str) -> bool:
    # Symlinked directories are not followed
    return os.path.isdir(path) and not os.path.islink(path)


class NestedWorkingCopyScanner:
    """Find every working-copy boundary under a root, shallowest first.

    Each queued path is resolved once. A boundary is recorded and never
    descended into; anything else that is a non-administrative directory has
    its children queued (subject to the membership check).
    """

    def __init__(
        self,
        describer: Describer,
        *,
        accepts: Optional[MembershipCheck] = None,
        is_admin: Callable[[str], bool] = is_admin_directory,
        children: Callable[[str], list[str]] = list_children,
        is_dir: Callable[[str], bool] = is_directory,
        cancelled: Optional[Callable[[], bool]] = None,
    ) -> None:
        self.describer = describer
        self.accepts = accepts or accept_all
        self.is_admin = is_admin
        self.children = children
        self.is_dir = is_dir
        self.cancelled = cancelled or never_cancelled

    def _accepts(self, root: str, child: str) -> bool:
        try:
            return self.accepts(root, child)
        except Exception as exc:
            logger.warning("Membership check failed for %s, accepting: %s", child, exc)
            return True

    def _is_dir(self, item: str, root: str) -> bool:
        # The root is always entered, even when it is itself a symlink
        if item == root and os.path.isdir(item):
            return True
        return self.is_dir(item)

    def scan(self, root: str) -> ScanResult:
        """Walk root breadth-first. Returns Completed(nodes) or Cancelled."""
        result: list[BoundaryNode] = []
        queue: deque[str] = deque([root])

        while queue:
            item = queue.popleft()
            if self.cancelled():
                logger.info("Scan of %s cancelled", root)
                return Cancelled(root)

            logger.debug("Visiting %s", item)
            node = resolve(item, self.describer)
            if node is not None:
                if node.has_error:
                    logger.warning("Could not resolve %s: %s", item, node.error)
                else:
                    logger.info("Working copy %s -> %s", item, node.url)
                result.append(node)
                continue

            if not self._is_dir(item, root) or self.is_admin(item):
                continue

            for child in self.children(item):
                if self.cancelled():
                    logger.info("Scan of %s cancelled", root)
                    return Cancelled(root)
                if self._accepts(root, child):
                    queue.append(child)

        return Completed(root, tuple(result))


def build_scanner(
    config: Optional[ScanConfig] = None,
    cancelled: Optional[Callable[[], bool]] = None,
) -> NestedWorkingCopyScanner:
    """Wire the svn describer and root filter from a ScanConfig."""
    cfg = config or load_config()
    describer = functools.partial(describe, svn=cfg.svn_binary, timeout=cfg.timeout)
    accepts: MembershipCheck = accept_all
    if cfg.use_filter:
        accepts = RootFilter(cfg.exclude_names, cfg.exclude_paths, admin_names=cfg.admin_names)
    admin_names = cfg.admin_names
    return NestedWorkingCopyScanner(
        describer,
        accepts=accepts,
        is_admin=lambda path: is_admin_directory(path, admin_names),
        cancelled=cancelled,
    )


def find_working_copies(
    root: str,
    config: Optional[ScanConfig] = None,
    cancelled: Optional[Callable[[], bool]] = None,
) -> ScanResult:
    """Find all nested working copies under root using the svn command line client."""
    root = os.path.abspath(os.path.expanduser(root))
    return build_scanner(config, cancelled).scan(root)
