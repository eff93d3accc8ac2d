"""Node resolution — turn one describer outcome into a boundary record or nothing."""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Callable, Optional

from nestscan.models import (
    BoundaryNode,
    Described,
    DescribeFailure,
    DescribeOutcome,
    SvnError,
)

logger = logging.getLogger(__name__)

Describer = Callable[[str], DescribeOutcome]


def placeholder_url(path: str) -> str:
    """Build the synthetic ``file://`` URL used when only an error is known.

    This is NOT a repository URL. It only names the local directory.
    """
    return Path(os.path.abspath(path)).as_uri()


def resolve(path: str, describer: Describer) -> Optional[BoundaryNode]:
    """Return a BoundaryNode if path is a working-copy boundary, else None.

    Never raises: describer failures become a node with ``error`` set.
    """
    try:
        outcome = describer(path)
    except Exception as exc:
        logger.warning("Describer raised for %s: %s", path, exc)
        outcome = DescribeFailure(SvnError(None, str(exc) or type(exc).__name__))

    if isinstance(outcome, DescribeFailure):
        fake = placeholder_url(path)
        return BoundaryNode(path, fake, fake, outcome.error)

    if isinstance(outcome, Described) and outcome.url and outcome.repository_root_url:
        return BoundaryNode(path, outcome.url, outcome.repository_root_url)

    # NotVersioned, or a half-described path (URL without root or vice versa)
    return None
