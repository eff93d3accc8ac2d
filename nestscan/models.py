"""Result types shared by the describer, resolver, and scanner."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Union


@dataclass(frozen=True)
class SvnError:
    """Opaque failure reported by svn for a single path."""

    code: Optional[str]             # e.g. "E155037", None when svn gave no code
    message: str

    def __str__(self) -> str:
        if self.code:
            return f"{self.code}: {self.message}"
        return self.message


@dataclass(frozen=True)
class BoundaryNode:
    """A directory where an independently rooted working copy begins.

    When ``error`` is set, ``url`` and ``repository_root_url`` are synthetic
    ``file://`` placeholders for the local directory. They only say "this
    directory exists on disk" and must never be treated as repository URLs.
    """

    directory: str
    url: str
    repository_root_url: str
    error: Optional[SvnError] = None

    @property
    def has_error(self) -> bool:
        return self.error is not None

    @property
    def is_placeholder(self) -> bool:
        """True when the URLs are synthetic placeholders."""
        return self.error is not None


# ── Describer outcomes ──────────────────────────────────────────────────


@dataclass(frozen=True)
class Described:
    url: Optional[str]
    repository_root_url: Optional[str]


@dataclass(frozen=True)
class NotVersioned:
    code: Optional[str] = None


@dataclass(frozen=True)
class DescribeFailure:
    error: SvnError


DescribeOutcome = Union[Described, NotVersioned, DescribeFailure]


# ── Scan results ────────────────────────────────────────────────────────


@dataclass(frozen=True)
class Completed:
    root: str
    nodes: tuple[BoundaryNode, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "nodes", tuple(self.nodes))

    @property
    def errors(self) -> list[BoundaryNode]:
        return [n for n in self.nodes if n.has_error]


@dataclass(frozen=True)
class Cancelled:
    """The scan was cancelled; no partial results are kept."""

    root: str


ScanResult = Union[Completed, Cancelled]
