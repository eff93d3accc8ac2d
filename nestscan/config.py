"""Scan configuration — defaults, environment variables, and explicit overrides."""

from __future__ import annotations

import math
import os
from dataclasses import dataclass, field
from typing import Mapping, Optional

from nestscan.svn import admin_directory_names

# Dependency and tool caches that never hold checkouts worth reporting.
DEFAULT_EXCLUDE_NAMES = frozenset({
    "node_modules", ".venv", "venv", "__pycache__", ".gradle", ".dart_tool",
    ".next", ".nuxt", ".tox", ".mypy_cache", ".ruff_cache", ".pytest_cache",
    "site-packages", ".cargo", ".rustup",
})

DEFAULT_TIMEOUT = 30.0

ENV_SVN = "NESTSCAN_SVN"
ENV_TIMEOUT = "NESTSCAN_TIMEOUT"
ENV_EXCLUDE = "NESTSCAN_EXCLUDE"


class ConfigError(ValueError):
    """Invalid configuration value."""


@dataclass
class ScanConfig:
    svn_binary: str = "svn"
    timeout: float = DEFAULT_TIMEOUT
    exclude_names: frozenset[str] = DEFAULT_EXCLUDE_NAMES
    exclude_paths: tuple[str, ...] = ()
    admin_names: frozenset[str] = field(default_factory=admin_directory_names)
    use_filter: bool = True


def _parse_timeout(raw: object) -> float:
    try:
        value = float(raw)  # type: ignore[arg-type]
    except (TypeError, ValueError):
        raise ConfigError(f"timeout must be a number, got {raw!r}") from None
    if not math.isfinite(value) or value <= 0:
        raise ConfigError(f"timeout must be positive, got {raw!r}")
    return value


def _split_names(raw: str) -> set[str]:
    return {part.strip() for part in raw.split(",") if part.strip()}


def load_config(
    environ: Optional[Mapping[str, str]] = None,
    *,
    svn_binary: Optional[str] = None,
    timeout: Optional[float] = None,
    exclude_names: Optional[list[str]] = None,
    exclude_paths: Optional[list[str]] = None,
    use_filter: bool = True,
) -> ScanConfig:
    """Build a ScanConfig: defaults, then environment, then explicit arguments."""
    env = os.environ if environ is None else environ
    cfg = ScanConfig(admin_names=admin_directory_names(env), use_filter=use_filter)

    if env.get(ENV_SVN):
        cfg.svn_binary = env[ENV_SVN]
    if env.get(ENV_TIMEOUT):
        cfg.timeout = _parse_timeout(env[ENV_TIMEOUT])

    names = set(DEFAULT_EXCLUDE_NAMES)
    if env.get(ENV_EXCLUDE):
        names |= _split_names(env[ENV_EXCLUDE])

    if svn_binary:
        cfg.svn_binary = svn_binary
    if timeout is not None:
        cfg.timeout = _parse_timeout(timeout)
    if exclude_names:
        names |= {n.strip() for n in exclude_names if n.strip()}
    if exclude_paths:
        cfg.exclude_paths = tuple(os.path.abspath(os.path.expanduser(p)) for p in exclude_paths)

    cfg.exclude_names = frozenset(names)
    return cfg
