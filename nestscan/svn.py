"""Subversion access — describe a directory via the svn command line client."""

from __future__ import annotations

import logging
import os
import re
import subprocess
import xml.etree.ElementTree as ET
from dataclasses import dataclass
from typing import Mapping, Optional

from nestscan.models import (
    Described,
    DescribeFailure,
    DescribeOutcome,
    NotVersioned,
    SvnError,
)

logger = logging.getLogger(__name__)

ERROR_CODE_RE = re.compile(r"\b([EW]\d{6})\b")

# Codes meaning "this path is not (the root of) a working copy", as opposed
# to "it is one but svn could not read it".
UNVERSIONED_OR_NOT_FOUND = frozenset({
    "E150000",  # SVN_ERR_ENTRY_NOT_FOUND
    "E155007",  # SVN_ERR_WC_NOT_WORKING_COPY
    "E155010",  # SVN_ERR_WC_PATH_NOT_FOUND
    "W155010",
    "E200005",  # SVN_ERR_UNVERSIONED_RESOURCE
})

# Reported alongside W155010 when some targets are missing; says nothing on its own.
SUMMARY_CODES = frozenset({"E200009"})

ADMIN_DIR_NAME = ".svn"
ASP_DOT_NET_ADMIN_DIR_NAME = "_svn"


@dataclass
class SvnCall:
    returncode: int
    stdout: str
    stderr: str


def admin_directory_names(environ: Optional[Mapping[str, str]] = None) -> frozenset[str]:
    """Return the administrative directory names svn uses in this environment."""
    env = os.environ if environ is None else environ
    if env.get("SVN_ASP_DOT_NET_HACK"):
        return frozenset({ASP_DOT_NET_ADMIN_DIR_NAME})
    return frozenset({ADMIN_DIR_NAME})


def is_admin_directory(path: str, names: Optional[frozenset[str]] = None) -> bool:
    """True if path names a Subversion metadata directory."""
    if names is None:
        names = admin_directory_names()
    return os.path.basename(os.path.normpath(path)) in names


def is_unversioned_or_not_found(code: Optional[str]) -> bool:
    return code in UNVERSIONED_OR_NOT_FOUND


def parse_error_codes(stderr: str) -> list[str]:
    """Extract svn error/warning codes (E155007, W155010, ...) in order of appearance."""
    return ERROR_CODE_RE.findall(stderr)


def classify_error(stderr: str, returncode: int) -> DescribeOutcome:
    """Turn a failed ``svn info`` into NotVersioned or DescribeFailure."""
    codes = parse_error_codes(stderr)
    for code in codes:
        if is_unversioned_or_not_found(code):
            return NotVersioned(code)

    specific = [c for c in codes if c not in SUMMARY_CODES]
    code = specific[0] if specific else (codes[0] if codes else None)
    message = _error_message(stderr, code) or f"svn exited with status {returncode}"
    return DescribeFailure(SvnError(code, message))


def _error_message(stderr: str, code: Optional[str]) -> str:
    """Pick the stderr line carrying ``code``, minus the ``svn: E...:`` prefix."""
    lines = [ln.strip() for ln in stderr.splitlines() if ln.strip()]
    if code:
        for line in lines:
            if code in line:
                return line.split(f"{code}:", 1)[-1].strip()
    return lines[0] if lines else ""


def parse_info_xml(output: str) -> Described:
    """Read the URL and repository root of the first entry in ``svn info --xml``."""
    root = ET.fromstring(output)
    entry = root.find("entry")
    if entry is None:
        return Described(None, None)

    url = entry.findtext("url")
    repo_root = entry.findtext("repository/root")
    return Described(url.strip() if url else None, repo_root.strip() if repo_root else None)


def peg_escape(path: str) -> str:
    """Append an empty peg revision so an ``@`` in the name is taken literally."""
    return path + "@"


def _run_svn(args: list[str], *, svn: str = "svn", timeout: float = 30) -> SvnCall:
    """Run an svn command and capture its output."""
    result = subprocess.run(
        [svn] + args,
        capture_output=True,
        text=True,
        timeout=timeout,
        errors="replace",
    )
    return SvnCall(result.returncode, result.stdout, result.stderr)


def describe(path: str, *, svn: str = "svn", timeout: float = 30) -> DescribeOutcome:
    """Describe path as a working copy: its URL and repository root, or why not."""
    try:
        call = _run_svn(["info", "--xml", "--non-interactive", peg_escape(path)], svn=svn, timeout=timeout)
    except FileNotFoundError:
        return DescribeFailure(SvnError(None, f"svn executable not found: {svn}"))
    except subprocess.TimeoutExpired:
        return DescribeFailure(SvnError(None, f"svn info timed out after {timeout}s"))
    except OSError as exc:
        return DescribeFailure(SvnError(None, str(exc)))

    if call.returncode != 0:
        outcome = classify_error(call.stderr, call.returncode)
        logger.debug("svn info %s -> %s", path, outcome)
        return outcome

    try:
        return parse_info_xml(call.stdout)
    except ET.ParseError as exc:
        return DescribeFailure(SvnError(None, f"unreadable svn info output: {exc}"))
