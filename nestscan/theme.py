"""Shared visual constants and helpers for nestscan."""

from __future__ import annotations

from rich.style import Style
from rich.text import Text

from nestscan.models import BoundaryNode

# ── Color Palette (GitHub Dark) ─────────────────────────────────────────

SURFACE = "#161b22"
BORDER = "#30363d"
MUTED = "#8b949e"

CYAN = "#58a6ff"
GREEN = "#39d353"
PURPLE = "#bc8cff"
YELLOW = "#e3b341"
RED = "#f85149"

# ── ASCII Banner ────────────────────────────────────────────────────────

BANNER = r"""
                  _
  _ __   ___  ___| |_ ___  ___ __ _ _ __
 | '_ \ / _ \/ __| __/ __|/ __/ _` | '_ \
 | | | |  __/\__ \ |_\__ \ (_| (_| | | | |
 |_| |_|\___||___/\__|___/\___\__,_|_| |_|"""

TAGLINE = "nested svn working copies"

ICON_OK = "✔"
ICON_ERROR = "✘"


def status_text(node: BoundaryNode) -> Text:
    """Short coloured status cell for a boundary node."""
    if node.has_error:
        return Text(f"{ICON_ERROR} error", style=Style(color=RED, bold=True))
    return Text(f"{ICON_OK} ok", style=Style(color=GREEN, bold=True))


def render_banner() -> Text:
    """Render the nestscan ASCII banner as styled Rich Text."""
    text = Text(justify="center")
    for line in BANNER.strip("\n").split("\n"):
        text.append(line + "\n", style=Style(color=GREEN, bold=True))
    text.append(f"  {TAGLINE}\n", style=Style(color=MUTED, italic=True))
    return text
