# doclocator/cli_theme.py
"""Terminal look of the doclocator CLI.

Output is grouped into numbered sections (``01 · DOCUMENT``) holding either
key/value tables or row tables.  Document and anchor kinds are shown as
coloured badges so structured/markup results stand out in long listings.
"""

from __future__ import annotations

from rich import box
from rich.console import Console
from rich.table import Table
from rich.text import Text

BRAND = "d o c l o c a t o r"
TAGLINE = "Evidence locator for search result previews"

ACCENT = "#2F8F9D"
NEUTRAL = "#B5A89A"
MUTED = "dim"

# badge colour per document / anchor kind value
KIND_COLORS = {
    "structured": ACCENT,
    "page": ACCENT,
    "unstructured": "magenta",
    "text_range": "magenta",
    "html": "blue",
    "json": "blue",
    "dom_selector": "blue",
}

_STATUS_COLORS = {"ok": "green", "warn": "yellow", "error": "red"}
_RULE_WIDTH = 44


def print_banner(version: str, console: Console) -> None:
    console.print()
    console.print(Text.assemble(("  " + BRAND, f"bold {ACCENT}"), (f"  v{version}", MUTED)))
    console.print(f"  [{NEUTRAL}]{TAGLINE}[/{NEUTRAL}]")
    console.print()


def print_version(version: str, console: Console) -> None:
    console.print(Text.assemble((BRAND, f"bold {ACCENT}"), (f"  v{version}", MUTED)))


def section(title: str, console: Console, number: str | None = None) -> None:
    """Blank line, ``NN · TITLE`` header and a thin rule."""
    header = Text("  ")
    if number:
        header.append(number, style=f"bold {ACCENT}")
        header.append(" · ", style=MUTED)
    header.append(title.upper(), style="bold")
    console.print()
    console.print(header)
    console.print("  " + "─" * _RULE_WIDTH, style=NEUTRAL)


def make_table(**kwargs: object) -> Table:
    """Row table with a rounded, muted border."""
    kwargs.setdefault("header_style", "bold")
    return Table(box=box.ROUNDED, border_style=NEUTRAL, padding=(0, 1), **kwargs)


def make_kv_table() -> Table:
    """Headerless key/value table."""
    t = make_table(show_header=False)
    t.add_column("Key", style=ACCENT, no_wrap=True)
    t.add_column("Value", overflow="fold")
    return t


def badge(label: str, variant: str = "default") -> str:
    """Reverse-video badge; ``variant`` is a status or a document/anchor kind."""
    color = _STATUS_COLORS.get(variant) or KIND_COLORS.get(label.lower(), ACCENT)
    return f"[reverse {color}] {label.upper()} [/reverse {color}]"


def _status(symbol: str, color: str, msg: str) -> str:
    return f"  [bold {color}]{symbol}[/bold {color}] {msg}"


def info(msg: str) -> str:
    return _status("›", ACCENT, f"[{MUTED}]{msg}[/{MUTED}]")


def ok(msg: str) -> str:
    return _status("✓", "green", msg)


def warn(msg: str) -> str:
    return _status("!", "yellow", f"[yellow]{msg}[/yellow]")
