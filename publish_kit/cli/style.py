# publish_kit/cli/style.py
"""
Console styling and interactive helpers for the publishing pipeline.
Status lines, parameter notices, deployment reports and the y/N prompt
all go through the shared rich console below.
"""

from rich.console import Console
from rich.markup import escape
from rich.table import Table
import os
import re
import sys

from publish_kit.errors import NotConfirmedError

# ─────────────────────────────────────────────
# Console instance
# ─────────────────────────────────────────────

# Auto-detect if we need ASCII mode based on console encoding
_needs_ascii = False
if sys.platform == "win32":
    try:
        encoding = sys.stdout.encoding or "utf-8"
        "→".encode(encoding)
    except (UnicodeEncodeError, AttributeError):
        _needs_ascii = True

console = Console(highlight=False, soft_wrap=True, legacy_windows=False)

# ─────────────────────────────────────────────
# Color map
# ─────────────────────────────────────────────
color_map = {
    "success": "green",
    "warn": "yellow",
    "error": "bright_red",
    "info": "white",
    "highlight": "cyan",
    "muted": "grey50",
    "title": "bold cyan",
}

# ─────────────────────────────────────────────
# Symbol map (with ASCII fallback)
# ─────────────────────────────────────────────
symbol_map = {
    "success": "✓",
    "warn": "⚠",
    "error": "✗",
    "info": "ℹ",
    "arrow": "→",
    "separator": "─",
}

TEXTMODE = bool(os.environ.get("PUBLISH_TEXTMODE", "").lower() in ("1", "true", "yes")) or _needs_ascii
if TEXTMODE:
    symbol_map.update({
        "success": "OK",
        "warn": "!",
        "error": "X",
        "info": "i",
        "arrow": "->",
        "separator": "-",
    })

CONFIRM_PATTERN = re.compile(r"y|Y")


def print_status(
    message: str,
    level: str = "info",
    *,
    bold: bool = False,
    prefix: bool = True,
    spacing: bool = False
):
    """
    Print a single status line in the color of its level.
    Levels without a symbol (``muted``, ``highlight``) print bare.
    """
    color = color_map.get(level, "white")
    symbol = f"{symbol_map[level]} " if prefix and level in symbol_map else ""

    markup = message
    if bold:
        markup = f"[bold]{markup}[/bold]"

    console.print(f"[{color}]{symbol}{markup}[/{color}]")
    if spacing:
        console.print()


def print_rule(width: int = 50):
    console.print(f"[{color_map['muted']}]{'-' * width}[/{color_map['muted']}]")


def print_table(headers, rows, title=None):
    """Render a table with bold cyan headers."""
    console.print()
    table = Table(show_header=True, header_style="bold cyan")
    for h in headers:
        table.add_column(h)
    for row in rows:
        table.add_row(*[escape(str(c)) for c in row])
    if title:
        table.title = f"[bold cyan]{escape(title)}[/bold cyan]"
    console.print(table)
    console.print()


def parameter_notice(props):
    """
    Print the parameters a run is about to use so the operator can check them.
    Keys are padded to a fixed column and values highlighted in red.
    """
    print_rule()
    console.print("Please check the following parameters are correct:")
    print_rule()

    for key, val in props.items():
        padding = " " * max(40 - len(key), 0)
        console.print(
            f"[{color_map['muted']}]{escape(key)}[/{color_map['muted']}]{padding}"
            f"[{color_map['error']}]{escape(str(val))}[/{color_map['error']}]"
        )

    print_rule()


def report_deployed_contracts(deployer):
    """Summarize the contracts a deployer created during this run."""
    deployed = deployer.new_contracts_deployed
    console.print()
    print_status(f"Successfully deployed {len(deployed)} contracts!", level="success", prefix=False, spacing=True)

    rows = [
        (entry["name"], entry["address"], deployer.deployment["targets"][entry["name"]]["link"])
        for entry in deployed
    ]
    if rows:
        print_table(
            ["Contract", "Address", "Link"],
            rows,
            title=f'All contracts deployed on "{deployer.network}" network',
        )
    else:
        print_status("Note: No new contracts deployed.", level="muted")


def confirm_action(prompt: str):
    """
    Ask the operator a yes/no question.
    Returns when the answer contains ``y`` or ``Y``; anything else (EOF included)
    raises ``NotConfirmedError``.
    """
    try:
        answer = console.input(prompt)
    except EOFError:
        answer = ""
    if not CONFIRM_PATTERN.search(answer):
        raise NotConfirmedError()
