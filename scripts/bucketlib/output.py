"""
Shared output formatting for bucket maintenance scripts.
"""

import os
import sys


def _color_enabled() -> bool:
    return "NO_COLOR" not in os.environ and sys.stdout.isatty()


if _color_enabled():
    RED = '\033[0;31m'
    GREEN = '\033[0;32m'
    YELLOW = '\033[1;33m'
    CYAN = '\033[0;36m'
    DIM = '\033[2m'
    NC = '\033[0m'  # No color
else:
    RED = GREEN = YELLOW = CYAN = DIM = NC = ''


def print_header(title: str):
    """Print a section header."""
    print(f"\n{CYAN}## {title}{NC}")
    print("-" * (len(title) + 3))
    print()


def print_ok(msg: str):
    """Print a success message with checkmark."""
    print(f"{GREEN}✓{NC} {msg}")


def print_error(msg: str):
    """Print a fatal error to stderr."""
    print(f"{RED}ERROR:{NC} {msg}", file=sys.stderr)


def print_warning(msg: str):
    """Print a recoverable warning."""
    print(f"{YELLOW}⚠{NC} {msg}")


def print_dim(msg: str):
    """Print dimmed/secondary text."""
    print(f"{DIM}{msg}{NC}")


def print_change(name: str, old: str, new: str):
    """Print a version change line (for outdated reports)."""
    print(f"  {name}: {old} → {GREEN}{new}{NC}")


def print_command(cmd: list[str]):
    """Echo an external command before it runs."""
    print_dim(f"$ {' '.join(cmd)}")
