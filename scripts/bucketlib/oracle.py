"""
Adapter for the external checkver tool.

checkver prints one line per manifest it checked, e.g.::

    ani: 5.2.0 (scoop version is 5.1.0) autoupdate available

mixed with log lines and warnings on both output streams. Its format is a
convention, not a contract, so lines are matched one at a time and anything
that does not look like ``<name>: <version>`` is ignored.
"""

import re
import subprocess
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable

from .errors import OracleNotFoundError
from .output import print_command

WILDCARD = "*"
UPDATE_FLAG = "-Update"
DIR_FLAG = "-Dir"

# Name is everything up to the first colon, version the first token after it
VERSION_LINE = re.compile(r'^(?P<name>[^:]+):\s*(?P<version>\S+)')
ANSI_ESCAPE = re.compile(r'\x1b\[[0-9;]*[A-Za-z]')


@dataclass(frozen=True)
class ParsedLine:
    name: str
    version: str


@dataclass(frozen=True)
class IgnoredLine:
    text: str


def parse_line(line: str) -> ParsedLine | IgnoredLine:
    """Parse one line of checkver output."""
    text = ANSI_ESCAPE.sub('', line).strip()
    match = VERSION_LINE.match(text)
    if not match:
        return IgnoredLine(line)

    name = match.group("name").strip()
    if not name:
        return IgnoredLine(line)
    return ParsedLine(name, match.group("version").strip())


def parse_output(lines: Iterable[str]) -> dict[str, str]:
    """Build the remote version index from checkver output.

    A later line for the same name replaces an earlier one.
    """
    index = {}
    for line in lines:
        result = parse_line(line)
        if isinstance(result, ParsedLine):
            index[result.name] = result.version
    return index


class Checkver:
    """Runs checkver with a command resolved once at startup."""

    def __init__(self, command: list[str]):
        self.command = list(command)

    def _run(self, args: list[str], cwd: Path | None = None) -> subprocess.CompletedProcess:
        cmd = self.command + args
        print_command(cmd)
        # stderr folded into stdout so lines keep their relative order
        return subprocess.run(
            cmd,
            cwd=cwd,
            stdout=subprocess.PIPE,
            stderr=subprocess.STDOUT,
            text=True,
            errors="replace",
        )

    def check(self, names: Iterable[str] | None, directory: Path) -> list[str]:
        """Run checkver and return its combined output lines.

        ``names=None`` checks every manifest with one wildcard invocation;
        otherwise checkver runs once per name, in the given order.
        """
        selectors = [WILDCARD] if names is None else list(names)
        lines = []
        for selector in selectors:
            try:
                result = self._run([selector, DIR_FLAG, str(directory)])
            except OSError as e:
                raise OracleNotFoundError(f"Could not run checkver: {e}") from e
            lines.extend(result.stdout.splitlines())
        return lines

    def update(self, name: str, directory: Path) -> subprocess.CompletedProcess:
        """Run checkver in update mode for a single manifest."""
        return self._run([name, DIR_FLAG, str(directory), UPDATE_FLAG])


def fetch_remote_versions(oracle: Checkver, directory: Path, names: Iterable[str] | None = None) -> dict[str, str]:
    return parse_output(oracle.check(names, directory))
