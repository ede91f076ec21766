"""
Thin wrapper over the git commands the update scripts need.

Every command either succeeds or raises GitError.
"""

import subprocess
from pathlib import Path

from .errors import GitError
from .output import print_command


def _pathspecs(paths: list[Path]) -> list[str]:
    # Absolute, so they hold whatever directory git runs in
    return [str(Path(p).resolve()) for p in paths]


class Git:
    def __init__(self, executable: str = "git", cwd: Path | None = None):
        self.executable = executable
        self.cwd = cwd

    def run(self, *args: str, echo: bool = True) -> str:
        """Run a git command and return stdout."""
        cmd = [self.executable, *args]
        if echo:
            print_command(cmd)
        try:
            result = subprocess.run(
                cmd,
                cwd=self.cwd,
                capture_output=True,
                text=True,
                errors="replace",
            )
        except OSError as e:
            raise GitError(cmd, -1, str(e)) from e

        if result.returncode != 0:
            raise GitError(cmd, result.returncode, result.stderr)
        return result.stdout

    def diff(self, paths: list[Path]) -> str:
        """Working-tree diff of ``paths`` against the last commit."""
        return self.run("diff", "--no-color", "HEAD", "--", *_pathspecs(paths), echo=False)

    def add(self, paths: list[Path]):
        self.run("add", "--", *_pathspecs(paths))

    def commit(self, message: str, paths: list[Path]):
        # Only paths go into the commit, whatever else is staged
        self.run("commit", "-m", message, "--", *_pathspecs(paths))

    def push(self, remote: str | None = None, branch: str | None = None):
        if remote and branch:
            self.run("push", remote, branch)
        elif remote:
            self.run("push", remote)
        else:
            self.run("push")
