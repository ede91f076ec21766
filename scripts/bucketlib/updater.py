"""
Run checkver's autoupdate for each outdated manifest and see what it changed.
"""

import subprocess
from dataclasses import dataclass
from pathlib import Path

from .errors import GitError
from .git import Git
from .oracle import Checkver
from .output import print_dim, print_ok, print_warning
from .reconcile import ReconciledEntry


@dataclass
class UpdateResult:
    name: str
    path: Path
    diff: str | None = None  # None when the diff step did not run
    error: str | None = None

    @property
    def changed(self) -> bool:
        return bool(self.diff and self.diff.strip())


def _output_tail(output: str, lines: int = 5) -> str:
    return "\n".join(output.strip().splitlines()[-lines:])


def update_one(entry: ReconciledEntry, oracle: Checkver, git: Git, directory: Path) -> UpdateResult:
    """Update a single manifest. Failures are recorded, never raised."""
    result = UpdateResult(entry.name, entry.path)

    try:
        proc = oracle.update(entry.name, directory)
    except (OSError, subprocess.SubprocessError) as e:
        result.error = f"checkver could not run: {e}"
        return result

    if proc.returncode != 0:
        result.error = f"checkver exited with {proc.returncode}"
        tail = _output_tail(proc.stdout or "")
        if tail:
            result.error += f"\n{tail}"
        return result

    try:
        result.diff = git.diff([entry.path])
    except GitError as e:
        result.error = f"git diff failed: {e}"

    return result


def apply_updates(entries: list[ReconciledEntry], oracle: Checkver, git: Git, directory: Path) -> list[UpdateResult]:
    """Update each entry with its own checkver run, in order.

    One failing or no-op update does not stop the others.
    """
    results = []
    for entry in entries:
        result = update_one(entry, oracle, git, directory)
        if result.error:
            print_warning(f"{entry.name}: {result.error}")
        elif result.changed:
            print_ok(f"{entry.name}: updated to {entry.remote_version}")
        else:
            print_warning(f"{entry.name}: checkver ran but the manifest did not change")
        results.append(result)
    return results


def changed_results(results: list[UpdateResult]) -> list[UpdateResult]:
    return [r for r in results if r.changed and not r.error]


def print_update_summary(results: list[UpdateResult]):
    changed = changed_results(results)
    failed = [r for r in results if r.error]
    unchanged = [r for r in results if not r.error and not r.changed]

    for r in changed:
        added = sum(1 for line in r.diff.splitlines() if line.startswith("+") and not line.startswith("+++"))
        removed = sum(1 for line in r.diff.splitlines() if line.startswith("-") and not line.startswith("---"))
        print_ok(f"{r.name} (+{added} -{removed})")
    for r in unchanged:
        print_warning(f"{r.name}: no changes")
    for r in failed:
        print_warning(f"{r.name}: failed: {r.error.splitlines()[0]}")

    print()
    print_dim(f"{len(changed)} changed, {len(unchanged)} unchanged, {len(failed)} failed")
