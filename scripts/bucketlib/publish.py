"""
Stage, commit and push the manifests that actually changed.
"""

from enum import Enum

from .errors import GitError, PublishError
from .git import Git
from .updater import UpdateResult, changed_results


class PublishOutcome(Enum):
    NOTHING_TO_PUBLISH = "nothing to publish"
    COMMITTED = "committed"
    PUBLISHED = "published"


def commit_message(names: list[str], separator: str = ", ") -> str:
    """Commit message listing the updated manifests in order."""
    return separator.join(names)


def publish(results: list[UpdateResult], git: Git, separator: str = ", ",
            remote: str | None = None, branch: str | None = None, push: bool = True) -> PublishOutcome:
    """Commit every result with a material diff as one commit, then push.

    Results without a diff are left out even if checkver ran for them.
    Raises PublishError if any git step fails; files on disk are kept.
    """
    changed = changed_results(results)
    if not changed:
        return PublishOutcome.NOTHING_TO_PUBLISH

    names = [r.name for r in changed]
    paths = [r.path for r in changed]

    try:
        git.add(paths)
        git.commit(commit_message(names, separator), paths)
    except GitError as e:
        raise PublishError(f"Could not commit {len(paths)} manifest(s): {e}") from e

    if not push:
        return PublishOutcome.COMMITTED

    try:
        git.push(remote, branch)
    except GitError as e:
        raise PublishError(f"Commit created but push failed: {e}") from e

    return PublishOutcome.PUBLISHED
