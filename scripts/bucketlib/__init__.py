"""
Shared modules for bucket maintenance scripts.
"""

from .config import (
    Settings,
    build_settings,
    load_config_file,
    load_settings,
    resolve_checkver,
)

from .errors import (
    BucketUpdateError,
    ConfigError,
    EnumerationError,
    GitError,
    OracleNotFoundError,
    PublishError,
)

from .git import Git

from .manifests import ManifestRecord, load_manifests

from .oracle import (
    Checkver,
    IgnoredLine,
    ParsedLine,
    fetch_remote_versions,
    parse_line,
    parse_output,
)

from .pipeline import State, UpdateRun, ask_yes_no

from .publish import PublishOutcome, commit_message, publish

from .reconcile import ReconciledEntry, is_outdated, outdated_entries, reconcile

from .updater import UpdateResult, apply_updates, changed_results

from .yaml_utils import create_yaml

__all__ = [
    # config
    "Settings",
    "build_settings",
    "load_config_file",
    "load_settings",
    "resolve_checkver",
    # errors
    "BucketUpdateError",
    "ConfigError",
    "EnumerationError",
    "GitError",
    "OracleNotFoundError",
    "PublishError",
    # git
    "Git",
    # manifests
    "ManifestRecord",
    "load_manifests",
    # oracle
    "Checkver",
    "IgnoredLine",
    "ParsedLine",
    "fetch_remote_versions",
    "parse_line",
    "parse_output",
    # pipeline
    "State",
    "UpdateRun",
    "ask_yes_no",
    # publish
    "PublishOutcome",
    "commit_message",
    "publish",
    # reconcile
    "ReconciledEntry",
    "is_outdated",
    "outdated_entries",
    "reconcile",
    # updater
    "UpdateResult",
    "apply_updates",
    "changed_results",
    # yaml_utils
    "create_yaml",
]
