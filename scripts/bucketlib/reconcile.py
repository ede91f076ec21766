"""
Join local manifest versions with the versions checkver reported.
"""

from dataclasses import dataclass
from pathlib import Path

from .manifests import ManifestRecord


@dataclass(frozen=True)
class ReconciledEntry:
    name: str
    local_version: str | None
    path: Path
    remote_version: str | None
    outdated: bool


def is_outdated(local_version: str | None, remote_version: str | None) -> bool:
    """Exact string comparison; no remote data means not outdated."""
    return remote_version is not None and remote_version != local_version


def reconcile(records: list[ManifestRecord], remote_index: dict[str, str]) -> list[ReconciledEntry]:
    """Left join records against the remote index, keeping record order.

    Names reported by checkver without a local manifest are dropped.
    """
    entries = []
    for record in records:
        remote_version = remote_index.get(record.name)
        entries.append(ReconciledEntry(
            name=record.name,
            local_version=record.local_version,
            path=record.path,
            remote_version=remote_version,
            outdated=is_outdated(record.local_version, remote_version),
        ))
    return entries


def outdated_entries(entries: list[ReconciledEntry]) -> list[ReconciledEntry]:
    return [e for e in entries if e.outdated]
