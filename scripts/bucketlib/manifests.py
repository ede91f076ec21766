"""
Load the manifests of a bucket directory and their declared versions.
"""

import json
from dataclasses import dataclass
from pathlib import Path

from ruamel.yaml.error import YAMLError

from .errors import EnumerationError
from .output import print_warning
from .yaml_utils import create_safe_yaml

JSON_SUFFIXES = (".json",)
YAML_SUFFIXES = (".yml", ".yaml")


@dataclass(frozen=True)
class ManifestRecord:
    name: str  # file stem, unique within a bucket
    local_version: str | None
    path: Path


class ManifestParseError(ValueError):
    pass


def discover_manifests(directory: Path) -> list[Path]:
    """List manifest files in a directory, sorted by file name."""
    suffixes = JSON_SUFFIXES + YAML_SUFFIXES
    return sorted(
        p for p in directory.iterdir()
        if p.is_file() and p.suffix.lower() in suffixes
    )


def parse_manifest(path: Path) -> dict:
    """Parse one manifest file into a mapping."""
    try:
        if path.suffix.lower() in YAML_SUFFIXES:
            with open(path, encoding="utf-8") as f:
                data = create_safe_yaml().load(f)
        else:
            with open(path, encoding="utf-8-sig") as f:
                data = json.load(f)
    except (OSError, UnicodeDecodeError, json.JSONDecodeError, YAMLError) as e:
        raise ManifestParseError(str(e)) from e

    if not isinstance(data, dict):
        raise ManifestParseError(f"expected an object at the top level, got {type(data).__name__}")
    return data


def load_manifests(directory: Path) -> list[ManifestRecord]:
    """Load every manifest in ``directory``.

    Raises EnumerationError if the directory does not exist. Files that fail
    to parse are reported as warnings and left out; an empty directory gives
    an empty list. A missing ``version`` field gives ``local_version=None``.
    """
    if not directory.is_dir():
        raise EnumerationError(f"Manifest directory not found: {directory}")

    records = []
    seen = {}
    for path in discover_manifests(directory):
        name = path.stem
        if name in seen:
            print_warning(f"Skipping {path.name}: duplicate of {seen[name].name}")
            continue

        try:
            data = parse_manifest(path)
        except ManifestParseError as e:
            print_warning(f"Skipping {path.name}: {e}")
            continue

        version = data.get("version")
        records.append(ManifestRecord(
            name=name,
            local_version=None if version is None else str(version),
            path=path,
        ))
        seen[name] = path

    return records
