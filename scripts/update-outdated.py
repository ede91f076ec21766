#!/usr/bin/env python3
# /// script
# requires-python = ">=3.10"
# dependencies = ["ruamel.yaml"]
# ///
"""
Update outdated bucket manifests.

Runs checkver over the bucket, lists manifests whose version is behind
upstream, and after confirmation runs checkver's autoupdate for each one.
Manifests that actually changed are then committed and pushed as a single
commit, after a second confirmation.

Usage:
    uv run update-outdated.py [DIR] [--only NAME ...] [--dry-run] [--yes] [--no-push]

Options:
    DIR          Manifest directory (default: bucket)
    --only NAME  Only check/update this manifest (repeatable)
    --dry-run    Show outdated manifests without updating anything
    --yes        Answer yes to both prompts
    --no-push    Commit but do not push
    --config F   YAML config file (default: .bucket-update.yaml)
"""

import sys

from bucketlib.cli import main_update


if __name__ == "__main__":
    sys.exit(main_update())
