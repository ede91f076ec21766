#!/usr/bin/env python3
# /// script
# requires-python = ">=3.10"
# dependencies = ["ruamel.yaml"]
# ///
"""
List bucket manifests whose declared version is behind upstream.

Never prompts and never changes any file.

Usage:
    uv run check-outdated.py [DIR] [--only NAME ...] [--config F]
"""

import sys

from bucketlib.cli import main_check


if __name__ == "__main__":
    sys.exit(main_check())
