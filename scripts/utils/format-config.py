#!/usr/bin/env python3
# /// script
# requires-python = ">=3.10"
# dependencies = ["ruamel.yaml"]
# ///
"""
Check and reformat .bucket-update.yaml with consistent indentation.

Usage: uv run format-config.py [CONFIG]

Fails without writing if the file has an unknown key or a bad value.
"""

import sys
from pathlib import Path

# Add parent directory to path for bucketlib imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from bucketlib.config import DEFAULT_CONFIG_FILE, load_config_file
from bucketlib.errors import ConfigError
from bucketlib.output import print_error, print_ok
from bucketlib.yaml_utils import create_yaml


def main():
    args = [a for a in sys.argv[1:] if not a.startswith('--')]
    config_file = Path(args[0]) if args else Path(DEFAULT_CONFIG_FILE)

    try:
        load_config_file(config_file)
    except ConfigError as e:
        print_error(str(e))
        sys.exit(1)

    yaml = create_yaml()

    with open(config_file, encoding='utf-8') as f:
        data = yaml.load(f)

    if data is None:
        print_ok(f"{config_file} is empty, nothing to format")
        return

    with open(config_file, 'w', encoding='utf-8') as f:
        yaml.dump(data, f)

    print_ok(f"Formatted {config_file}")


if __name__ == '__main__':
    main()
