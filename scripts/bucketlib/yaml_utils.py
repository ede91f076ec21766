"""
Shared YAML utilities for bucket maintenance scripts.
"""

from ruamel.yaml import YAML


def create_yaml() -> YAML:
    """Create a round-trip YAML instance for writing .bucket-update.yaml.

    The config is a flat mapping with at most one list (``checkver``), so
    list items sit flush under their key and long paths are not wrapped.
    """
    yaml = YAML()
    yaml.preserve_quotes = True
    yaml.default_flow_style = False
    yaml.indent(mapping=2, sequence=2, offset=0)
    yaml.width = 4096
    return yaml


def create_safe_yaml() -> YAML:
    """Create a YAML loader that returns plain dicts and lists."""
    return YAML(typ="safe", pure=True)
