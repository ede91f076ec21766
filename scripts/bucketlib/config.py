"""
Settings for the bucket update scripts.

Values come from built-in defaults, then an optional YAML file
(``.bucket-update.yaml``), then command-line flags. The checkver command is
located once here and handed to everything that runs it.
"""

import os
import shutil
import subprocess
from dataclasses import dataclass, field, fields, replace
from pathlib import Path

from ruamel.yaml.error import YAMLError

from .errors import ConfigError, OracleNotFoundError
from .yaml_utils import create_safe_yaml

DEFAULT_CONFIG_FILE = ".bucket-update.yaml"
DEFAULT_MANIFEST_DIR = "bucket"
CHECKVER_SCRIPT = Path("bin") / "checkver.ps1"
POWERSHELL_CANDIDATES = ("pwsh", "powershell")


@dataclass
class Settings:
    manifest_dir: Path = Path(DEFAULT_MANIFEST_DIR)
    checkver: list[str] = field(default_factory=list)
    git: str = "git"
    remote: str | None = None
    branch: str | None = None
    commit_separator: str = ", "
    assume_yes: bool = False
    push: bool = True


# Expected type for each key accepted in the config file
_CONFIG_TYPES = {
    "manifest_dir": str,
    "checkver": (str, list),
    "git": str,
    "remote": str,
    "branch": str,
    "commit_separator": str,
    "assume_yes": bool,
    "push": bool,
}


def load_config_file(path: Path) -> dict:
    """Load and validate a YAML config file. Returns {} if the file is empty."""
    try:
        with open(path, encoding="utf-8") as f:
            data = create_safe_yaml().load(f)
    except (OSError, UnicodeDecodeError) as e:
        raise ConfigError(f"Cannot read config file {path}: {e}") from e
    except YAMLError as e:
        raise ConfigError(f"Invalid YAML in config file {path}: {e}") from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(f"Config file {path} must contain a mapping at the top level")

    for key, value in data.items():
        expected = _CONFIG_TYPES.get(key)
        if expected is None:
            raise ConfigError(f"Unknown config key '{key}' in {path}")
        if value is not None and not isinstance(value, expected):
            raise ConfigError(f"Config key '{key}' in {path} has invalid type {type(value).__name__}")
        if key == "checkver" and isinstance(value, list) and not all(isinstance(v, str) for v in value):
            raise ConfigError(f"Config key 'checkver' in {path} must be a list of strings")

    return data


def build_settings(config: dict, overrides: dict | None = None) -> Settings:
    """Merge config file values and flag overrides onto the defaults.

    ``checkver`` is left as given; call resolve_checkver() to locate it.
    """
    merged = {k: v for k, v in config.items() if v is not None}
    merged.update({k: v for k, v in (overrides or {}).items() if v is not None})

    known = {f.name for f in fields(Settings)}
    values = {k: v for k, v in merged.items() if k in known}

    if "manifest_dir" in values:
        values["manifest_dir"] = Path(values["manifest_dir"])
    if isinstance(values.get("checkver"), str):
        values["checkver"] = [values["checkver"]]
    if values.get("branch") and not values.get("remote"):
        raise ConfigError("'branch' is set without 'remote'; git push needs both")

    return replace(Settings(), **values)


def find_powershell() -> str:
    for candidate in POWERSHELL_CANDIDATES:
        found = shutil.which(candidate)
        if found:
            return found
    raise OracleNotFoundError("checkver.ps1 needs PowerShell, but neither pwsh nor powershell is on PATH")


def _scoop_prefix() -> Path | None:
    """Ask an installed scoop where it lives."""
    scoop = shutil.which("scoop")
    if not scoop:
        return None
    try:
        result = subprocess.run(
            [scoop, "prefix", "scoop"],
            capture_output=True,
            text=True,
            timeout=30,
        )
    except (subprocess.TimeoutExpired, OSError):
        return None
    prefix = result.stdout.strip()
    if result.returncode != 0 or not prefix:
        return None
    return Path(prefix)


def _wrap_script(script: Path) -> list[str]:
    if not script.is_file():
        raise OracleNotFoundError(f"checkver script not found at {script}")
    if script.suffix.lower() == ".ps1":
        return [find_powershell(), "-NoProfile", "-File", str(script)]
    return [str(script)]


def resolve_checkver(settings: Settings) -> list[str]:
    """Locate the checkver command.

    Order: explicit setting, then $SCOOP_HOME/bin/checkver.ps1, then the
    install reported by `scoop prefix scoop`.
    """
    if settings.checkver:
        if len(settings.checkver) == 1:
            return _wrap_script(Path(settings.checkver[0]))
        if shutil.which(settings.checkver[0]) is None and not Path(settings.checkver[0]).is_file():
            raise OracleNotFoundError(f"checkver command not found: {settings.checkver[0]}")
        return list(settings.checkver)

    scoop_home = os.environ.get("SCOOP_HOME")
    if scoop_home:
        return _wrap_script(Path(scoop_home) / CHECKVER_SCRIPT)

    prefix = _scoop_prefix()
    if prefix is not None:
        return _wrap_script(prefix / CHECKVER_SCRIPT)

    raise OracleNotFoundError(
        "Could not locate checkver.ps1: set 'checkver' in the config file, "
        "set SCOOP_HOME, or install scoop"
    )


def load_settings(config_path: Path | None = None, overrides: dict | None = None) -> Settings:
    """Build settings and resolve the checkver command."""
    if config_path is None:
        default = Path(DEFAULT_CONFIG_FILE)
        config = load_config_file(default) if default.is_file() else {}
    else:
        config = load_config_file(config_path)

    settings = build_settings(config, overrides)
    return replace(settings, checkver=resolve_checkver(settings))
