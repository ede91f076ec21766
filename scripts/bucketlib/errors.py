"""
Exceptions raised by bucket maintenance scripts.

Only precondition failures and the publish transaction raise. Per-manifest
and per-name problems are reported as warnings and recorded as data.
"""


class BucketUpdateError(Exception):
    """Base class for fatal errors; the CLI turns these into exit status 1."""


class ConfigError(BucketUpdateError):
    """The configuration file is unreadable or has a bad key/value."""


class EnumerationError(BucketUpdateError):
    """The manifest directory does not exist."""


class OracleNotFoundError(BucketUpdateError):
    """The checkver tool (or the interpreter to run it) could not be located."""


class GitError(BucketUpdateError):
    """A git command exited non-zero."""

    def __init__(self, cmd: list[str], returncode: int, stderr: str):
        self.cmd = cmd
        self.returncode = returncode
        self.stderr = stderr.strip()
        detail = f": {self.stderr}" if self.stderr else ""
        super().__init__(f"`{' '.join(cmd)}` exited with {returncode}{detail}")


class PublishError(BucketUpdateError):
    """Staging, committing or pushing the updated manifests failed."""
