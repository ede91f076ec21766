from __future__ import annotations

import json
import subprocess
import sys
import textwrap
from pathlib import Path

import pytest

from bucketlib.errors import GitError

FAKE_CHECKVER = textwrap.dedent(
    """\
    import json
    import sys
    from pathlib import Path

    args = sys.argv[1:]
    selector = args[0]
    directory = Path(args[args.index("-Dir") + 1])
    update = "-Update" in args
    here = Path(__file__).parent
    remote = json.loads((here / "remote.json").read_text())
    noop = json.loads((here / "noop.json").read_text())

    print("Checking manifests in " + str(directory), flush=True)
    for manifest in sorted(directory.glob("*.json")):
        name = manifest.stem
        if selector not in ("*", name) or name not in remote:
            continue
        data = json.loads(manifest.read_text())
        local = data.get("version")
        print(name + ": " + remote[name] + " (scoop version is " + str(local) + ")", flush=True)
        if update and local != remote[name] and name not in noop:
            data["version"] = remote[name]
            manifest.write_text(json.dumps(data, indent=4) + "\\n")
            print("Writing updated " + name + " manifest", flush=True)
    print("Finished.", file=sys.stderr, flush=True)
    """
)


def write_manifest(directory: Path, name: str, version: str | None = None, **extra) -> Path:
    data = dict(extra)
    if version is not None:
        data["version"] = version
    path = directory / f"{name}.json"
    path.write_text(json.dumps(data, indent=4) + "\n", encoding="utf-8")
    return path


@pytest.fixture
def bucket(tmp_path: Path) -> Path:
    directory = tmp_path / "bucket"
    directory.mkdir()
    return directory


@pytest.fixture
def fake_checkver(tmp_path: Path):
    """Build a checkver command backed by a Python script.

    Call with the remote versions to report and the names whose update
    should leave the manifest untouched.
    """
    tool_dir = tmp_path / "tool"
    tool_dir.mkdir()
    script = tool_dir / "checkver.py"
    script.write_text(FAKE_CHECKVER, encoding="utf-8")

    def _make(remote: dict[str, str], noop: tuple[str, ...] = ()) -> list[str]:
        (tool_dir / "remote.json").write_text(json.dumps(remote), encoding="utf-8")
        (tool_dir / "noop.json").write_text(json.dumps(list(noop)), encoding="utf-8")
        return [sys.executable, str(script)]

    return _make


class FakeCheckver:
    """Stands in for Checkver without running a process."""

    def __init__(self, lines: list[str] | None = None, fail: tuple[str, ...] = ()):
        self.lines = lines or []
        self.fail = fail
        self.check_calls: list[list[str] | None] = []
        self.updated: list[str] = []

    def check(self, names, directory: Path) -> list[str]:
        self.check_calls.append(None if names is None else list(names))
        return list(self.lines)

    def update(self, name: str, directory: Path) -> subprocess.CompletedProcess:
        self.updated.append(name)
        if name in self.fail:
            return subprocess.CompletedProcess([name], 1, stdout=f"ERROR {name}: autoupdate failed\n")
        return subprocess.CompletedProcess([name], 0, stdout="")


class FakeGit:
    """Records git calls; diffs are looked up by manifest name."""

    def __init__(self, diffs: dict[str, str] | None = None, fail_on: str | None = None):
        self.diffs = diffs or {}
        self.fail_on = fail_on
        self.calls: list[tuple] = []

    def _maybe_fail(self, op: str):
        if self.fail_on == op:
            raise GitError(["git", op], 1, f"fatal: {op} failed")

    def diff(self, paths: list[Path]) -> str:
        self.calls.append(("diff", [Path(p).stem for p in paths]))
        self._maybe_fail("diff")
        return "".join(self.diffs.get(Path(p).stem, "") for p in paths)

    def add(self, paths: list[Path]):
        self.calls.append(("add", [Path(p).stem for p in paths]))
        self._maybe_fail("add")

    def commit(self, message: str, paths: list[Path]):
        self.calls.append(("commit", message, [Path(p).stem for p in paths]))
        self._maybe_fail("commit")

    def push(self, remote: str | None = None, branch: str | None = None):
        self.calls.append(("push", remote, branch))
        self._maybe_fail("push")

    def mutating_calls(self) -> list[tuple]:
        return [c for c in self.calls if c[0] != "diff"]


def version_diff(name: str, old: str, new: str) -> str:
    return (
        f"diff --git a/bucket/{name}.json b/bucket/{name}.json\n"
        f"--- a/bucket/{name}.json\n"
        f"+++ b/bucket/{name}.json\n"
        "@@ -1,3 +1,3 @@\n"
        " {\n"
        f'-    "version": "{old}"\n'
        f'+    "version": "{new}"\n'
        " }\n"
    )
