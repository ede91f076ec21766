from __future__ import annotations

from pathlib import Path

import pytest

from bucketlib.config import Settings
from bucketlib.errors import EnumerationError, PublishError
from bucketlib.pipeline import State, UpdateRun, ask_yes_no

from conftest import FakeCheckver, FakeGit, version_diff, write_manifest


class Answers:
    """Scripted replies to the two prompts."""

    def __init__(self, *replies: bool):
        self.replies = list(replies)
        self.prompts: list[str] = []

    def __call__(self, prompt: str) -> bool:
        self.prompts.append(prompt)
        return self.replies.pop(0)


def _run(bucket: Path, oracle: FakeCheckver, git: FakeGit, confirm, **kwargs) -> UpdateRun:
    settings = Settings(manifest_dir=bucket, checkver=["checkver"], **kwargs.pop("settings", {}))
    return UpdateRun(settings, oracle, git, confirm=confirm, **kwargs)


def test_nothing_outdated_ends_without_prompting(bucket: Path) -> None:
    write_manifest(bucket, "foo", "1.0")
    confirm = Answers()
    run = _run(bucket, FakeCheckver(["foo: 1.0"]), FakeGit(), confirm)

    assert run.run() is State.DONE
    assert confirm.prompts == []
    assert run.outdated == []


def test_declining_update_touches_nothing(bucket: Path) -> None:
    write_manifest(bucket, "ani", "5.1.0")
    oracle = FakeCheckver(["ani: 5.2.0 (scoop version is 5.1.0)"])
    git = FakeGit()
    run = _run(bucket, oracle, git, Answers(False))

    assert run.run() is State.DONE
    assert oracle.updated == []
    assert git.calls == []


def test_declining_publish_leaves_changes_local(bucket: Path) -> None:
    write_manifest(bucket, "ani", "5.1.0")
    oracle = FakeCheckver(["ani: 5.2.0"])
    git = FakeGit({"ani": version_diff("ani", "5.1.0", "5.2.0")})
    run = _run(bucket, oracle, git, Answers(True, False))

    assert run.run() is State.DONE_LOCAL_ONLY
    assert oracle.updated == ["ani"]
    assert git.mutating_calls() == []


def test_no_op_update_is_excluded_and_ends_run(bucket: Path) -> None:
    write_manifest(bucket, "ani", "5.1.0")
    git = FakeGit()
    confirm = Answers(True)
    run = _run(bucket, FakeCheckver(["ani: 5.2.0"]), git, confirm)

    assert run.run() is State.DONE
    assert len(confirm.prompts) == 1
    assert git.mutating_calls() == []


def test_only_materially_changed_names_are_committed(bucket: Path) -> None:
    write_manifest(bucket, "a", "1.0")
    write_manifest(bucket, "b", "1.0")
    write_manifest(bucket, "c", "3.0")
    oracle = FakeCheckver(["a: 1.1", "b: 1.1", "c: 3.0", "Done."])
    git = FakeGit({"a": version_diff("a", "1.0", "1.1")})
    run = _run(bucket, oracle, git, Answers(True, True))

    assert run.run() is State.DONE
    published = {c[2][0] for c in git.calls if c[0] == "commit"}
    attempted = set(oracle.updated)
    outdated = {e.name for e in run.outdated}
    assert published <= attempted <= outdated
    assert git.mutating_calls() == [
        ("add", ["a"]),
        ("commit", "a", ["a"]),
        ("push", None, None),
    ]


def test_assume_yes_skips_prompts(bucket: Path, capsys) -> None:
    write_manifest(bucket, "a", "1.0")
    git = FakeGit({"a": version_diff("a", "1.0", "1.1")})
    confirm = Answers()
    run = _run(bucket, FakeCheckver(["a: 1.1"]), git, confirm,
               settings={"assume_yes": True, "push": False, "remote": "origin", "branch": "main"})

    assert run.run() is State.DONE
    assert confirm.prompts == []
    assert [c[0] for c in git.mutating_calls()] == ["add", "commit"]
    assert "(--yes)" in capsys.readouterr().out


def test_check_only_stops_after_report(bucket: Path, capsys) -> None:
    write_manifest(bucket, "ani", "5.1.0")
    write_manifest(bucket, "foo", "1.0")
    oracle = FakeCheckver(["ani: 5.2.0"])
    run = _run(bucket, oracle, FakeGit(), Answers(), check_only=True)

    assert run.run() is State.DONE
    assert oracle.updated == []
    out = capsys.readouterr().out
    assert "ani: 5.1.0 → " in out
    assert "foo:" not in out
    assert "1 manifests had no version reported" in out


def test_only_restricts_manifests_and_checks_by_name(bucket: Path, capsys) -> None:
    write_manifest(bucket, "a", "1.0")
    write_manifest(bucket, "b", "1.0")
    oracle = FakeCheckver(["a: 1.0"])
    run = _run(bucket, oracle, FakeGit(), Answers(), only=["a", "missing"])

    assert run.run() is State.DONE
    assert oracle.check_calls == [["a"]]
    assert [r.name for r in run.records] == ["a"]
    assert "No manifest named 'missing'" in capsys.readouterr().out


def test_wildcard_check_when_not_restricted(bucket: Path) -> None:
    write_manifest(bucket, "a", "1.0")
    oracle = FakeCheckver([])

    _run(bucket, oracle, FakeGit(), Answers()).run()

    assert oracle.check_calls == [None]


def test_empty_bucket_skips_checkver(bucket: Path) -> None:
    oracle = FakeCheckver()

    assert _run(bucket, oracle, FakeGit(), Answers()).run() is State.DONE
    assert oracle.check_calls == []


def test_missing_directory_is_fatal(tmp_path: Path) -> None:
    with pytest.raises(EnumerationError):
        _run(tmp_path / "nope", FakeCheckver(), FakeGit(), Answers()).run()


def test_publish_failure_propagates_and_keeps_files(bucket: Path) -> None:
    path = write_manifest(bucket, "a", "1.0")
    git = FakeGit({"a": version_diff("a", "1.0", "1.1")}, fail_on="push")
    run = _run(bucket, FakeCheckver(["a: 1.1"]), git, Answers(True, True))

    with pytest.raises(PublishError):
        run.run()
    assert path.exists()
    assert run.state is State.PUBLISH


@pytest.mark.parametrize(
    ("reply", "expected"),
    [
        ("y", True),
        ("y\n", True),
        ("  y ", True),
        ("Y", False),
        ("yes", False),
        ("n", False),
        ("", False),
    ],
)
def test_ask_yes_no_accepts_only_literal_y(reply: str, expected: bool) -> None:
    assert ask_yes_no("Continue?", input_fn=lambda _: reply) is expected


def test_ask_yes_no_treats_closed_stdin_as_no() -> None:
    def _eof(_prompt: str) -> str:
        raise EOFError

    assert ask_yes_no("Continue?", input_fn=_eof) is False
