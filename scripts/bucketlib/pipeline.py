"""
The update run as a state machine.

    SCAN -> CHECK -> CONFIRM_UPDATE -> UPDATE -> DIFF_COLLECT
         -> CONFIRM_PUBLISH -> PUBLISH -> DONE

Any step with nothing left to do, or a declined prompt, moves straight to a
terminal state. There is no retry and no re-check after publishing.
"""

from enum import Enum
from pathlib import Path
from typing import Callable

from .config import Settings
from .git import Git
from .manifests import ManifestRecord, load_manifests
from .oracle import Checkver, fetch_remote_versions
from .output import print_change, print_dim, print_header, print_ok, print_warning
from .publish import PublishOutcome, publish
from .reconcile import ReconciledEntry, outdated_entries, reconcile
from .updater import UpdateResult, apply_updates, changed_results, print_update_summary

AFFIRMATIVE = "y"


class State(Enum):
    SCAN = "scan"
    CHECK = "check"
    CONFIRM_UPDATE = "confirm-update"
    UPDATE = "update"
    DIFF_COLLECT = "diff-collect"
    CONFIRM_PUBLISH = "confirm-publish"
    PUBLISH = "publish"
    DONE = "done"
    DONE_LOCAL_ONLY = "done-local-only"

    @property
    def terminal(self) -> bool:
        return self in (State.DONE, State.DONE_LOCAL_ONLY)


def ask_yes_no(prompt: str, input_fn: Callable[[str], str] = input) -> bool:
    """Block for one answer; only the literal affirmative token says yes."""
    try:
        answer = input_fn(f"{prompt} [{AFFIRMATIVE}/N] ")
    except EOFError:
        return False
    return answer.strip() == AFFIRMATIVE


class UpdateRun:
    def __init__(self, settings: Settings, oracle: Checkver, git: Git,
                 confirm: Callable[[str], bool] = ask_yes_no,
                 only: list[str] | None = None, check_only: bool = False):
        self.settings = settings
        self.directory = Path(settings.manifest_dir)
        self.oracle = oracle
        self.git = git
        self.confirm = confirm
        self.only = only
        self.check_only = check_only

        self.state = State.SCAN
        self.records: list[ManifestRecord] = []
        self.entries: list[ReconciledEntry] = []
        self.outdated: list[ReconciledEntry] = []
        self.results: list[UpdateResult] = []
        self.outcome: PublishOutcome | None = None

        self._handlers = {
            State.SCAN: self.scan,
            State.CHECK: self.check,
            State.CONFIRM_UPDATE: self.confirm_update,
            State.UPDATE: self.update,
            State.DIFF_COLLECT: self.diff_collect,
            State.CONFIRM_PUBLISH: self.confirm_publish,
            State.PUBLISH: self.publish,
        }

    def _ask(self, prompt: str) -> bool:
        if self.settings.assume_yes:
            print(f"{prompt} [{AFFIRMATIVE}/N] {AFFIRMATIVE} (--yes)")
            return True
        return self.confirm(prompt)

    def scan(self) -> State:
        print_header("SCANNING MANIFESTS")
        records = load_manifests(self.directory)
        if self.only is not None:
            wanted = set(self.only)
            for name in sorted(wanted - {r.name for r in records}):
                print_warning(f"No manifest named '{name}' in {self.directory}")
            records = [r for r in records if r.name in wanted]
        self.records = records
        print(f"Found {len(records)} manifests in {self.directory}")
        return State.CHECK

    def check(self) -> State:
        print_header("CHECKING VERSIONS")
        if not self.records:
            print_ok("No manifests to check")
            return State.DONE

        names = None if self.only is None else [r.name for r in self.records]
        remote_index = fetch_remote_versions(self.oracle, self.directory, names)
        self.entries = reconcile(self.records, remote_index)
        self.outdated = outdated_entries(self.entries)

        no_data = sum(1 for e in self.entries if e.remote_version is None)
        if no_data:
            print_dim(f"({no_data} manifests had no version reported by checkver)")

        if not self.outdated:
            print_ok("All manifests are up to date")
            return State.DONE

        print(f"{len(self.outdated)} outdated:")
        for entry in self.outdated:
            print_change(entry.name, entry.local_version or "(none)", entry.remote_version)

        if self.check_only:
            return State.DONE
        return State.CONFIRM_UPDATE

    def confirm_update(self) -> State:
        print()
        if self._ask(f"Update {len(self.outdated)} manifest(s)?"):
            return State.UPDATE
        return State.DONE

    def update(self) -> State:
        print_header("UPDATING MANIFESTS")
        self.results = apply_updates(self.outdated, self.oracle, self.git, self.directory)
        return State.DIFF_COLLECT

    def diff_collect(self) -> State:
        print_header("CHANGES")
        print_update_summary(self.results)
        if not changed_results(self.results):
            print_ok("Nothing changed; nothing to publish")
            return State.DONE
        return State.CONFIRM_PUBLISH

    def confirm_publish(self) -> State:
        changed = changed_results(self.results)
        print()
        action = "Commit and push" if self.settings.push else "Commit"
        if self._ask(f"{action} {len(changed)} updated manifest(s)?"):
            return State.PUBLISH
        print_dim("Changes left in the working tree")
        return State.DONE_LOCAL_ONLY

    def publish(self) -> State:
        print_header("PUBLISHING")
        self.outcome = publish(
            self.results,
            self.git,
            separator=self.settings.commit_separator,
            remote=self.settings.remote,
            branch=self.settings.branch,
            push=self.settings.push,
        )
        print_ok(f"Manifests {self.outcome.value}")
        return State.DONE

    def run(self) -> State:
        """Step until a terminal state. Fatal errors propagate."""
        while not self.state.terminal:
            self.state = self._handlers[self.state]()
        return self.state
