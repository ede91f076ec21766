"""
Command-line entry points for update-outdated.py and check-outdated.py.

Exit codes:
    0 - Run finished (up to date, declined, nothing changed, or published)
    1 - Missing manifest directory or checkver, bad config, or publish failed
"""

import argparse
import sys
from pathlib import Path

from .config import load_settings
from .errors import BucketUpdateError
from .git import Git
from .oracle import Checkver
from .output import print_error
from .pipeline import UpdateRun, ask_yes_no


def build_parser(description: str, check_only: bool = False) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description=description)
    parser.add_argument("dir", nargs="?", type=Path, default=None,
                        help="Manifest directory (default: bucket)")
    parser.add_argument("--config", type=Path, default=None,
                        help="YAML config file (default: .bucket-update.yaml if present)")
    parser.add_argument("--only", action="append", metavar="NAME", default=None,
                        help="Only check this manifest (repeatable)")
    if not check_only:
        parser.add_argument("--dry-run", action="store_true",
                            help="Report outdated manifests without updating anything")
        parser.add_argument("--yes", dest="assume_yes", action="store_const", const=True, default=None,
                            help="Answer yes to both prompts")
        parser.add_argument("--no-push", dest="push", action="store_const", const=False, default=None,
                            help="Commit the updated manifests but do not push")
    return parser


def run(args: argparse.Namespace, check_only: bool) -> int:
    overrides = {
        "manifest_dir": args.dir,
        "assume_yes": getattr(args, "assume_yes", None),
        "push": getattr(args, "push", None),
    }

    try:
        settings = load_settings(args.config, overrides)
        oracle = Checkver(settings.checkver)
        git = Git(settings.git, cwd=settings.manifest_dir)
        update_run = UpdateRun(
            settings,
            oracle,
            git,
            confirm=ask_yes_no,
            only=args.only,
            check_only=check_only or getattr(args, "dry_run", False),
        )
        update_run.run()
    except BucketUpdateError as e:
        print_error(str(e))
        return 1
    except KeyboardInterrupt:
        print()
        return 130

    return 0


def main_update(argv: list[str] | None = None) -> int:
    parser = build_parser("Update outdated bucket manifests with checkver and publish them")
    return run(parser.parse_args(argv), check_only=False)


def main_check(argv: list[str] | None = None) -> int:
    parser = build_parser("Report bucket manifests whose version is behind upstream", check_only=True)
    return run(parser.parse_args(argv), check_only=True)


def update_entry():
    sys.exit(main_update())


def check_entry():
    sys.exit(main_check())
