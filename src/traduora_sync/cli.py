"""Command-line sync: reconcile the local file with Traduora and apply the result.

Loads the local translation file, the remote project and, when a baseline
revision is configured, the same file as committed at that revision. Prints
the resulting plan and applies every action unless ``--dry-run`` is given.
Use ``--serve`` to review and deselect actions in the browser instead.
"""

import argparse
import asyncio
import logging
import sys
from typing import assert_never

from traduora_sync.config import Settings
from traduora_sync.loaders.errors import SnapshotError
from traduora_sync.loaders.snapshots import load_snapshots
from traduora_sync.main import configure_logging
from traduora_sync.sync.applier import Applier, ApplyError
from traduora_sync.sync.records import Action, Added, DuplicateKeyError, Removed, Updated
from traduora_sync.sync.refine import reconcile
from traduora_sync.traduora.client import TraduoraClient

logger = logging.getLogger(__name__)


def format_action(action: Action) -> str:
    match action:
        case Added(key=key, text=text):
            return f"+ {key} ==> {text}"
        case Updated(key=key, text=text):
            return f"~ {key} ==> {text}"
        case Removed(key=key):
            return f"- {key}"
        case _:
            assert_never(action)


async def sync(settings: Settings, *, baseline_revision: str | None, dry_run: bool) -> int:
    client = TraduoraClient(
        settings.traduora_base_url, settings.traduora_user, settings.traduora_password
    )
    try:
        try:
            snapshots = await load_snapshots(
                settings, client, baseline_revision=baseline_revision
            )
            actions = reconcile(snapshots.local, snapshots.remote, snapshots.baseline)
        except (SnapshotError, DuplicateKeyError) as e:
            logger.error("%s", e)
            return 1

        if not actions:
            print("Everything is in sync.")
            return 0

        for action in actions:
            print(format_action(action))

        if dry_run:
            logger.info("Dry run, %d actions not applied", len(actions))
            return 0

        applier = Applier(client, settings.traduora_project_id, settings.traduora_locale)
        report = await applier.apply(actions)
        try:
            report.raise_for_failures()
        except ApplyError as e:
            print(e, file=sys.stderr)
            return 2
        return 0
    finally:
        await client.close()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="traduora-sync",
        description="Push local translation changes to a Traduora project.",
    )
    parser.add_argument("--dry-run", action="store_true",
                        help="Print the plan without applying it")
    baseline = parser.add_mutually_exclusive_group()
    baseline.add_argument("--baseline", metavar="REV",
                          help="Git revision of the last synchronized translation file")
    baseline.add_argument("--no-baseline", action="store_true",
                          help="Skip three-way refinement even if a baseline is configured")
    parser.add_argument("--serve", action="store_true",
                        help="Start the review server instead of applying directly")
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    settings = Settings()

    if args.serve:
        import uvicorn

        uvicorn.run("traduora_sync.main:app", host=settings.host, port=settings.port)
        return 0

    configure_logging(settings.log_level)

    if args.no_baseline:
        revision = None
    else:
        revision = args.baseline or settings.baseline_revision

    return asyncio.run(sync(settings, baseline_revision=revision, dry_run=args.dry_run))


if __name__ == "__main__":
    sys.exit(main())
