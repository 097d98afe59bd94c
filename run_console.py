#!/usr/bin/env python3
"""
One-shot console for the moderation controller.

Usage:
    python run_console.py queue --status pending
    python run_console.py bulk approve "spam wave" item-1 item-2

Environment:
    - MODCTL_API__BASE_URL
    - MODCTL_API__TOKEN

Settings load via ControllerSettings (reads .env by default). The resulting
controller state is printed as JSON and user notifications go to stderr; the exit code is 1 when the command failed.
"""

import argparse
import asyncio
import json
import sys
from dataclasses import asdict

from moderation_controller import ModerationController
from moderation_controller.config import ControllerSettings
from moderation_controller.models import QueueOptions
from moderation_controller.notifications.base import CollectingNotifier


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Inspect and act on the moderation queue.")
    commands = parser.add_subparsers(dest="command", required=True)

    queue = commands.add_parser("queue", help="Fetch the review queue")
    queue.add_argument("--status")
    queue.add_argument("--category")
    queue.add_argument("--priority")
    queue.add_argument("--page", type=int)
    queue.add_argument("--limit", type=int)

    stats = commands.add_parser("stats", help="Fetch moderation statistics")
    stats.add_argument("--start", help="ISO start date")
    stats.add_argument("--end", help="ISO end date")

    commands.add_parser("appeals", help="Fetch appeals")
    commands.add_parser("filters", help="Fetch filter rules")

    action = commands.add_parser("action", help="Apply an action to one queue item")
    action.add_argument("item_id")
    action.add_argument("action")
    action.add_argument("reason")
    action.add_argument("--notes", default="")

    bulk = commands.add_parser("bulk", help="Apply an action to many queue items")
    bulk.add_argument("action")
    bulk.add_argument("reason")
    bulk.add_argument("item_ids", nargs="+")
    return parser


async def run_command(controller: ModerationController, args: argparse.Namespace) -> None:
    if args.command == "queue":
        await controller.fetch_queue(
            QueueOptions(
                status=args.status,
                category=args.category,
                priority=args.priority,
                page=args.page,
                limit=args.limit,
            )
        )
    elif args.command == "stats":
        await controller.fetch_statistics(args.start, args.end)
    elif args.command == "appeals":
        await controller.fetch_appeals()
    elif args.command == "filters":
        await controller.fetch_filters()
    elif args.command == "action":
        await controller.take_action(args.item_id, args.action, args.reason, args.notes)
    elif args.command == "bulk":
        await controller.bulk_action(args.item_ids, args.action, args.reason)


async def _main(args: argparse.Namespace) -> int:
    settings = ControllerSettings()
    async with ModerationController.from_settings(settings) as controller:
        await run_command(controller, args)
        state = controller.state
        if isinstance(controller.notifier, CollectingNotifier):
            for notification in controller.notifier.drain():
                print(f"[{notification.level}] {notification.message}", file=sys.stderr)
    print(json.dumps(asdict(state), default=str, indent=2))
    return 1 if state.last_error else 0


if __name__ == "__main__":
    try:
        sys.exit(asyncio.run(_main(build_parser().parse_args())))
    except KeyboardInterrupt:
        print("\nInterrupted.")
