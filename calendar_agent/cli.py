"""CLI entry point for the calendar agent tools."""

import argparse
import asyncio
import logging
import sys

from pydantic import ValidationError

from .agent.prompts import get_system_prompt
from .config.config_loader import load_config
from .context.models import ToolContext
from .dates.errors import DateResolutionError
from .dates.formatting import format_instant
from .dates.resolver import RelativeDateInput, resolve_slot
from .dates.weekday import WEEKDAYS
from .tools.calendar_tools import describe_validation_error
from .tools.registry import ToolRegistry
from .utils.logging import setup_logging

logger = logging.getLogger(__name__)


def _add_relative_date_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--week-offset",
        type=int,
        required=True,
        help="0 = this week, 1 = next week, -1 = last week",
    )
    parser.add_argument(
        "--weekday",
        required=True,
        choices=WEEKDAYS,
        help="Target day of the week",
    )
    parser.add_argument("--time", required=True, help="Time in HH:mm format (24-hour)")
    parser.add_argument(
        "--duration",
        type=int,
        default=None,
        help="Duration in minutes (default: 60)",
    )
    parser.add_argument(
        "--timezone",
        default=None,
        help="IANA timezone (default: calendar.default_timezone from config)",
    )


def _relative_kwargs(args: argparse.Namespace) -> dict:
    """Map CLI arguments onto the tool parameter names."""
    kwargs = {
        "weekOffset": args.week_offset,
        "weekday": args.weekday,
        "time": args.time,
    }
    if args.duration is not None:
        kwargs["durationMinutes"] = args.duration
    if args.timezone:
        kwargs["timezone"] = args.timezone
    return kwargs


def create_parser() -> argparse.ArgumentParser:
    """Create argument parser."""
    parser = argparse.ArgumentParser(
        description="Schedule and query calendar events with relative dates",
        prog="calendar-agent",
    )

    parser.add_argument(
        "-c",
        "--config",
        default=None,
        help="Path to configuration file (default: config.yaml if present)",
    )

    parser.add_argument(
        "-v",
        "--verbose",
        action="count",
        default=0,
        help="Increase verbosity (-v, -vv, -vvv)",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    resolve_parser = subparsers.add_parser(
        "resolve", help="Resolve a relative date without touching the calendar"
    )
    _add_relative_date_arguments(resolve_parser)

    create_cmd = subparsers.add_parser("create", help="Create an event")
    create_cmd.add_argument("--title", required=True, help="Event title")
    create_cmd.add_argument("--description", default=None, help="Event description")
    create_cmd.add_argument("--location", default=None, help="Event location")
    _add_relative_date_arguments(create_cmd)

    subparsers.add_parser("list", help="List all events")

    slot_parser = subparsers.add_parser("slot", help="Check whether a time slot is free")
    _add_relative_date_arguments(slot_parser)

    subparsers.add_parser("prompt", help="Print the system prompt for the model")

    return parser


def run_resolve(args: argparse.Namespace, context: ToolContext) -> int:
    """Resolve and print a relative date."""
    try:
        relative = RelativeDateInput.model_validate(_relative_kwargs(args))
        slot = resolve_slot(relative, default_timezone=context.timezone)
    except ValidationError as e:
        print(f"Error: {describe_validation_error(e)}", file=sys.stderr)
        return 1
    except DateResolutionError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    print(f"Timezone: {slot.timezone}")
    print(f"Start:    {slot.start.isoformat()}  ({format_instant(slot.start, slot.timezone, context.locale)})")
    print(f"End:      {slot.end.isoformat()}  ({format_instant(slot.end, slot.timezone, context.locale)})")
    return 0


async def run_tool(args: argparse.Namespace, registry: ToolRegistry, context: ToolContext) -> int:
    """Run one of the calendar tools and print its result."""
    if args.command == "create":
        tool_name = "create_event"
        kwargs = _relative_kwargs(args)
        kwargs["title"] = args.title
        if args.description:
            kwargs["description"] = args.description
        if args.location:
            kwargs["location"] = args.location
    elif args.command == "slot":
        tool_name = "get_events_in_time_slot"
        kwargs = _relative_kwargs(args)
    else:
        tool_name = "list_events"
        kwargs = {}

    tool = registry.get_tool(tool_name)
    if tool is None:
        print("Error: CalDAV is not configured (add a 'caldav' section to the config)", file=sys.stderr)
        return 1

    result = await tool.execute(context, **kwargs)
    if not result.success:
        print(f"Error: {result.error}", file=sys.stderr)
        return 1

    print(result.message)
    return 0


def main():
    """Main entry point for CLI."""
    parser = create_parser()
    args = parser.parse_args()

    setup_logging(verbosity=args.verbose, log_dir=None)

    try:
        config = load_config(args.config)
    except FileNotFoundError:
        print(f"Error: Configuration file not found: {args.config}", file=sys.stderr)
        sys.exit(1)
    except Exception as e:
        print(f"Error loading configuration: {e}", file=sys.stderr)
        sys.exit(1)

    context = ToolContext(
        timezone=config.calendar.default_timezone,
        locale=config.calendar.locale,
    )

    if args.command == "prompt":
        print(get_system_prompt(timezone=context.timezone))
        sys.exit(0)

    if args.command == "resolve":
        sys.exit(run_resolve(args, context))

    registry = ToolRegistry()
    registry.initialize_tools(config)

    try:
        exit_code = asyncio.run(run_tool(args, registry, context))
        sys.exit(exit_code)
    except KeyboardInterrupt:
        print("\nCancelled by user")
        sys.exit(1)
    except Exception as e:
        logger.exception("Unexpected error")
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
