"""
Command-line interface for HotRefactor

Lists and applies the refactorings available at a position in a C# file,
with rich terminal output or JSON for tooling.
"""

import argparse
import json
import logging
import sys
from typing import Any, List, Optional, TextIO

from hotrefactor import __version__
from hotrefactor.api import HotRefactor
from hotrefactor.cli.commands import cmd_actions, cmd_apply, cmd_config
from hotrefactor.cli.rich_output import set_rich_enabled
from hotrefactor.config import load_config
from hotrefactor.errors import HotRefactorError


def _is_machine_readable(args: Any) -> bool:
    return bool(getattr(args, "machine_readable", False))


def _json_stdout(args: Any) -> TextIO:
    """
    When --machine-readable is enabled, main() redirects sys.stdout -> sys.stderr
    to prevent accidental non-JSON output. This function returns the original stdout.
    """
    return getattr(args, "_json_stdout", sys.__stdout__)


def _print_json_to_stdout(args: Any, payload: Any) -> None:
    """
    Always print JSON to the original stdout in machine-readable mode.
    """
    s = json.dumps(payload, indent=2, ensure_ascii=False, default=str)
    print(s, file=_json_stdout(args))


def setup_logging(verbose: bool = False) -> None:
    """Setup logging configuration."""
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        stream=sys.stderr,
    )


def _add_position_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("file", help="C# source file")
    parser.add_argument(
        "--position", "-p", type=int, help="Cursor position as a 0-based character offset"
    )
    parser.add_argument("--line", "-l", type=int, help="Cursor line (1-based)")
    parser.add_argument(
        "--column", type=int, default=1, help="Cursor column (1-based, default: 1)"
    )


def create_parser() -> argparse.ArgumentParser:
    """Create the main argument parser."""
    parser = argparse.ArgumentParser(
        prog="hotrefactor",
        description="HotRefactor - cursor-triggered refactorings for C# sources",
        epilog='Use "hotrefactor <command> --help" for detailed command help.',
    )

    parser.add_argument("--config", "-c", type=str, help="Path to configuration file")

    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Enable verbose output and debug logging",
    )

    parser.add_argument(
        "--no-rich",
        action="store_true",
        help="Disable rich terminal output (use plain text)",
    )

    parser.add_argument(
        "--machine-readable",
        action="store_true",
        help="Output in machine-readable format (JSON)",
    )

    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # Actions command
    actions_parser = subparsers.add_parser(
        "actions", help="List the refactorings available at a position"
    )
    _add_position_arguments(actions_parser)

    # Apply command
    apply_parser = subparsers.add_parser("apply", help="Apply a refactoring at a position")
    _add_position_arguments(apply_parser)
    apply_parser.add_argument(
        "--title", "-t", required=True, help='Refactoring title, e.g. "To Internal"'
    )
    output_group = apply_parser.add_mutually_exclusive_group()
    output_group.add_argument(
        "--write", "-w", action="store_true", help="Write the result back to the file"
    )
    output_group.add_argument(
        "--diff", action="store_true", help="Show a unified diff instead of the new source"
    )

    # Config command
    config_parser = subparsers.add_parser("config", help="Configuration management")
    config_subparsers = config_parser.add_subparsers(
        dest="config_action", help="Configuration actions"
    )
    config_subparsers.add_parser("show", help="Show current configuration")

    init_parser = config_subparsers.add_parser("init", help="Initialize configuration file")
    init_parser.add_argument(
        "--path",
        default="hotrefactor.json",
        help="Path for configuration file (default: hotrefactor.json)",
    )
    init_parser.add_argument(
        "--format",
        choices=["json", "yaml"],
        default="json",
        help="Configuration file format (default: json)",
    )

    validate_parser = config_subparsers.add_parser("validate", help="Validate configuration file")
    validate_parser.add_argument("config_file", help="Configuration file to validate")

    return parser


def main(argv: Optional[List[str]] = None) -> None:
    """Main CLI entry point."""
    parser = create_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return

    if args.command == "config" and not args.config_action:
        args.config_action = "show"

    # In machine-readable mode stdout carries only JSON; everything else goes to stderr.
    if _is_machine_readable(args):
        args._json_stdout = sys.stdout
        sys.stdout = sys.stderr

    setup_logging(getattr(args, "verbose", False))

    use_rich = not getattr(args, "no_rich", False) and not _is_machine_readable(args)
    set_rich_enabled(use_rich)

    try:
        if args.command == "config":
            cmd_config(args)
            return

        config = load_config(getattr(args, "config", None))
        hotrefactor = HotRefactor(config)

        if args.command == "actions":
            cmd_actions(args, hotrefactor)
        elif args.command == "apply":
            cmd_apply(args, hotrefactor)

    except KeyboardInterrupt:
        if _is_machine_readable(args):
            _print_json_to_stdout(args, {"success": False, "error": "cancelled_by_user"})
        print("\nOperation cancelled by user", file=sys.stderr)
        sys.exit(1)
    except (HotRefactorError, OSError, ValueError) as e:
        if _is_machine_readable(args):
            _print_json_to_stdout(
                args,
                {"success": False, "error": str(e), "command": getattr(args, "command", None)},
            )
        print(f"Error: {e}", file=sys.stderr)
        if getattr(args, "verbose", False):
            import traceback

            traceback.print_exc()
        sys.exit(1)
    finally:
        if _is_machine_readable(args):
            sys.stdout = args._json_stdout


if __name__ == "__main__":
    main()
