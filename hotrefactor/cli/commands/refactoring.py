"""
Refactoring commands for HotRefactor CLI.

This module contains command handlers for:
- Listing the refactorings offered at a position
- Applying one of them to a file
"""

import asyncio
import sys
from typing import List, Optional, Tuple

from hotrefactor.api import HotRefactor
from hotrefactor.cli.rich_output import get_rich_output
from hotrefactor.document import Document
from hotrefactor.refactoring.actions import RefactoringAction
from hotrefactor.syntax import TextSpan


def read_source(path: str) -> str:
    """Read a source file keeping its line terminators as they are."""
    with open(path, "r", encoding="utf-8", newline="") as f:
        return f.read()


def write_source(path: str, text: str) -> None:
    with open(path, "w", encoding="utf-8", newline="") as f:
        f.write(text)


def resolve_position(text: str, position: Optional[int], line: Optional[int], column: Optional[int]) -> int:
    """Turn ``--position`` or 1-based ``--line``/``--column`` into a character offset."""
    if position is not None:
        if not 0 <= position <= len(text):
            raise ValueError(f"Position {position} is outside the file (0..{len(text)})")
        return position

    if line is None:
        raise ValueError("Either --position or --line is required")

    lines = text.splitlines(keepends=True) or [""]
    if not 1 <= line <= len(lines):
        raise ValueError(f"Line {line} is outside the file (1..{len(lines)})")
    column = column or 1
    content = lines[line - 1].rstrip("\r\n")
    if not 1 <= column <= len(content) + 1:
        raise ValueError(f"Column {column} is outside line {line} (1..{len(content) + 1})")
    return sum(len(item) for item in lines[: line - 1]) + column - 1


async def _collect(
    hotrefactor: HotRefactor, document: Document, span: TextSpan
) -> Tuple[List[RefactoringAction], Optional[str]]:
    tree = await hotrefactor.host.get_syntax_tree(document)
    document = document.with_tree(tree)
    actions = await hotrefactor.compute_actions(document, span)
    target = await hotrefactor.describe_target(document, span)
    return actions, target


def cmd_actions(args, hotrefactor: HotRefactor) -> None:
    """Handle actions command."""
    from hotrefactor.cli_entry import _is_machine_readable, _print_json_to_stdout

    text = read_source(args.file)
    position = resolve_position(text, args.position, args.line, args.column)
    document = hotrefactor.open_document(text, args.file)

    actions, target = asyncio.run(_collect(hotrefactor, document, TextSpan(position)))

    if _is_machine_readable(args):
        _print_json_to_stdout(
            args,
            {
                "success": True,
                "file": args.file,
                "position": position,
                "target": target,
                "actions": [
                    {"title": action.title, "provider": action.provider.name}
                    for action in actions
                ],
            },
        )
        return

    output = get_rich_output()
    subtitle = f"{args.file} @ {position}" + (f" ({target})" if target else "")
    output.print_header("Available refactorings", subtitle)
    if not actions:
        output.print_warning("No refactorings available at this position")
        return
    output.print_actions(
        [action.title for action in actions],
        [action.provider.name for action in actions],
    )


def cmd_apply(args, hotrefactor: HotRefactor) -> None:
    """Handle apply command."""
    from hotrefactor.cli_entry import _is_machine_readable, _print_json_to_stdout

    text = read_source(args.file)
    position = resolve_position(text, args.position, args.line, args.column)
    document = hotrefactor.open_document(text, args.file)

    result = asyncio.run(hotrefactor.apply_action(document, TextSpan(position), args.title))

    if args.write and result.changed:
        write_source(args.file, result.new_text)

    if _is_machine_readable(args):
        payload = result.to_dict()
        payload["written"] = bool(args.write and result.changed)
        _print_json_to_stdout(args, payload)
        return

    output = get_rich_output()
    if args.diff:
        output.print_diff(result.diff(args.file))
    elif not args.write:
        if output.use_rich:
            output.print_code(result.new_text)
        else:
            sys.stdout.write(result.new_text)

    if args.write:
        if result.changed:
            output.print_success(f"Applied '{result.title}' to {args.file}")
        else:
            output.print_info(f"'{result.title}' left {args.file} unchanged")
