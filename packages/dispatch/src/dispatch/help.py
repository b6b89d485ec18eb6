"""
Help Output

Text shown when a command is invoked with ``help``/``?`` or has no
executor bound. Output uses color codes; the handler converts them.
"""

import math
from typing import List, Tuple

from .node import CommandNode


def help_line(node: CommandNode) -> str:
    """One-line usage for a single command."""
    line = "{command/" + " ".join(node.command_path())
    if node.syntax:
        line += " {syntax" + node.syntax
    if node.description:
        line += " {description- " + node.description
    return line + "{x"


def page_bounds(total: int, page: int, page_size: int) -> Tuple[int, int]:
    """Clamp a 1-based page number. Returns (page, page_count)."""
    pages = max(1, math.ceil(total / max(1, page_size)))
    return min(max(page, 1), pages), pages


def subcommand_help(node: CommandNode, page: int, page_size: int, header: str) -> List[str]:
    """
    Paginated listing of a command's subcommands.

    ``header`` may reference $command, $page and $pages.
    """
    children = node.unique_subs()
    page, pages = page_bounds(len(children), page, page_size)
    start = (page - 1) * page_size

    lines = [
        header.replace("$command", "/" + " ".join(node.command_path()))
        .replace("$pages", str(pages))
        .replace("$page", str(page))
    ]
    lines.extend(help_line(child) for child in children[start:start + page_size])
    return lines


def parse_page(arguments: List[str]) -> int:
    """Page number from the argument after ``help``; 0 when absent or invalid."""
    if len(arguments) > 1:
        try:
            return int(arguments[1])
        except ValueError:
            pass
    return 0
