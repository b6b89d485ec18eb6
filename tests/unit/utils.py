"""
Test utilities for the command dispatch tests.

Provides a controllable clock, a recording executor and the sample
command trees shared across test modules.
"""

from typing import List, Tuple

from dispatch import (
    CommandContext,
    CommandExecution,
    CommandNode,
    CommandParameter,
)


class FakeClock:
    """Manually advanced clock for cooldown tests."""

    def __init__(self, now: float = 1000.0):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class RecordingExecution(CommandExecution):
    """Executor that records its calls and returns a fixed result."""

    def __init__(self, result: bool = True, allowed: bool = True):
        super().__init__()
        self.result = result
        self.allowed = allowed
        self.calls: List[Tuple[object, CommandContext, List[str]]] = []

    def can_execute(self, node, sender) -> bool:
        return self.allowed

    def execute(self, sender, context, arguments) -> bool:
        self.calls.append((sender, context, list(arguments)))
        return self.result

    @property
    def called(self) -> bool:
        return bool(self.calls)


def build_tp_tree() -> CommandNode:
    """/tp (alias teleport) with a /tp here <amount> subcommand."""
    root = CommandNode(
        name="tp",
        aliases=["teleport"],
        description="Teleport somewhere",
        syntax="<x>",
        executor="tp",
    )
    root.add_sub(
        CommandNode(
            name="here",
            syntax="<amount>",
            executor="tp_here",
            required_arguments=1,
            parameters=[CommandParameter("amount", "integer")],
        )
    )
    return root


def build_tree_with_subs(count: int) -> CommandNode:
    """/admin with ``count`` subcommands named sub0, sub1, ..."""
    root = CommandNode(name="admin")
    for i in range(count):
        root.add_sub(CommandNode(name=f"sub{i}", executor=f"admin_sub{i}"))
    return root
