"""
Bash classifier - Sort shell commands into notification categories.

Prefix match against BashCategories.RULES; the first matching row wins.
Noise commands (ls, echo, pwd, ...) are suppressed.

Used by dispatchers/pre_tool.py
"""
from dataclasses import dataclass

from notch_hook.config import BashCategories, Thresholds


@dataclass(frozen=True)
class CommandClass:
    """Category, priority and icon for a shell command."""
    category: str
    priority: int
    icon: str
    notify: bool = True


def classify_command(command: str) -> CommandClass:
    """
    Classify a command by its prefix.

    Args:
        command: Raw command string as sent to the Bash tool

    Returns:
        CommandClass; ``notify`` is False for noise commands. Priority is
        already capped at Thresholds.MAX_COMMAND_PRIORITY.
    """
    for category, prefixes, priority, icon in BashCategories.RULES:
        if command.startswith(prefixes):
            if priority is None:
                return CommandClass(category=category, priority=0, icon=icon, notify=False)
            return CommandClass(
                category=category,
                priority=min(priority, Thresholds.MAX_COMMAND_PRIORITY),
                icon=icon,
            )

    category, priority, icon = BashCategories.DEFAULT
    return CommandClass(
        category=category,
        priority=min(priority, Thresholds.MAX_COMMAND_PRIORITY),
        icon=icon,
    )
