"""Command layer exports."""

from workitems.core.commands.commands import ConfirmDelete, WorkItemCommands

__all__ = ["ConfirmDelete", "WorkItemCommands"]
