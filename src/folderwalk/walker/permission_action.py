"""Permission action enum for handling unreadable entries during directory traversal."""

from enum import Enum


class PermissionAction(str, Enum):
    """Action to take when a directory cannot be listed or an entry cannot be inspected.

    Values:
        IGNORE: Skip the unreadable item silently
        WARN: Skip the unreadable item and print a warning to stderr (default behavior)
        RAISE: Raise EntryUnreadableError immediately, aborting the walk
    """

    IGNORE = "ignore"
    WARN = "warn"
    RAISE = "raise"
