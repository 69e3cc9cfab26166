"""Command history with a browsing cursor."""

__all__ = ["HistoryLog"]


class HistoryLog:
    """Ordered list of submitted commands.

    The cursor `offset` counts back from the newest entry while browsing,
    so offset 0 is the most recent command. An offset of -1 means the user
    is not browsing.

    Attributes:
        entries: (list[str]) Commands, oldest first
        offset: (int) Browsing cursor, or -1
    """

    def __init__(self):
        self.entries = []
        self.offset = -1

    def __len__(self):
        return len(self.entries)

    def record(self, command):
        """Append a command unless it repeats the newest entry.

        Always stops browsing.

        Returns:
            (bool) True if a new entry was appended
        """
        self.offset = -1
        if self.entries and self.entries[-1] == command:
            return False
        self.entries.append(command)
        return True

    def older(self):
        """Move the cursor one entry back in time and return that entry."""
        return self._move(1)

    def newer(self):
        """Move the cursor one entry forward in time and return that entry."""
        return self._move(-1)

    @property
    def selected(self):
        """(str | None) Entry under the cursor, None when not browsing."""
        if self.offset < 0 or not self.entries:
            return None
        return self.entries[len(self.entries) - self.offset - 1]

    def _move(self, step):
        if not self.entries:
            return None
        # Saturate at both ends, never wrap around
        self.offset = max(0, min(self.offset + step, len(self.entries) - 1))
        return self.selected
