"""Error taxonomy shared by the CLI, the storage layer and the editor.

Nothing raised from here is meant to be fatal inside the editor:

- OutOfRange: an index reached the item store unclamped (a bug, not user input)
- EmptyText: blank text offered to the item store
- InvalidLayoutWidth: wrap width below one column
- StoreUnreadable / StoreUnwritable: JSON file I/O failed
- NotInRepository: no enclosing git repository (CLI only)
"""

from __future__ import annotations

from pathlib import Path


class BacklogError(Exception):
    """Base class for every error this package raises on purpose."""


class OutOfRange(BacklogError, IndexError):
    def __init__(self, index: int, length: int):
        super().__init__(f"Index {index} out of range for backlog of {length} item(s)")
        self.index = index
        self.length = length


class EmptyText(BacklogError, ValueError):
    def __init__(self):
        super().__init__("Item text must not be blank")


class InvalidLayoutWidth(BacklogError, ValueError):
    def __init__(self, width: int):
        super().__init__(f"Layout width must be at least 1 column (got {width})")
        self.width = width


class ConfigError(BacklogError, RuntimeError):
    pass


class StoreError(BacklogError, RuntimeError):
    def __init__(self, path: Path, reason: str):
        super().__init__(f"{path}: {reason}")
        self.path = path
        self.reason = reason


class StoreUnreadable(StoreError):
    pass


class StoreUnwritable(StoreError):
    pass


class NotInRepository(BacklogError, RuntimeError):
    def __init__(self, start: Path):
        super().__init__("Not in a git repository")
        self.start = start
