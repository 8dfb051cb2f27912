"""Item store: an ordered list of todo items with no I/O.

Items have no id of their own; an item is its position in the list.
Callers clamp their cursor before touching the store, so an index that
is out of range here raises OutOfRange instead of being silently fixed.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Iterator, Optional

from backlog.errors import EmptyText, OutOfRange


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


# datetime.fromisoformat only takes 3 or 6 fractional digits before 3.11.
_FRACTION = re.compile(r"\.(\d+)")


def _six_digits(match: re.Match) -> str:
    return "." + match.group(1).ljust(6, "0")[:6]


def parse_timestamp(raw: str) -> datetime:
    """Parse an ISO-8601 UTC timestamp such as ``2024-05-01T10:00:00.123456789Z``."""
    if not isinstance(raw, str):
        raise TypeError(f"timestamp must be a string, not {type(raw).__name__}")
    text = _FRACTION.sub(_six_digits, raw.strip())
    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"
    parsed = datetime.fromisoformat(text)
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def format_timestamp(value: datetime) -> str:
    return value.astimezone(timezone.utc).isoformat().replace("+00:00", "Z")


def _require_text(text: str) -> str:
    if not text or not text.strip():
        raise EmptyText()
    return text


@dataclass
class Item:
    text: str
    done: bool = False
    created_at: datetime = field(default_factory=utc_now)

    def to_dict(self) -> dict[str, Any]:
        return {
            "description": self.text,
            "created_at": format_timestamp(self.created_at),
            "done": self.done,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Item":
        created = data.get("created_at")
        return cls(
            text=str(data["description"]),
            done=bool(data.get("done", False)),
            created_at=parse_timestamp(created) if created else utc_now(),
        )


class Backlog:
    """Ordered todo items. Insertion order is display and priority order."""

    def __init__(self, items: Optional[list[Item]] = None) -> None:
        self._items: list[Item] = list(items or [])

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[Item]:
        return iter(self._items)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Backlog):
            return NotImplemented
        return self._items == other._items

    def __repr__(self) -> str:
        return f"Backlog({self.texts()!r})"

    def _check(self, index: int) -> None:
        if index < 0 or index >= len(self._items):
            raise OutOfRange(index, len(self._items))

    def get(self, index: int) -> Item:
        self._check(index)
        return self._items[index]

    def texts(self) -> list[str]:
        return [item.text for item in self._items]

    def insert_at(self, index: int, text: str) -> Item:
        """Insert a new pending item; ``index == len()`` appends."""
        if index < 0 or index > len(self._items):
            raise OutOfRange(index, len(self._items))
        item = Item(text=_require_text(text))
        self._items.insert(index, item)
        return item

    def append(self, text: str) -> int:
        """Append a new pending item and return its index."""
        self.insert_at(len(self._items), text)
        return len(self._items) - 1

    def remove_at(self, index: int) -> Item:
        self._check(index)
        return self._items.pop(index)

    def set_done(self, index: int, done: bool) -> None:
        self._check(index)
        self._items[index].done = done

    def toggle_done(self, index: int) -> bool:
        self._check(index)
        item = self._items[index]
        item.done = not item.done
        return item.done

    def set_text(self, index: int, text: str) -> None:
        self._check(index)
        self._items[index].text = _require_text(text)

    def move_up(self, index: int) -> int:
        """Swap with the previous item. Returns the moved item's new index."""
        self._check(index)
        if index == 0:
            return index
        items = self._items
        items[index - 1], items[index] = items[index], items[index - 1]
        return index - 1

    def move_down(self, index: int) -> int:
        """Swap with the next item. Returns the moved item's new index."""
        self._check(index)
        if index == len(self._items) - 1:
            return index
        items = self._items
        items[index + 1], items[index] = items[index], items[index + 1]
        return index + 1

    def first_pending(self) -> Optional[Item]:
        for item in self._items:
            if not item.done:
                return item
        return None

    def pending(self) -> list[tuple[int, Item]]:
        return [(i, item) for i, item in enumerate(self._items) if not item.done]

    def to_dict(self) -> dict[str, Any]:
        return {"items": [item.to_dict() for item in self._items]}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Backlog":
        return cls([Item.from_dict(raw) for raw in data.get("items", [])])

    @classmethod
    def of(cls, *texts: str) -> "Backlog":
        """Build a backlog of pending items from plain strings."""
        return cls([Item(text=text) for text in texts])
