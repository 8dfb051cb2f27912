"""Per-repo backlog file.

The editor and the CLI both go through JsonStore: load once, save after
every mutation. Writes go to a sibling temp file first and are moved into
place, so an interrupted save never leaves half a JSON document behind.
"""

from __future__ import annotations

import json
import os
import tempfile
from pathlib import Path

from backlog.errors import StoreUnreadable, StoreUnwritable
from backlog.model import Backlog


class JsonStore:
    def __init__(self, path: Path) -> None:
        self.path = Path(path)

    def __repr__(self) -> str:
        return f"JsonStore({str(self.path)!r})"

    def load(self) -> Backlog:
        """Read the backlog; a missing file is an empty backlog."""
        if not self.path.exists():
            return Backlog()

        try:
            content = self.path.read_text(encoding="utf-8")
        except OSError as e:
            raise StoreUnreadable(self.path, str(e)) from e

        if not content.strip():
            return Backlog()

        try:
            data = json.loads(content)
            if not isinstance(data, dict):
                raise ValueError("expected a JSON object")
            return Backlog.from_dict(data)
        except (ValueError, KeyError, TypeError, AttributeError) as e:
            raise StoreUnreadable(self.path, f"corrupt backlog ({e})") from e

    def save(self, backlog: Backlog) -> None:
        content = json.dumps(backlog.to_dict(), indent=2, ensure_ascii=False)
        tmp_name = None
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                dir=self.path.parent, prefix=".backlog-", suffix=".tmp"
            )
            with os.fdopen(fd, "w", encoding="utf-8") as fh:
                fh.write(content)
            os.replace(tmp_name, self.path)
            tmp_name = None
        except OSError as e:
            raise StoreUnwritable(self.path, str(e)) from e
        finally:
            if tmp_name is not None:
                Path(tmp_name).unlink(missing_ok=True)
