"""Global index of repos that have a backlog (used by `backlog list --all`)."""

from __future__ import annotations

import json
from pathlib import Path

from backlog.errors import StoreUnwritable


class GlobalIndex:
    def __init__(self, path: Path, repos: list[str] | None = None) -> None:
        self.path = Path(path)
        self.repos: list[str] = list(repos or [])

    @classmethod
    def load(cls, path: Path) -> "GlobalIndex":
        """Missing or unreadable index files read as empty."""
        path = Path(path)
        try:
            data = json.loads(path.read_text(encoding="utf-8"))
        except (OSError, ValueError):
            return cls(path)
        repos = data.get("repos") if isinstance(data, dict) else None
        if not isinstance(repos, list):
            return cls(path)
        return cls(path, [str(r) for r in repos])

    def save(self) -> None:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_text(
                json.dumps({"repos": self.repos}, indent=2), encoding="utf-8"
            )
        except OSError as e:
            raise StoreUnwritable(self.path, str(e)) from e

    def register(self, repo: Path | str) -> bool:
        """Add a repo once. Returns True if the index changed."""
        key = str(repo)
        if key in self.repos:
            return False
        self.repos.append(key)
        self.save()
        return True
