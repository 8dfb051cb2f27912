"""CLI commands against a throwaway repo.

Runs `python -m backlog` in a subprocess, the way a user would.
"""

import json

from conftest import run


def add(repo, home, text):
    res = run(["add", *text.split()], cwd=repo, home=home)
    assert res.returncode == 0, res.stderr
    return res


# ── add / list ───────────────────────────────────────────────


def test_add_writes_repo_backlog(repo, home):
    res = add(repo, home, "write the docs")
    assert "Added: write the docs" in res.stdout

    data = json.loads((repo / ".todo" / "backlog.json").read_text())
    assert [i["description"] for i in data["items"]] == ["write the docs"]
    assert data["items"][0]["done"] is False


def test_add_registers_repo_in_global_index(repo, home):
    add(repo, home, "one")
    add(repo, home, "two")
    data = json.loads((home / "index.json").read_text())
    assert data["repos"] == [str(repo.resolve())]


def test_add_without_description_fails(repo, home):
    res = run(["add"], cwd=repo, home=home)
    assert res.returncode == 1
    assert "Please provide a description" in res.stderr


def test_list_numbers_items(repo, home):
    add(repo, home, "first")
    add(repo, home, "second")
    res = run(["list"], cwd=repo, home=home)
    assert res.returncode == 0
    assert "1. [ ] first" in res.stdout
    assert "2. [ ] second" in res.stdout


def test_list_empty(repo, home):
    res = run(["list"], cwd=repo, home=home)
    assert res.returncode == 0
    assert "Backlog is empty." in res.stdout


def test_list_all_shows_repos_with_pending_items(repo, home, tmp_path):
    other = tmp_path / "other"
    (other / ".git").mkdir(parents=True)
    add(repo, home, "pending here")
    add(other, home, "finished there")
    assert run(["done", "1"], cwd=other, home=home).returncode == 0

    res = run(["list", "--all"], cwd=tmp_path, home=home)
    assert res.returncode == 0
    assert str(repo.resolve()) in res.stdout
    assert "pending here" in res.stdout
    assert "finished there" not in res.stdout


def test_list_all_without_index(tmp_path, home):
    res = run(["list", "-a"], cwd=tmp_path, home=home)
    assert "No backlogs found." in res.stdout


# ── done / remove / next ─────────────────────────────────────


def test_done_marks_item(repo, home):
    add(repo, home, "a")
    add(repo, home, "b")
    res = run(["done", "2"], cwd=repo, home=home)
    assert res.returncode == 0
    assert "Marked as done: b" in res.stdout

    res = run(["list"], cwd=repo, home=home)
    assert "2. [x] b" in res.stdout


def test_done_invalid_number(repo, home):
    add(repo, home, "a")
    for number in ("0", "2"):
        res = run(["done", number], cwd=repo, home=home)
        assert res.returncode == 1
        assert "Invalid item number" in res.stderr


def test_remove_item(repo, home):
    add(repo, home, "a")
    add(repo, home, "b")
    res = run(["remove", "1"], cwd=repo, home=home)
    assert res.returncode == 0
    assert "Removed: a" in res.stdout
    assert "1. [ ] b" in run(["list"], cwd=repo, home=home).stdout


def test_next_skips_done_items(repo, home):
    add(repo, home, "a")
    add(repo, home, "b")
    run(["done", "1"], cwd=repo, home=home)
    res = run(["next"], cwd=repo, home=home)
    assert res.stdout.strip() == "b"


def test_next_when_all_done(repo, home):
    add(repo, home, "a")
    run(["done", "1"], cwd=repo, home=home)
    res = run(["next"], cwd=repo, home=home)
    assert res.returncode == 0
    assert res.stdout == ""
    assert "All done!" in res.stderr


# ── bare invocation / errors ─────────────────────────────────


def test_bare_invocation_lists_pending_only(repo, home):
    add(repo, home, "a")
    add(repo, home, "b")
    run(["done", "1"], cwd=repo, home=home)
    res = run([], cwd=repo, home=home)
    assert res.returncode == 0
    assert "1 item(s) in backlog:" in res.stdout
    assert "2. [ ] b" in res.stdout
    assert " a\n" not in res.stdout


def test_bare_invocation_empty(repo, home):
    res = run([], cwd=repo, home=home)
    assert "Backlog is empty." in res.stdout


def test_outside_repository(tmp_path, home):
    for args in (["list"], ["add", "x"], ["next"], ["cli"], []):
        res = run(args, cwd=tmp_path, home=home)
        assert res.returncode == 1, args
        assert "Not in a git repository" in res.stderr


def test_corrupt_backlog_is_reported(repo, home):
    todo = repo / ".todo"
    todo.mkdir()
    (todo / "backlog.json").write_text("{oops")
    res = run(["list"], cwd=repo, home=home)
    assert res.returncode == 1
    assert "corrupt backlog" in res.stderr


def test_unwritable_backlog_fails_without_traceback(repo, home):
    (repo / ".todo").write_text("")
    res = run(["add", "x"], cwd=repo, home=home)
    assert res.returncode == 1
    assert "Failed to save backlog" in res.stderr
    assert "Traceback" not in res.stderr
    assert "ERROR:root" not in res.stderr


def test_version_flag(tmp_path, home):
    res = run(["--version"], cwd=tmp_path, home=home)
    assert res.returncode == 0
    assert res.stdout.startswith("backlog")
