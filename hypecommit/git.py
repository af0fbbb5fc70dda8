"""
Staged-change queries and commits, run through the git binary.
"""

import subprocess
from pathlib import Path
from typing import Union

from hypecommit.models import StagedFileStat

PathLike = Union[str, Path]


class GitError(RuntimeError):
    """A git command failed or git is not installed."""


def run_git(repo: PathLike, *args: str) -> str:
    """Run a git command inside `repo` and return its stdout."""
    try:
        result = subprocess.run(
            ["git", "-C", str(repo), *args],
            capture_output=True, text=True, check=True,
        )
    except FileNotFoundError as exc:
        raise GitError("git executable not found") from exc
    except subprocess.CalledProcessError as exc:
        detail = (exc.stderr or "").strip() or f"exit code {exc.returncode}"
        raise GitError(f"git {' '.join(args)} failed: {detail}") from exc
    return result.stdout


def get_staged_diff(repo: PathLike) -> str:
    return run_git(repo, "diff", "--cached")


def parse_numstat(output: str) -> list[StagedFileStat]:
    """Parse `git diff --numstat` output. Binary files report 0/0."""
    stats = []
    for line in output.splitlines():
        parts = line.split("\t")
        if len(parts) < 3:
            continue
        added = int(parts[0]) if parts[0].isdigit() else 0
        deleted = int(parts[1]) if parts[1].isdigit() else 0
        stats.append(StagedFileStat(file=parts[2], additions=added, deletions=deleted))
    return stats


def get_staged_files(repo: PathLike) -> list[StagedFileStat]:
    """Per-file line counts for everything in the index."""
    return parse_numstat(run_git(repo, "diff", "--cached", "--numstat"))


def commit_changes(repo: PathLike, message: str) -> None:
    """Commit the staged changes, letting git write to the terminal."""
    try:
        subprocess.run(["git", "-C", str(repo), "commit", "-m", message], check=True)
    except FileNotFoundError as exc:
        raise GitError("git executable not found") from exc
    except subprocess.CalledProcessError as exc:
        raise GitError(f"git commit command failed with exit code {exc.returncode}") from exc
