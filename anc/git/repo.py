"""Git Repository - Stage, unstage, diff and commit via the git CLI."""

import logging
import subprocess
from dataclasses import dataclass
from enum import Enum
from pathlib import Path

logger = logging.getLogger(__name__)


class ChangeKind(str, Enum):
    """What happened to a file, as reported by porcelain status."""
    ADDED = "A"
    MODIFIED = "M"
    DELETED = "D"
    RENAMED = "R"
    UNTRACKED = "??"


@dataclass(frozen=True)
class ChangedFile:
    """A single entry of the working tree listing."""
    path: str
    kind: ChangeKind
    is_staged: bool
    is_tracked: bool


class GitError(Exception):
    """Raised when git operations fail."""
    pass


def parse_status_line(line: str) -> ChangedFile | None:
    """Parse one 'XY path' entry of 'git status --porcelain -z'.

    Paths are taken verbatim: with -z git neither quotes nor escapes them.
    """
    if len(line) < 4:
        return None

    staged, unstaged = line[0], line[1]
    path = line[3:]
    if not path.strip():
        return None

    untracked = staged == '?' and unstaged == '?'
    if untracked:
        kind = ChangeKind.UNTRACKED
    elif 'A' in (staged, unstaged):
        kind = ChangeKind.ADDED
    elif 'M' in (staged, unstaged):
        kind = ChangeKind.MODIFIED
    elif 'D' in (staged, unstaged):
        kind = ChangeKind.DELETED
    elif 'R' in (staged, unstaged):
        kind = ChangeKind.RENAMED
    else:
        kind = ChangeKind.MODIFIED

    return ChangedFile(
        path=path,
        kind=kind,
        is_staged=staged not in (' ', '?'),
        is_tracked=not untracked,
    )


def parse_status_output(output: str) -> list[ChangedFile]:
    """Parse the NUL-separated output of 'git status --porcelain -z'."""
    entries = output.split('\0')
    files = []
    i = 0
    while i < len(entries):
        entry = entries[i]
        i += 1
        changed = parse_status_line(entry)
        if changed is None:
            continue
        # Renames and copies are followed by their source path
        if 'R' in entry[:2] or 'C' in entry[:2]:
            i += 1
        files.append(changed)
    return files


class GitRepo:
    """Git primitives for the repository containing ``cwd``."""

    def __init__(self, cwd: Path | None = None):
        self.cwd = cwd
        self._verify_git_available()
        self._verify_in_repo()

    def _run_git(self, *args: str) -> str:
        """Run a git command and return stdout."""
        logger.debug("git %s", ' '.join(args))
        try:
            result = subprocess.run(
                ['git', *args],
                cwd=self.cwd,
                capture_output=True,
                text=True,
                check=True,
                encoding='utf-8',
                errors='replace'
            )
            return result.stdout
        except subprocess.CalledProcessError as e:
            detail = (e.stderr or e.stdout or '').strip()
            raise GitError(f"git {' '.join(args[:2])} failed: {detail or e}")
        except FileNotFoundError:
            raise GitError("Git is not installed or not in PATH")

    def _verify_git_available(self) -> None:
        """Fail fast if git isn't available."""
        try:
            self._run_git('--version')
        except GitError:
            raise GitError("Git is not installed or not in PATH")

    def _verify_in_repo(self) -> None:
        """Fail fast if we're not in a git repository."""
        try:
            self._run_git('rev-parse', '--git-dir')
        except GitError:
            raise GitError("Not inside a git repository")

    def list_changes(self) -> list[ChangedFile]:
        """Staged, unstaged and untracked changes in status order."""
        return parse_status_output(self._run_git('status', '--porcelain', '-z', '-uall'))

    def list_staged(self) -> list[str]:
        output = self._run_git('diff', '--cached', '--name-only', '-z')
        return [path for path in output.split('\0') if path]

    def stage(self, paths: list[str]) -> None:
        if not paths:
            return
        try:
            self._run_git('add', '--', *paths)
        except GitError as e:
            raise GitError(f"Failed to stage files: {e}")

    def unstage(self, paths: list[str]) -> None:
        if not paths:
            return
        try:
            self._run_git('reset', '-q', 'HEAD', '--', *paths)
        except GitError as e:
            raise GitError(f"Failed to unstage files: {e}")

    def unstage_detached(self, paths: list[str]) -> None:
        """Start an unstage and return without waiting for it.

        The child process outlives this one, so it is safe to call right
        before exiting. Failures are not reported.
        """
        if not paths:
            return
        try:
            subprocess.Popen(
                ['git', 'reset', '-q', 'HEAD', '--', *paths],
                cwd=self.cwd,
                stdin=subprocess.DEVNULL,
                stdout=subprocess.DEVNULL,
                stderr=subprocess.DEVNULL,
            )
        except OSError as e:
            logger.debug("detached unstage could not start: %s", e)

    def diff(self) -> str:
        """Combined diff of everything staged."""
        return self._run_git('diff', '--cached')

    def diff_for(self, path: str) -> str:
        return self._run_git('diff', '--cached', '--', path)

    def commit(self, message: str) -> None:
        try:
            self._run_git('commit', '-m', message)
        except GitError as e:
            raise GitError(f"Failed to commit: {e}")
