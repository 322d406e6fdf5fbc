"""Git Operations Package"""

from anc.git.repo import GitRepo, GitError, ChangedFile, ChangeKind, parse_status_line, parse_status_output

__all__ = [
    "GitRepo",
    "GitError",
    "ChangedFile",
    "ChangeKind",
    "parse_status_line",
    "parse_status_output",
]
