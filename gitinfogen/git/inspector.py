"""Read-only git queries and output normalisation."""

from __future__ import annotations

from pathlib import Path
from typing import Callable, Iterable, Protocol, Sequence, Tuple

from ..logging import get_logger
from ..process import CommandResult, run_command, split_lines

_CURRENT_BRANCH_MARKER = "*"
_DETACHED_PREFIX = "(HEAD detached"
_NO_BRANCH = "(no branch"
# ASCII whitespace only, so ref names keep any U+0085 or U+2028 they contain.
_BLANKS = " \t\r\n"

logger = get_logger("git")


class GitQueries(Protocol):
    """Capability used by :class:`RepositoryInspector` to talk to git."""

    def status(self) -> CommandResult:
        """Report working tree status."""

    def branches_containing_head(self) -> CommandResult:
        """List the branches that contain the current commit."""

    def head_commit_hash(self) -> CommandResult:
        """Print the full hash of the current commit."""

    def tags_containing(self, commit_hash: str) -> CommandResult:
        """List the tags that contain ``commit_hash``."""


class GitCommandQueries:
    """Issues git queries through the process runner."""

    def __init__(
        self,
        repo_path: Path | str = ".",
        *,
        executable: str = "git",
        runner: Callable[..., CommandResult] | None = None,
    ) -> None:
        self.repo_path = Path(repo_path)
        self.executable = executable
        self._runner = runner or run_command

    def status(self) -> CommandResult:
        return self._git("status")

    def branches_containing_head(self) -> CommandResult:
        return self._git("branch", "--contains=HEAD")

    def head_commit_hash(self) -> CommandResult:
        return self._git("show", "--format=%H", "--no-patch", "HEAD")

    def tags_containing(self, commit_hash: str) -> CommandResult:
        args = ["tag", "-l", "--contains"]
        if commit_hash:
            args.append(commit_hash)
        return self._git(*args)

    def _git(self, *args: str) -> CommandResult:
        command = [self.executable, *args]
        logger.debug("Running %s in %s", " ".join(command), self.repo_path)
        result = self._runner(command, cwd=self.repo_path)
        if result.exit_code != 0 or result.stderr:
            logger.debug(
                "%s exited with %d: %s",
                " ".join(command),
                result.exit_code,
                result.stderr.strip(),
            )
        return result


class RepositoryInspector:
    """Answers repository questions, turning query failures into empty values."""

    def __init__(self, queries: GitQueries) -> None:
        self._queries = queries

    def is_usable(self) -> bool:
        result = self._queries.status()
        return not result.stderr

    def branch_name(self) -> str:
        result = self._queries.branches_containing_head()
        if not result.ok:
            return ""
        return parse_branch_name(result.stdout)

    def commit_hash(self) -> str:
        result = self._queries.head_commit_hash()
        if not result.ok:
            return ""
        return result.stdout.strip(_BLANKS)

    def tags(self, commit_hash: str) -> Tuple[str, ...]:
        result = self._queries.tags_containing(commit_hash)
        if not result.ok:
            return ()
        return parse_tags(result.stdout)


def parse_branch_name(output: str) -> str:
    """Extract the current branch from ``git branch`` style output.

    ``"* master\\r\\n"`` becomes ``"master"``. When several branches contain
    HEAD the line carrying the current-branch marker wins, falling back to the
    first listed branch. A detached HEAD has no name and yields ``""``.
    """
    lines = list(_non_blank(split_lines(output)))
    if not lines:
        return ""
    chosen = next(
        (line for line in lines if line.startswith(_CURRENT_BRANCH_MARKER)),
        lines[0],
    )
    if chosen.startswith(_CURRENT_BRANCH_MARKER):
        chosen = chosen[len(_CURRENT_BRANCH_MARKER):].strip(_BLANKS)
    if chosen.startswith((_DETACHED_PREFIX, _NO_BRANCH)):
        return ""
    return chosen


def parse_tags(output: str) -> Tuple[str, ...]:
    """Split ``git tag`` output into tag names, keeping the tool's order."""
    return tuple(_non_blank(split_lines(output.strip(_BLANKS))))


def _non_blank(lines: Iterable[str]) -> Sequence[str]:
    return [line.strip(_BLANKS) for line in lines if line.strip(_BLANKS)]


__all__ = [
    "GitCommandQueries",
    "GitQueries",
    "RepositoryInspector",
    "parse_branch_name",
    "parse_tags",
]
