"""Tests for git queries and output parsing."""

from __future__ import annotations

from pathlib import Path

from gitinfogen.git.inspector import (
    GitCommandQueries,
    RepositoryInspector,
    parse_branch_name,
    parse_tags,
)
from gitinfogen.process import CommandResult
from tests._fixtures.fake_git import FakeGitQueries, failed, ok


def test_parse_branch_name_strips_marker_and_line_ending() -> None:
    assert parse_branch_name("* master\r\n") == "master"


def test_parse_branch_name_passes_unmarked_output_through_trimmed() -> None:
    assert parse_branch_name("  feature/login \n") == "feature/login"


def test_parse_branch_name_prefers_current_branch_when_several_contain_head() -> None:
    output = "  develop\n* main\n  release/1.0\n"
    assert parse_branch_name(output) == "main"


def test_parse_branch_name_falls_back_to_first_branch_without_marker() -> None:
    assert parse_branch_name("  develop\n  main\n") == "develop"


def test_parse_branch_name_detached_head_is_unnamed() -> None:
    assert parse_branch_name("* (HEAD detached at 1a2b3c4)\n  main\n") == ""


def test_parse_branch_name_empty_output() -> None:
    assert parse_branch_name("") == ""


def test_parse_tags_preserves_tool_order() -> None:
    assert parse_tags("v1.0\nv1.1\n") == ("v1.0", "v1.1")
    assert parse_tags("v2\nv1\n") == ("v2", "v1")


def test_parse_tags_empty_output() -> None:
    assert parse_tags("") == ()
    assert parse_tags("\r\n") == ()


def test_parse_tags_handles_windows_line_endings() -> None:
    assert parse_tags("v1.0\r\nv1.1\r\n") == ("v1.0", "v1.1")


def test_inspector_reads_values_from_queries(fake_git: FakeGitQueries) -> None:
    inspector = RepositoryInspector(fake_git)

    assert inspector.is_usable() is True
    assert inspector.branch_name() == "main"
    assert inspector.commit_hash() == "abc123"
    assert inspector.tags("abc123") == ("v1",)
    assert fake_git.calls[-1] == ("tag", "abc123")


def test_inspector_unusable_when_status_writes_stderr() -> None:
    inspector = RepositoryInspector(FakeGitQueries(status=failed()))
    assert inspector.is_usable() is False


def test_inspector_status_exit_code_alone_does_not_mark_unusable() -> None:
    queries = FakeGitQueries(status=CommandResult(stdout="", stderr="", exit_code=1))
    assert RepositoryInspector(queries).is_usable() is True


def test_inspector_failed_queries_resolve_to_empty_values() -> None:
    inspector = RepositoryInspector(FakeGitQueries.unusable())

    assert inspector.branch_name() == ""
    assert inspector.commit_hash() == ""
    assert inspector.tags("") == ()


def test_inspector_non_zero_exit_without_stderr_is_a_failure() -> None:
    queries = FakeGitQueries(
        branches=CommandResult(stdout="* main\n", stderr="", exit_code=1),
        commit_hash=CommandResult(stdout="abc123\n", stderr="", exit_code=1),
    )
    inspector = RepositoryInspector(queries)

    assert inspector.branch_name() == ""
    assert inspector.commit_hash() == ""


def test_inspector_queries_are_independent() -> None:
    queries = FakeGitQueries(branches=failed("error: malformed object name HEAD\n"))
    inspector = RepositoryInspector(queries)

    assert inspector.branch_name() == ""
    assert inspector.commit_hash() == "abc123"
    assert inspector.tags("abc123") == ("v1",)


def test_inspector_commit_hash_is_trimmed() -> None:
    queries = FakeGitQueries(commit_hash=ok("  0123456789abcdef0123456789abcdef01234567\r\n"))
    assert RepositoryInspector(queries).commit_hash() == "0123456789abcdef0123456789abcdef01234567"


def test_git_command_queries_issue_expected_commands(tmp_path: Path) -> None:
    calls: list[tuple[list[str], Path]] = []

    def runner(args, cwd=None):  # type: ignore[no-untyped-def]
        calls.append((list(args), Path(cwd)))
        return CommandResult(stdout="", stderr="", exit_code=0)

    queries = GitCommandQueries(tmp_path, runner=runner)
    queries.status()
    queries.branches_containing_head()
    queries.head_commit_hash()
    queries.tags_containing("abc123")

    assert calls[0] == (["git", "status"], tmp_path)
    assert calls[1][0] == ["git", "branch", "--contains=HEAD"]
    assert calls[2][0] == ["git", "show", "--format=%H", "--no-patch", "HEAD"]
    assert calls[3][0] == ["git", "tag", "-l", "--contains", "abc123"]


def test_git_command_queries_omit_empty_hash_and_use_custom_executable(tmp_path: Path) -> None:
    calls: list[list[str]] = []

    def runner(args, cwd=None):  # type: ignore[no-untyped-def]
        calls.append(list(args))
        return CommandResult(stdout="", stderr="", exit_code=0)

    queries = GitCommandQueries(tmp_path, executable="/opt/git/bin/git", runner=runner)
    queries.tags_containing("")

    assert calls == [["/opt/git/bin/git", "tag", "-l", "--contains"]]


def test_parse_tags_keeps_unicode_separators_inside_names() -> None:
    output = "rel\u0085candidate\r\nv1\u2028beta\n"
    assert parse_tags(output) == ("rel\u0085candidate", "v1\u2028beta")


def test_parse_branch_name_keeps_unicode_separators_inside_names() -> None:
    assert parse_branch_name("* feature\u2028x\n  main\n") == "feature\u2028x"
