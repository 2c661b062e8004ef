"""Git query adapters."""

from .inspector import (
    GitCommandQueries,
    GitQueries,
    RepositoryInspector,
    parse_branch_name,
    parse_tags,
)

__all__ = [
    "GitCommandQueries",
    "GitQueries",
    "RepositoryInspector",
    "parse_branch_name",
    "parse_tags",
]
