"""Repository metadata captured for code generation."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List, Tuple

from .git.inspector import GitCommandQueries, RepositoryInspector


@dataclass(frozen=True)
class GitMetadata:
    """Branch, commit and tags of the current checkout.

    Each field is empty when git could not provide it. The fields are
    independent: a detached checkout has no branch name but still has a hash.
    """

    branch_name: str = ""
    commit_hash: str = ""
    tags: Tuple[str, ...] = ()

    @property
    def is_empty(self) -> bool:
        return not (self.branch_name or self.commit_hash or self.tags)

    def to_dict(self) -> Dict[str, object]:
        tags: List[str] = list(self.tags)
        return {"branch_name": self.branch_name, "commit_hash": self.commit_hash, "tags": tags}


class MetadataExtractor:
    """Collects :class:`GitMetadata` through a :class:`RepositoryInspector`."""

    def __init__(self, inspector: RepositoryInspector) -> None:
        self._inspector = inspector

    def extract(self) -> GitMetadata:
        branch_name = self._inspector.branch_name()
        commit_hash = self._inspector.commit_hash()
        # Tags are looked up even without a hash; git then falls back to HEAD.
        tags = self._inspector.tags(commit_hash)
        return GitMetadata(branch_name=branch_name, commit_hash=commit_hash, tags=tuple(tags))


def extract_metadata(repo_path: Path | str = ".", *, executable: str = "git") -> GitMetadata:
    """Extract metadata for ``repo_path`` using the git executable."""
    queries = GitCommandQueries(repo_path, executable=executable)
    return MetadataExtractor(RepositoryInspector(queries)).extract()


__all__ = ["GitMetadata", "MetadataExtractor", "extract_metadata"]
