"""Per-target generation entry point used by build hosts."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple

from .diagnostics import NO_USABLE_GIT, Diagnostic
from .emitter import CodeEmitter
from .git.inspector import GitQueries, RepositoryInspector
from .logging import DIAGNOSTIC_ATTR, get_logger
from .metadata import GitMetadata, MetadataExtractor
from .models import GeneratedUnit, TargetDescriptor


@dataclass(frozen=True)
class GenerationResult:
    """Outcome of generating one target."""

    unit: GeneratedUnit
    metadata: GitMetadata
    diagnostics: Tuple[Diagnostic, ...] = ()

    @property
    def has_warnings(self) -> bool:
        return any(diagnostic.severity == "warning" for diagnostic in self.diagnostics)


class GitInformationGenerator:
    """Wires repository inspection to code emission for each target.

    An unusable repository never stops generation: the target still gets a
    unit with empty members and a single GITINFO01 warning is attached.
    """

    def __init__(self, queries: GitQueries, *, emitter: CodeEmitter | None = None) -> None:
        self._inspector = RepositoryInspector(queries)
        self._extractor = MetadataExtractor(self._inspector)
        self._emitter = emitter or CodeEmitter()
        self.logger = get_logger("generator")

    def generate(self, target: TargetDescriptor) -> GenerationResult:
        self.logger.debug("Generating git information for %s", target.qualified_name)
        diagnostics: Tuple[Diagnostic, ...] = ()
        if self._inspector.is_usable():
            metadata = self._extractor.extract()
        else:
            diagnostic = Diagnostic(NO_USABLE_GIT, location=target.location, arguments=(target.name,))
            self.logger.warning("%s", diagnostic.format(), extra={DIAGNOSTIC_ATTR: diagnostic})
            diagnostics = (diagnostic,)
            metadata = GitMetadata()

        unit = self._emitter.emit(target, metadata)
        self.logger.debug(
            "Emitted %s (branch=%r, hash=%r, %d tags)",
            unit.name,
            metadata.branch_name,
            metadata.commit_hash,
            len(metadata.tags),
        )
        return GenerationResult(unit=unit, metadata=metadata, diagnostics=diagnostics)


def generate(
    target: TargetDescriptor,
    queries: GitQueries,
    *,
    emitter: CodeEmitter | None = None,
) -> Tuple[GeneratedUnit, Optional[Diagnostic]]:
    """Generate ``target`` and return its unit with the warning, if any."""
    result = GitInformationGenerator(queries, emitter=emitter).generate(target)
    diagnostic = result.diagnostics[0] if result.diagnostics else None
    return result.unit, diagnostic


__all__ = ["GenerationResult", "GitInformationGenerator", "generate"]
