"""Diagnostics reported back to the host build."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple

CATEGORY = "GitInformation"


@dataclass(frozen=True)
class SourceLocation:
    """Position of a type declaration in a source file (1-based)."""

    path: str
    line: int = 1
    column: int = 1

    def __str__(self) -> str:
        return f"{self.path}({self.line},{self.column})"


@dataclass(frozen=True)
class DiagnosticDescriptor:
    """Static description shared by every diagnostic of one kind."""

    id: str
    title: str
    message: str
    category: str = CATEGORY
    severity: str = "warning"


@dataclass(frozen=True)
class Diagnostic:
    """A descriptor raised against a concrete source location."""

    descriptor: DiagnosticDescriptor
    location: Optional[SourceLocation] = None
    arguments: Tuple[str, ...] = ()

    @property
    def id(self) -> str:
        return self.descriptor.id

    @property
    def severity(self) -> str:
        return self.descriptor.severity

    @property
    def message(self) -> str:
        return self.descriptor.message.format(*self.arguments)

    def format(self) -> str:
        """Render in the ``file(line,col): severity ID: message`` compiler style."""
        prefix = f"{self.location}: " if self.location else ""
        return f"{prefix}{self.severity} {self.id}: {self.message}"


NO_USABLE_GIT = DiagnosticDescriptor(
    id="GITINFO01",
    title="No git available or not a git repository",
    message=(
        "Git is not available on this computer or the Git repository has not been initialized. "
        "All fields return an empty string."
    ),
)


__all__ = ["CATEGORY", "Diagnostic", "DiagnosticDescriptor", "NO_USABLE_GIT", "SourceLocation"]
