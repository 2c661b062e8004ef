"""Core data models shared across gitinfogen components."""

from dataclasses import dataclass
from typing import Optional, Tuple

from .diagnostics import SourceLocation


@dataclass(frozen=True)
class TargetDescriptor:
    """A type declaration that asked for git information to be injected."""

    name: str
    namespace: str = ""
    full_name: str = ""
    kind: str = "class"
    type_parameters: Tuple[str, ...] = ()
    location: Optional[SourceLocation] = None

    @property
    def declaration(self) -> str:
        """Type name as written on the partial declaration, e.g. ``Foo<T>``."""
        if not self.type_parameters:
            return self.name
        return f"{self.name}<{', '.join(self.type_parameters)}>"

    @property
    def qualified_name(self) -> str:
        """Stable full identifier, ``full_name`` when the host supplied one."""
        if self.full_name:
            return self.full_name
        if self.namespace:
            return f"{self.namespace}.{self.declaration}"
        return self.declaration


@dataclass(frozen=True)
class GeneratedUnit:
    """Generated source handed to the host for persistence."""

    name: str
    text: str
