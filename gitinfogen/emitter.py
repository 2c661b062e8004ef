"""Renders git metadata into C# partial type extensions."""

from __future__ import annotations

from pathlib import Path
from typing import Dict, Iterable, List

from jinja2 import Environment, FileSystemLoader, StrictUndefined

from .metadata import GitMetadata
from .models import GeneratedUnit, TargetDescriptor

ARTIFACT_SUFFIX = ".GitInformationGenerator.g.cs"
TEMPLATE_NAME = "csharp/partial_type.cs.j2"

_DEFAULT_TEMPLATES_DIR = Path(__file__).with_name("templates")

_ESCAPES: Dict[str, str] = {
    "\\": "\\\\",
    '"': '\\"',
    "\0": "\\0",
    "\a": "\\a",
    "\b": "\\b",
    "\f": "\\f",
    "\n": "\\n",
    "\r": "\\r",
    "\t": "\\t",
    "\v": "\\v",
}
# Characters C# treats as line terminators inside a regular string literal.
_LINE_BREAKS = {"\u0085", "\u2028", "\u2029"}


class CodeEmitter:
    """Produces the generated compile unit for a target.

    Rendering only depends on the target and the metadata; the same inputs
    always yield byte-identical text.
    """

    def __init__(self, templates_dir: Path | None = None) -> None:
        self.templates_dir = templates_dir
        self._env = self._create_env(templates_dir)

    def emit(self, target: TargetDescriptor, metadata: GitMetadata) -> GeneratedUnit:
        template = self._env.get_template(TEMPLATE_NAME)
        text = template.render(
            namespace=target.namespace,
            kind=target.kind,
            declaration=target.declaration,
            branch_name=metadata.branch_name,
            commit_hash=metadata.commit_hash,
            tags=list(metadata.tags),
        )
        return GeneratedUnit(name=artifact_name(target), text=text)

    @staticmethod
    def _create_env(templates_dir: Path | None) -> Environment:
        directories: List[str] = []
        if templates_dir:
            directories.append(str(templates_dir))
        directories.append(str(_DEFAULT_TEMPLATES_DIR))
        env = Environment(
            loader=FileSystemLoader(directories),
            autoescape=False,
            keep_trailing_newline=True,
            trim_blocks=True,
            lstrip_blocks=True,
            undefined=StrictUndefined,
        )
        env.filters["csharp_string"] = csharp_string
        env.filters["csharp_array"] = csharp_array
        return env


def artifact_name(target: TargetDescriptor) -> str:
    """Return a file-system safe artifact name for ``target``."""
    identifier = (
        target.qualified_name.replace("global::", "")
        .replace("<", "_")
        .replace(">", "_")
    )
    return f"{identifier}{ARTIFACT_SUFFIX}"


def csharp_string(value: object) -> str:
    """Quote ``value`` as a regular C# string literal."""
    escaped: List[str] = []
    for char in str(value):
        if char in _ESCAPES:
            escaped.append(_ESCAPES[char])
        elif ord(char) < 0x20 or ord(char) == 0x7F or char in _LINE_BREAKS:
            escaped.append(f"\\u{ord(char):04x}")
        else:
            escaped.append(char)
    return '"' + "".join(escaped) + '"'


def csharp_array(values: Iterable[object]) -> str:
    """Render an array initializer body such as ``{ "a", "b" }``."""
    items = [csharp_string(value) for value in values]
    if not items:
        return "{ }"
    return "{ " + ", ".join(items) + " }"


__all__ = [
    "ARTIFACT_SUFFIX",
    "CodeEmitter",
    "artifact_name",
    "csharp_array",
    "csharp_string",
]
