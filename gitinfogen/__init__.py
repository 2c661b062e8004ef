"""gitinfogen - inject git branch, commit hash and tags into generated C# sources."""

__version__ = "0.1.0"

from .generator import GenerationResult, GitInformationGenerator, generate
from .metadata import GitMetadata, extract_metadata
from .models import GeneratedUnit, TargetDescriptor

__all__ = [
    "GeneratedUnit",
    "GenerationResult",
    "GitInformationGenerator",
    "GitMetadata",
    "TargetDescriptor",
    "extract_metadata",
    "generate",
]
