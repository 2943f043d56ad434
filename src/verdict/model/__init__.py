"""Expression model objects."""

from .expression import CompiledArtifactCache, Expression

__all__ = ["CompiledArtifactCache", "Expression"]
