"""Book reference resolution package."""

from .reference_resolver import ReferenceResolver, workspace_directory

__all__ = ["ReferenceResolver", "workspace_directory"]
