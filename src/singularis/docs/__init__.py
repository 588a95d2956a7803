"""Reference documentation generator."""

from singularis.docs.generator import SECTIONS, DocsResult, DocumentationGenerator

__all__ = ["SECTIONS", "DocsResult", "DocumentationGenerator"]
