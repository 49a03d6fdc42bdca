"""Usage analysis."""

from cnp.analysis.usage import aggregate, collect_imported, undeclared_imports

__all__ = ["aggregate", "collect_imported", "undeclared_imports"]
