"""Import extraction layer."""

from cnp.extractor.js_imports import (
    extract_file,
    extract_imports,
    extract_packages,
    read_source,
)
from cnp.extractor.specifier import package_name, parse_reference

__all__ = [
    "extract_file",
    "extract_imports",
    "extract_packages",
    "package_name",
    "parse_reference",
    "read_source",
]
