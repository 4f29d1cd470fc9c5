"""Parser module for extracting module records from source files."""

from .entities import ModuleRecord
from .extractor import (
    DEFAULT_SOURCE_EXTENSION,
    extract,
    extract_imports,
    extract_package,
    is_source_file,
    parse_file,
)

__all__ = [
    # Entities
    "ModuleRecord",
    # Extraction
    "DEFAULT_SOURCE_EXTENSION",
    "extract",
    "extract_imports",
    "extract_package",
    "is_source_file",
    "parse_file",
]
