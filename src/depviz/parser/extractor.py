"""Regex extraction of package declarations and imports from source files."""

import logging
import re
from pathlib import Path

from .entities import ModuleRecord

logger = logging.getLogger(__name__)

DEFAULT_SOURCE_EXTENSION = ".java"

PACKAGE_PATTERN = re.compile(r"package\s+(\S+);")
IMPORT_PATTERN = re.compile(r"import\s+(\S+);")


def extract_package(text: str) -> str | None:
    """Return the first declared package of a file, if any.

    Args:
        text: File contents

    Returns:
        Package identifier or None if no declaration matches
    """
    match = PACKAGE_PATTERN.search(text)
    if match is None:
        return None
    return match.group(1)


def extract_imports(text: str) -> list[str]:
    """Return every imported identifier in file order, duplicates included."""
    return IMPORT_PATTERN.findall(text)


def extract(text: str) -> tuple[str | None, list[str]]:
    """Extract the module identity and its references from file contents.

    Args:
        text: File contents

    Returns:
        Tuple of (identity or None, list of references)
    """
    return extract_package(text), extract_imports(text)


def is_source_file(file_path: Path | str, extension: str = DEFAULT_SOURCE_EXTENSION) -> bool:
    """Check if a file name carries the source extension (exact match)."""
    return Path(file_path).suffix == extension


def parse_file(file_path: Path | str, root: Path | None = None) -> ModuleRecord | None:
    """Read a source file and build its module record.

    Unreadable files and files without a package declaration yield None.

    Args:
        file_path: Path to the file to parse
        root: Scanned root directory (for relative paths)

    Returns:
        ModuleRecord or None if the file has no extractable identity
    """
    file_path = Path(file_path)

    try:
        text = file_path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        logger.debug(f"Skipping unreadable file {file_path}: {e}")
        return None

    identity, references = extract(text)
    if identity is None:
        logger.debug(f"No package declaration in {file_path}")
        return None

    if root:
        try:
            relative_path = str(file_path.relative_to(root))
        except ValueError:
            relative_path = str(file_path)
    else:
        relative_path = str(file_path)

    return ModuleRecord(identity=identity, references=references, file_path=relative_path)
