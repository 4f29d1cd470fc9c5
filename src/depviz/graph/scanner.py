"""Source tree scanning into an import map."""

import logging
import os
from concurrent.futures import FIRST_COMPLETED, Future, ThreadPoolExecutor, wait
from pathlib import Path

from ..parser.extractor import DEFAULT_SOURCE_EXTENSION, is_source_file, parse_file
from .import_map import ImportMap

logger = logging.getLogger(__name__)


class TreeScanner:
    """Walks a directory tree and collects the import map of its source files.

    Unreadable entries, files with another extension and files without a
    package declaration are skipped; the scan always runs to completion.
    """

    def __init__(self, extension: str = DEFAULT_SOURCE_EXTENSION):
        """Initialize the scanner.

        Args:
            extension: Extension of the files to extract (exact match)
        """
        self.extension = extension

    def scan(
        self,
        root: Path | str,
        parallel: bool = True,
        max_workers: int | None = None,
    ) -> ImportMap:
        """Scan a directory tree.

        Args:
            root: Directory to scan
            parallel: Use the worker pool walk instead of the sequential one
            max_workers: Pool size for the parallel walk

        Returns:
            The populated import map
        """
        if parallel:
            return self.scan_parallel(root, max_workers=max_workers)
        return self.scan_sequential(root)

    def scan_sequential(self, root: Path | str) -> ImportMap:
        """Depth-first walk using an explicit work stack."""
        root = self._check_root(root)
        imports_map = ImportMap()

        stack = [root]
        while stack:
            directory = stack.pop()
            for entry in self._list_directory(directory):
                if self._is_directory(entry):
                    stack.append(Path(entry.path))
                else:
                    self._process_file(Path(entry.path), root, imports_map)

        logger.info(f"Sequential scan of {root} found {len(imports_map)} modules")
        return imports_map

    def scan_parallel(self, root: Path | str, max_workers: int | None = None) -> ImportMap:
        """Fork-join walk over a bounded worker pool.

        Every directory entry becomes one task. Directory tasks return their
        children, which are queued as new tasks, so the fan-out is driven from
        this thread instead of from nested task submissions.

        Args:
            root: Directory to scan
            max_workers: Pool size (defaults to the executor's choice)

        Returns:
            The populated import map, after every task has joined
        """
        root = self._check_root(root)
        imports_map = ImportMap()

        with ThreadPoolExecutor(max_workers=max_workers, thread_name_prefix="depviz-scan") as executor:
            pending: set[Future[list[os.DirEntry]]] = {
                executor.submit(self._list_directory, root)
            }
            while pending:
                done, pending = wait(pending, return_when=FIRST_COMPLETED)
                for future in done:
                    for entry in future.result():
                        if self._is_directory(entry):
                            pending.add(executor.submit(self._list_directory, Path(entry.path)))
                        else:
                            pending.add(
                                executor.submit(
                                    self._process_entry, Path(entry.path), root, imports_map
                                )
                            )

        logger.info(f"Parallel scan of {root} found {len(imports_map)} modules")
        return imports_map

    def _process_entry(self, file_path: Path, root: Path, imports_map: ImportMap) -> list[os.DirEntry]:
        """Task body for a file entry; files have no children."""
        self._process_file(file_path, root, imports_map)
        return []

    def _process_file(self, file_path: Path, root: Path, imports_map: ImportMap) -> None:
        if not is_source_file(file_path, self.extension):
            return

        record = parse_file(file_path, root)
        if record is None:
            return

        imports_map.insert(record.identity, record.references)
        logger.debug(
            f"{record.file_path}: package {record.identity} ({record.import_count} imports)"
        )

    @staticmethod
    def _check_root(root: Path | str) -> Path:
        root = Path(root)
        if not root.is_dir():
            raise NotADirectoryError(f"Source path is not a directory: {root}")
        return root

    @staticmethod
    def _list_directory(directory: Path) -> list[os.DirEntry]:
        """List a directory sorted by name; unreadable directories yield nothing."""
        try:
            with os.scandir(directory) as it:
                return sorted(it, key=lambda entry: entry.name)
        except OSError as e:
            logger.debug(f"Skipping unreadable directory {directory}: {e}")
            return []

    @staticmethod
    def _is_directory(entry: os.DirEntry) -> bool:
        """Real directories only; symlinked directories are not descended into."""
        try:
            return entry.is_dir(follow_symlinks=False)
        except OSError:
            return False


def scan_directory(
    root: Path | str,
    extension: str = DEFAULT_SOURCE_EXTENSION,
    parallel: bool = True,
    max_workers: int | None = None,
) -> ImportMap:
    """Scan a directory tree with a fresh TreeScanner."""
    return TreeScanner(extension).scan(root, parallel=parallel, max_workers=max_workers)
