"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/scanner.py
Implements directory enumeration over one or more scan roots.
Features:
- Recursively walks every root with os.walk
- Skips missing roots with a warning instead of aborting the run
- Skips symbolic links and the OS trash directories
- Yields each physical file once, even if it is reachable through several paths
"""

import os
import sys
from typing import Callable, Iterator, List, Optional, Set, Tuple
from pathlib import Path
import time
import logging

from dupescope.core.interfaces import FileScanner

logger = logging.getLogger(__name__)


class FileScannerImpl(FileScanner):
    """
    Scans directories recursively and returns absolute paths of regular files.

    Discovery order is whatever os.walk yields for the underlying filesystem,
    so it is not portable across filesystems.

    Attributes:
        roots: Directories to scan, in the order given by the operator
        missing_roots: Roots that were skipped because they do not exist or are not directories
    """

    def __init__(self, roots: List[str]):
        self.roots = list(roots)
        self.missing_roots: List[str] = []

    def scan(self,
             progress_callback: Optional[Callable[[str, int, object], None]] = None) -> List[str]:
        """
        Single pass over all roots.
        Returns absolute file paths in discovery order.
        """
        logger.debug(f"Starting scan of {len(self.roots)} root(s)")
        start_time = time.time()

        found_files = []
        self.missing_roots = []

        # Progress throttling: update every N files to reduce output overhead
        progress_interval = 5000
        progress_counter = 0

        for path in self._unique_files(self.valid_roots()):
            found_files.append(path)
            progress_counter += 1

            if progress_callback and progress_counter >= progress_interval:
                progress_callback('scanning', len(found_files), None)
                progress_counter = 0

        # Final update for small datasets
        if progress_callback and progress_counter > 0:
            progress_callback('scanning', len(found_files), None)

        logger.debug(f"Total scan time: {time.time() - start_time:.2f} seconds")
        logger.debug(f"Scan completed. Found {len(found_files)} files.")
        return found_files

    def count_files(self) -> int:
        """
        Quiet pre-pass: how many files scan() would return.
        Missing roots are neither logged nor recorded here.
        """
        roots = [root for root in self.roots if Path(root).is_dir()]
        return sum(1 for _ in self._unique_files(roots))

    def _unique_files(self, roots: List[str]) -> Iterator[str]:
        """
        Walks roots in order and yields each physical file once.
        Identity is (st_dev, st_ino), so bind mounts, hard links and case variants
        of one file collapse to the first path reached.
        """
        seen: Set[Tuple[object, ...]] = set()
        for root in roots:
            for path in self._walk(root):
                key = self._file_identity(path)
                if key is None:
                    continue
                if key in seen:
                    logger.debug(f"Skipping file already reached through another path: {path}")
                    continue
                seen.add(key)
                yield path

    @staticmethod
    def _file_identity(path: str) -> Optional[Tuple[object, ...]]:
        try:
            st = os.stat(path)
        except OSError as e:
            logger.debug(f"Could not stat {path}: {e}")
            return None
        if st.st_ino == 0:
            # Filesystem without inode numbers
            return ("path", os.path.normcase(os.path.realpath(path)))
        return (st.st_dev, st.st_ino)

    def valid_roots(self) -> List[str]:
        """Roots that exist and are directories. Missing ones are reported and remembered."""
        valid = []
        for root in self.roots:
            root_path = Path(root)
            if not root_path.exists():
                logger.warning(f"Directory not found: {root}")
                self._remember_missing(root)
                continue
            if not root_path.is_dir():
                logger.warning(f"Not a directory: {root}")
                self._remember_missing(root)
                continue
            valid.append(root)
        return valid

    def _remember_missing(self, root: str) -> None:
        if root not in self.missing_roots:
            self.missing_roots.append(root)

    def _walk(self, root: str):
        for dirpath, dirs, files in os.walk(os.path.abspath(root), onerror=self._on_walk_error):
            # Pre-filter subdirectories BEFORE os.walk enters them
            dirs[:] = [d for d in dirs if self._prefilter_dirs(Path(dirpath) / d)]

            for filename in files:
                path = os.path.join(dirpath, filename)
                if self._is_regular_file(path):
                    yield path

    @staticmethod
    def _on_walk_error(error: OSError) -> None:
        logger.warning(f"Cannot read directory {error.filename}: {error.strerror}")

    @staticmethod
    def _is_regular_file(path: str) -> bool:
        try:
            if os.path.islink(path):
                logger.debug(f"Skipping symbolic link: {path}")
                return False
            return os.path.isfile(path)
        except OSError as e:
            logger.debug(f"Could not stat {path}: {e}")
            return False

    @staticmethod
    def _is_system_trash(path: Path) -> bool:
        """
        Check if path belongs to OS trash/recycle bin (cross-platform).
        Returns False on any error.
        """
        try:
            path_str = str(path.resolve(strict=False))

            if sys.platform == "win32":
                if "$Recycle.Bin" in path_str or "\\Recycler\\" in path_str:
                    return True
            elif sys.platform == "darwin":
                if "/.Trash/" in path_str or path_str.endswith("/.Trash"):
                    return True
            else:
                # Linux/BSD: freedesktop.org standard locations
                if ".local/share/Trash" in path_str or "/.trash/" in path_str:
                    return True

            return False
        except (OSError, ValueError):
            return False

    def _prefilter_dirs(self, path: Path) -> bool:
        """Skip system trash, symlinked directories and inaccessible locations."""
        if FileScannerImpl._is_system_trash(path):
            logger.debug(f"Skipping system trash directory: {path}")
            return False

        try:
            if path.is_symlink():
                logger.debug(f"Skipping symlinked directory: {path}")
                return False
            return path.is_dir()
        except OSError:
            logger.debug(f"Skipping inaccessible directory: {path}")
            return False
