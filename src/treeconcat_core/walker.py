#!/usr/bin/env python3
"""
Depth-first traversal that concatenates non-ignored text files.

Each directory level receives its own rule set; an ignored directory is
pruned and never entered. Per-entry failures are logged and counted, and
traversal carries on with the next entry.
"""

import logging
import os
import shutil
import threading
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import BinaryIO, Callable, List, Optional

from src.utils import get_logger, log_with_context

from .binary_detection import is_binary_file
from .config import ConcatConfig
from .constants import COPY_CHUNK_SIZE, FILE_HEADER_PREFIX
from .errors import OutputError
from .ignore import IgnoreFileLoader, RuleSet, compose_child_rule_set, gather_root_rule_set, is_ignored

logger = get_logger(__name__)

SEPARATOR = b"\n\n"


@dataclass
class WalkStats:
    """Summary of one traversal"""
    files_written: int = 0
    bytes_written: int = 0
    ignored_entries: int = 0
    binary_skipped: int = 0
    read_failures: int = 0
    cancelled: bool = False


class TreeWalker:
    """
    Walks a directory tree and writes every surviving file to an output stream
    """

    def __init__(self,
                 config: ConcatConfig,
                 out: BinaryIO,
                 stop_event: Optional[threading.Event] = None,
                 binary_detector: Optional[Callable[[Path], bool]] = None):
        """
        Args:
            config: Run configuration
            out: Binary stream receiving headers and file contents
            stop_event: Set it to stop the walk after the current entry
            binary_detector: Replaces the sampling heuristic when given
        """
        self.config = config
        self.out = out
        self.stop_event = stop_event
        self.binary_detector = binary_detector or self._detect_binary
        self.loader = IgnoreFileLoader(config.ignore_filename)
        self.root = config.validate_root()
        self.stats = WalkStats()
        self._excluded_paths = {config.output_path.resolve()}
        self._visited_dirs = set()

    def run(self) -> WalkStats:
        """Walk from the root and return the summary"""
        rule_set = gather_root_rule_set(self.root, self.config.ignore_filename, self.loader)
        logger.info(f"Scanning {self.root} with {len(rule_set)} inherited rules")
        self._process_directory(self.root, rule_set)

        log_with_context(
            logger, logging.INFO,
            f"Wrote {self.stats.files_written} files ({self.stats.bytes_written} bytes), "
            f"ignored {self.stats.ignored_entries} entries, skipped {self.stats.binary_skipped} binary files, "
            f"{self.stats.read_failures} read failures",
            **asdict(self.stats)
        )
        return self.stats

    def _process_directory(self, directory: Path, rule_set: RuleSet):
        real_dir = directory.resolve()
        if real_dir in self._visited_dirs:
            logger.warning(f"Skipping {directory}: already visited through a symlink")
            return
        self._visited_dirs.add(real_dir)

        for entry in self._list_entries(directory):
            if self.stop_event is not None and self.stop_event.is_set():
                self.stats.cancelled = True
                return

            path = Path(entry.path)
            if entry.name == self.config.ignore_filename:
                continue
            if not os.path.exists(entry.path):
                logger.debug(f"Skipping {path}: dangling symlink")
                continue
            if path.resolve() in self._excluded_paths:
                continue

            try:
                is_directory = entry.is_dir(follow_symlinks=self.config.follow_symlinks)
            except OSError as e:
                logger.error(f"Cannot stat {path}: {e}")
                self.stats.read_failures += 1
                continue

            if is_ignored(rule_set, path, is_directory):
                self.stats.ignored_entries += 1
                continue

            if is_directory:
                child_rules = compose_child_rule_set(rule_set, path, self.config.ignore_filename, self.loader)
                self._process_directory(path, child_rules)
                if self.stats.cancelled:
                    return
            else:
                self._emit_file(path)

    def _list_entries(self, directory: Path) -> List[os.DirEntry]:
        try:
            with os.scandir(directory) as it:
                entries = list(it)
        except OSError as e:
            logger.error(f"Cannot list directory {directory}: {e}")
            self.stats.read_failures += 1
            return []

        if self.config.sort_entries:
            entries.sort(key=lambda entry: entry.name)
        return entries

    def _detect_binary(self, path: Path) -> bool:
        return is_binary_file(path, self.config.binary_sample_size, self.config.binary_threshold)

    def _display_path(self, path: Path) -> str:
        """Path as it appears in headers, the root exactly as given joined with the rest"""
        return os.path.join(str(self.config.root), *path.relative_to(self.root).parts)

    def _emit_file(self, path: Path):
        try:
            if self.binary_detector(path):
                logger.debug(f"Skipping binary file {path}")
                self.stats.binary_skipped += 1
                return
            src = open(path, 'rb')
        except OSError as e:
            logger.error(f"Failed to open file: {path}: {e}")
            self.stats.read_failures += 1
            return

        header = f"{FILE_HEADER_PREFIX}{self._display_path(path)}".encode('utf-8', 'surrogateescape')
        with src:
            self.out.write(header + SEPARATOR)
            try:
                shutil.copyfileobj(src, self.out, COPY_CHUNK_SIZE)
            except OSError as e:
                logger.error(f"Failed while copying {path}: {e}")
                self.stats.read_failures += 1
                self.out.write(SEPARATOR)
                return
            self.out.write(SEPARATOR)
            self.stats.bytes_written += src.tell()

        self.stats.files_written += 1
        logger.trace(f"Wrote {path}")


def open_output(path: Path) -> BinaryIO:
    """
    Create the output file.

    Raises:
        OutputError: If it cannot be created
    """
    try:
        return open(path, 'wb')
    except OSError as e:
        raise OutputError(path, e.strerror or str(e)) from e


def concatenate_directory(config: ConcatConfig,
                          stop_event: Optional[threading.Event] = None) -> WalkStats:
    """
    Validate the root, create the output and run the walk.

    Raises:
        InvalidRootError: If the root is missing or not a directory
        OutputError: If the output file cannot be created
    """
    config.validate_root()
    with open_output(config.output_path) as out:
        walker = TreeWalker(config, out, stop_event=stop_event)
        return walker.run()
