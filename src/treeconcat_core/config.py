#!/usr/bin/env python3
"""
Run configuration for treeconcat.

Values come from command line arguments, with environment variable overrides
for the output path, ignore filename and entry ordering.
"""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Union

from src.utils import get_logger

from .constants import (
    BINARY_SAMPLE_SIZE,
    BINARY_THRESHOLD,
    IGNORE_FILENAME,
    OUTPUT_FILENAME,
)
from .errors import InvalidRootError

logger = get_logger(__name__)

TRUE_VALUES = ('true', '1', 'yes', 'on')


@dataclass
class ConcatConfig:
    """Settings for one concatenation run"""
    root: Path
    output_path: Path
    ignore_filename: str = IGNORE_FILENAME
    sort_entries: bool = False
    binary_sample_size: int = BINARY_SAMPLE_SIZE
    binary_threshold: float = BINARY_THRESHOLD
    follow_symlinks: bool = True

    def __post_init__(self):
        """Validate configuration"""
        self.root = Path(self.root)
        self.output_path = Path(self.output_path)
        if not self.ignore_filename or '/' in self.ignore_filename:
            raise ValueError(f"ignore_filename must be a plain file name, got {self.ignore_filename!r}")
        if self.binary_sample_size <= 0:
            raise ValueError(f"binary_sample_size must be positive, got {self.binary_sample_size}")
        if not 0.0 <= self.binary_threshold <= 1.0:
            raise ValueError(f"binary_threshold must be between 0 and 1, got {self.binary_threshold}")

    def validate_root(self) -> Path:
        """
        Check that the root exists and is a directory.

        Returns:
            The resolved root path

        Raises:
            InvalidRootError: If the root is missing or not a directory
        """
        if not self.root.exists():
            raise InvalidRootError(self.root, "Invalid directory")
        if not self.root.is_dir():
            raise InvalidRootError(self.root, "Not a directory")
        return self.root.resolve()

    @classmethod
    def from_sources(cls,
                     root: Union[str, Path],
                     output: Optional[Union[str, Path]] = None,
                     sort_entries: Optional[bool] = None) -> 'ConcatConfig':
        """
        Build a config from explicit arguments, falling back to the environment.

        Args:
            root: Directory to scan
            output: Output file path (TREECONCAT_OUTPUT, then combined.txt in the cwd)
            sort_entries: Sort directory entries (TREECONCAT_SORT when None)
        """
        if output is None:
            output = os.environ.get('TREECONCAT_OUTPUT') or Path.cwd() / OUTPUT_FILENAME

        if sort_entries is None:
            sort_entries = os.environ.get('TREECONCAT_SORT', '').lower() in TRUE_VALUES

        ignore_filename = os.environ.get('TREECONCAT_IGNORE_FILENAME', IGNORE_FILENAME)

        config = cls(
            root=Path(root),
            output_path=Path(output),
            ignore_filename=ignore_filename,
            sort_entries=sort_entries,
        )
        logger.debug(f"Config: root={config.root}, output={config.output_path}, "
                     f"ignore_filename={config.ignore_filename}, sort={config.sort_entries}")
        return config
