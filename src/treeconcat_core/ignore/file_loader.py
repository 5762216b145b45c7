"""
File loader for parsing and validating ignore files
"""

from pathlib import Path
from typing import List, Optional, Dict, Tuple
from dataclasses import dataclass, field

import pathspec

from src.utils import get_logger
from ..constants import IGNORE_FILENAME, MAX_IGNORE_FILE_SIZE, UNSUPPORTED_PATTERN_CHARS

logger = get_logger(__name__)

DOUBLE_STAR = '**'


@dataclass(frozen=True)
class IgnoreRule:
    """One parsed line of an ignore file"""
    pattern: str
    segments: Tuple[str, ...]
    negate: bool = False
    directory_only: bool = False
    anchored: bool = False
    base: Optional[Path] = None  # Directory the defining ignore file lives in
    source: Optional[Path] = None
    line: int = 0

    def __str__(self) -> str:
        text = self.pattern
        if self.anchored:
            text = '/' + text
        if self.directory_only:
            text += '/'
        if self.negate:
            text = '!' + text
        return text

    @property
    def origin(self) -> str:
        """Human-readable location of the rule, for diagnostics"""
        if self.source is None:
            return '<inline>'
        return f"{self.source}:{self.line}"


@dataclass
class ValidationWarning:
    """Represents a validation warning in an ignore file"""
    line: int
    pattern: str
    message: str


@dataclass
class IgnoreFileInfo:
    """Information about a loaded ignore file"""
    path: Path
    rules: List[IgnoreRule] = field(default_factory=list)
    warnings: List[ValidationWarning] = field(default_factory=list)
    stats: Dict[str, int] = field(default_factory=dict)
    readable: bool = True

    @property
    def has_warnings(self) -> bool:
        """Check if file has warnings"""
        return len(self.warnings) > 0


def parse_ignore_line(line: str,
                      base: Optional[Path] = None,
                      source: Optional[Path] = None,
                      line_number: int = 0) -> Optional[IgnoreRule]:
    """
    Parse one line of an ignore file.

    Blank lines and comments yield None, as does any line that reduces to
    no path segments once its markers are stripped. Nothing is rejected
    outright: characters outside the supported syntax are matched literally.

    Args:
        line: Raw line text
        base: Directory the rule is relative to
        source: Ignore file the line came from
        line_number: 1-based line number in the source

    Returns:
        IgnoreRule or None
    """
    text = line.strip()
    if not text or text.startswith('#'):
        return None

    negate = False
    if text.startswith('!'):
        negate = True
        text = text[1:].strip()

    directory_only = False
    if text.endswith('/'):
        directory_only = True
        text = text[:-1]

    anchored = False
    if text.startswith('/'):
        anchored = True
        text = text[1:]

    # Consecutive slashes collapse
    segments = tuple(segment for segment in text.split('/') if segment)
    if not segments:
        return None

    return IgnoreRule(
        pattern=text,
        segments=segments,
        negate=negate,
        directory_only=directory_only,
        anchored=anchored,
        base=base,
        source=source,
        line=line_number,
    )


def parse_ignore_lines(lines: List[str], base: Optional[Path] = None,
                       source: Optional[Path] = None) -> List[IgnoreRule]:
    """Parse a sequence of lines, dropping blanks and comments"""
    rules = []
    for line_number, line in enumerate(lines, 1):
        rule = parse_ignore_line(line, base=base, source=source, line_number=line_number)
        if rule is not None:
            rules.append(rule)
    return rules


class IgnoreFileLoader:
    """
    Handles loading, parsing, and validating ignore files
    """

    def __init__(self, ignore_filename: str = IGNORE_FILENAME):
        """
        Initialize loader

        Args:
            ignore_filename: Name of ignore files to look for
        """
        self.ignore_filename = ignore_filename

    def load_directory(self, directory: Path) -> IgnoreFileInfo:
        """Load the ignore file that belongs to a directory, if any"""
        return self.load_file(directory / self.ignore_filename)

    def load_file(self, file_path: Path) -> IgnoreFileInfo:
        """
        Load and validate an ignore file

        A missing or unreadable file yields an info object with no rules.

        Args:
            file_path: Path to the ignore file

        Returns:
            IgnoreFileInfo with rules and validation results
        """
        info = IgnoreFileInfo(
            path=file_path,
            stats={
                'total_lines': 0,
                'empty_lines': 0,
                'comment_lines': 0,
                'pattern_lines': 0,
            }
        )

        if not file_path.is_file():
            info.readable = False
            return info

        try:
            file_size = file_path.stat().st_size
            if file_size > MAX_IGNORE_FILE_SIZE:
                logger.warning(f"Skipping {file_path}: {file_size} bytes exceeds {MAX_IGNORE_FILE_SIZE}")
                info.readable = False
                return info

            with open(file_path, 'r', encoding='utf-8', errors='replace') as f:
                lines = f.read().splitlines()
        except OSError as e:
            logger.warning(f"Could not read {file_path}: {e}")
            info.readable = False
            return info

        info.stats['total_lines'] = len(lines)
        base = file_path.parent

        for line_num, line in enumerate(lines, 1):
            stripped = line.strip()

            if not stripped:
                info.stats['empty_lines'] += 1
                continue

            if stripped.startswith('#'):
                info.stats['comment_lines'] += 1
                continue

            info.stats['pattern_lines'] += 1

            rule = parse_ignore_line(line, base=base, source=file_path, line_number=line_num)
            if rule is None:
                info.warnings.append(ValidationWarning(
                    line=line_num,
                    pattern=stripped,
                    message="Pattern has no path segments and is ignored"
                ))
                continue

            info.rules.append(rule)
            for warning_msg in self._check_pattern_warnings(stripped):
                info.warnings.append(ValidationWarning(
                    line=line_num,
                    pattern=stripped,
                    message=warning_msg
                ))

        for warning in info.warnings:
            logger.debug(f"{file_path}:{warning.line}: '{warning.pattern}': {warning.message}")
        logger.debug(f"Loaded {len(info.rules)} rules from {file_path} "
                     f"({info.stats['pattern_lines']} patterns, {info.stats['comment_lines']} comments, "
                     f"{info.stats['empty_lines']} blank of {info.stats['total_lines']} lines)")
        return info

    def _check_pattern_warnings(self, pattern: str) -> List[str]:
        """
        Check pattern for constructs that are not interpreted as git would

        Args:
            pattern: Stripped pattern line

        Returns:
            List of warning messages
        """
        warnings = []

        for char in UNSUPPORTED_PATTERN_CHARS:
            if char in pattern:
                warnings.append(f"'{char}' is matched literally, not as gitignore syntax")

        try:
            pathspec.GitIgnoreSpec.from_lines([pattern])
        except ValueError as e:
            warnings.append(f"Not a valid gitignore pattern ({e})")

        if pattern.lstrip('!').strip('/') in ('*', DOUBLE_STAR, '**/*'):
            warnings.append("Very broad pattern - will exclude everything below this directory")

        return warnings


_default_loader = IgnoreFileLoader()


def parse_ignore_file(path: Path) -> List[IgnoreRule]:
    """
    Parse an ignore file into rules based at the file's directory.

    Missing or unreadable files produce an empty list.
    """
    return list(_default_loader.load_file(Path(path)).rules)
