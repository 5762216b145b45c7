"""
Ignore file processing module for treeconcat

This module provides a multi-level ignore file system that supports:
- .gitignore files at every directory level, including above the scan root
- Segment-wise glob matching with '*', '?' and '**'
- Anchored, directory-only and negated rules
- Last-match-wins precedence across composed rule sets
"""

from ..constants import IGNORE_FILENAME
from .file_loader import (
    IgnoreFileInfo,
    IgnoreFileLoader,
    IgnoreRule,
    ValidationWarning,
    parse_ignore_file,
    parse_ignore_line,
    parse_ignore_lines,
)
from .matcher import match_segment, match_segments, rule_matches
from .rule_engine import MatchResult, explain, is_ignored, path_components
from .composer import (
    EMPTY_RULE_SET,
    RuleSet,
    compose_child_rule_set,
    extend_rule_set,
    gather_root_rule_set,
)

__all__ = [
    'IGNORE_FILENAME',
    'IgnoreFileInfo',
    'IgnoreFileLoader',
    'IgnoreRule',
    'ValidationWarning',
    'parse_ignore_file',
    'parse_ignore_line',
    'parse_ignore_lines',
    'match_segment',
    'match_segments',
    'rule_matches',
    'MatchResult',
    'explain',
    'is_ignored',
    'path_components',
    'EMPTY_RULE_SET',
    'RuleSet',
    'compose_child_rule_set',
    'extend_rule_set',
    'gather_root_rule_set',
]
