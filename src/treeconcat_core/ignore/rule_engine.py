"""
Ignore decisions over ordered rule sets with last-match-wins precedence
"""

from pathlib import Path, PurePath
from typing import Optional, Sequence, Tuple, Union
from dataclasses import dataclass

from src.utils import get_logger
from .file_loader import IgnoreRule
from .matcher import rule_matches

logger = get_logger(__name__)

PathLike = Union[str, PurePath]


@dataclass(frozen=True)
class MatchResult:
    """Result of matching a path against ignore rules"""
    should_ignore: bool
    matched_rule: Optional[IgnoreRule] = None

    @property
    def matched_pattern(self) -> Optional[str]:
        return str(self.matched_rule) if self.matched_rule is not None else None


def path_components(path: PathLike, base: Optional[Path] = None) -> Optional[Tuple[str, ...]]:
    """
    Split a candidate path into components relative to a rule's base.

    Relative candidates are taken as already relative to the base. An
    absolute candidate outside the base yields None.
    """
    candidate = PurePath(path)
    if base is not None and candidate.is_absolute():
        try:
            candidate = candidate.relative_to(base)
        except ValueError:
            return None
    return tuple(part for part in candidate.parts if part not in ('', '.'))


def explain(rule_set: Sequence[IgnoreRule], path: PathLike, is_directory: bool) -> MatchResult:
    """
    Evaluate every rule in order and report the verdict and the deciding rule.

    The last matching rule wins: a plain rule ignores the path, a negated
    rule re-includes it. All rules are evaluated every time.

    Args:
        rule_set: Ordered rules, root first
        path: Candidate path, absolute or relative to the rules' base
        is_directory: Whether the candidate is a directory

    Returns:
        MatchResult with decision and the last matching rule
    """
    ignored = False
    deciding_rule = None
    components_by_base = {}

    for rule in rule_set:
        if rule.base not in components_by_base:
            components_by_base[rule.base] = path_components(path, rule.base)
        components = components_by_base[rule.base]
        if components is None:
            continue

        if rule_matches(rule, components, is_directory):
            ignored = not rule.negate
            deciding_rule = rule

    return MatchResult(should_ignore=ignored, matched_rule=deciding_rule)


def is_ignored(rule_set: Sequence[IgnoreRule], path: PathLike, is_directory: bool) -> bool:
    """
    Return True if the path is ignored by the rule set

    Args:
        rule_set: Ordered rules, root first
        path: Candidate path, absolute or relative to the rules' base
        is_directory: Whether the candidate is a directory
    """
    result = explain(rule_set, path, is_directory)
    if result.matched_rule is not None:
        logger.trace(f"{path}: {'ignored' if result.should_ignore else 'included'} "
                     f"by '{result.matched_pattern}' ({result.matched_rule.origin})")
    return result.should_ignore
