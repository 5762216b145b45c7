"""
Explain why a single path would or would not be written
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from src.utils import get_logger

from .config import ConcatConfig
from .ignore import IgnoreFileLoader, MatchResult, compose_child_rule_set, explain, gather_root_rule_set

logger = get_logger(__name__)


@dataclass(frozen=True)
class PathExplanation:
    """Verdict for one path, including pruning by an ignored ancestor"""
    path: Path
    result: MatchResult
    pruned_at: Optional[Path] = None

    @property
    def should_ignore(self) -> bool:
        return self.result.should_ignore

    def describe(self) -> str:
        if self.pruned_at is not None:
            return (f"{self.path}: ignored (inside ignored directory {self.pruned_at}, "
                    f"rule '{self.result.matched_pattern}' at {self.result.matched_rule.origin})")
        if self.result.matched_rule is None:
            return f"{self.path}: included (no matching rule)"
        verdict = 'ignored' if self.result.should_ignore else 'included'
        return f"{self.path}: {verdict} by '{self.result.matched_pattern}' at {self.result.matched_rule.origin}"


def explain_path(config: ConcatConfig, path: Path) -> PathExplanation:
    """
    Replay the walk's rule composition down to one path.

    Directories between the root and the path are checked first: an ignored
    ancestor prunes the path exactly as the walker would.

    Raises:
        InvalidRootError: If the root is missing or not a directory
        ValueError: If the path is not inside the root
    """
    root = config.validate_root()
    target = Path(path).resolve()
    relative = target.relative_to(root)

    loader = IgnoreFileLoader(config.ignore_filename)
    rule_set = gather_root_rule_set(root, config.ignore_filename, loader)

    current = root
    for part in relative.parts[:-1]:
        current = current / part
        result = explain(rule_set, current, True)
        if result.should_ignore:
            return PathExplanation(path=Path(path), result=result, pruned_at=current)
        rule_set = compose_child_rule_set(rule_set, current, config.ignore_filename, loader)

    result = explain(rule_set, target, target.is_dir())
    logger.debug(f"Explained {target} with {len(rule_set)} rules")
    return PathExplanation(path=Path(path), result=result)
