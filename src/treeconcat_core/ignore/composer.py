"""
Composition of per-directory rule sets, root first
"""

from pathlib import Path
from typing import Iterable, List, Optional, Tuple

from src.utils import get_logger
from ..constants import IGNORE_FILENAME
from .file_loader import IgnoreFileLoader, IgnoreRule

logger = get_logger(__name__)

RuleSet = Tuple[IgnoreRule, ...]

EMPTY_RULE_SET: RuleSet = ()


def extend_rule_set(parent: RuleSet, rules: Iterable[IgnoreRule]) -> RuleSet:
    """Return a new rule set with rules appended; the parent is left untouched"""
    rules = tuple(rules)
    if not rules:
        return parent
    return tuple(parent) + rules


def compose_child_rule_set(parent: RuleSet, child_dir: Path,
                           ignore_filename: str = IGNORE_FILENAME,
                           loader: Optional[IgnoreFileLoader] = None) -> RuleSet:
    """
    Derive the rule set for a subdirectory.

    The child's own ignore file, if present, is appended to the inherited
    rules. Siblings never see each other's local rules.

    Args:
        parent: Rule set in effect for the parent directory
        child_dir: Subdirectory being entered
        ignore_filename: Name of ignore files
        loader: Loader to use (a default one is created if omitted)

    Returns:
        Rule set for the child's entries
    """
    loader = loader or IgnoreFileLoader(ignore_filename)
    info = loader.load_directory(Path(child_dir))
    if info.rules:
        logger.debug(f"Adding {len(info.rules)} rules from {info.path}")
    return extend_rule_set(parent, info.rules)


def ancestor_directories(root: Path) -> List[Path]:
    """List root and every ancestor directory, filesystem root first"""
    root = Path(root).resolve()
    directories = [root]
    directories.extend(root.parents)
    directories.reverse()
    return directories


def gather_root_rule_set(root: Path,
                         ignore_filename: str = IGNORE_FILENAME,
                         loader: Optional[IgnoreFileLoader] = None) -> RuleSet:
    """
    Seed the rule set for the scan root.

    Ignore files in every ancestor of the root apply too, so they are
    collected walking upward and then applied root-to-leaf.

    Args:
        root: Directory the scan starts at
        ignore_filename: Name of ignore files
        loader: Loader to use (a default one is created if omitted)

    Returns:
        Rule set for the root's entries
    """
    loader = loader or IgnoreFileLoader(ignore_filename)
    rule_set = EMPTY_RULE_SET

    for directory in ancestor_directories(root):
        info = loader.load_directory(directory)
        if info.rules:
            logger.info(f"Using {len(info.rules)} rules from {info.path}")
        rule_set = extend_rule_set(rule_set, info.rules)

    return rule_set
