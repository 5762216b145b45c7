#!/usr/bin/env python3
"""
Tests for composing rule sets across directory levels
"""

import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

from src.treeconcat_core.ignore import (
    EMPTY_RULE_SET,
    compose_child_rule_set,
    extend_rule_set,
    gather_root_rule_set,
    is_ignored,
    parse_ignore_lines,
)
from src.treeconcat_core.ignore.composer import ancestor_directories


def patterns(rule_set):
    return [str(rule) for rule in rule_set]


def test_extend_does_not_mutate_parent():
    parent = tuple(parse_ignore_lines(["*.log"]))
    child = extend_rule_set(parent, parse_ignore_lines(["*.tmp"]))

    assert patterns(parent) == ["*.log"]
    assert patterns(child) == ["*.log", "*.tmp"]


def test_extend_with_nothing_returns_parent():
    parent = tuple(parse_ignore_lines(["*.log"]))
    assert extend_rule_set(parent, []) is parent


def test_child_appends_local_rules(make_tree):
    root = make_tree({
        "a/.gitignore": "*.tmp\n",
        "b/.gitignore": "*.bak\n",
    })
    parent = tuple(parse_ignore_lines(["*.log"], base=root))

    rules_a = compose_child_rule_set(parent, root / "a")
    rules_b = compose_child_rule_set(parent, root / "b")

    assert patterns(rules_a) == ["*.log", "*.tmp"]
    assert patterns(rules_b) == ["*.log", "*.bak"]
    assert patterns(parent) == ["*.log"]


def test_child_without_ignore_file_inherits(tmp_path):
    (tmp_path / "plain").mkdir()
    parent = tuple(parse_ignore_lines(["*.log"], base=tmp_path))
    assert compose_child_rule_set(parent, tmp_path / "plain") == parent


def test_child_rules_are_based_at_child(make_tree):
    root = make_tree({"sub/.gitignore": "/local.txt\n"})
    rule_set = compose_child_rule_set(EMPTY_RULE_SET, root / "sub")

    assert is_ignored(rule_set, root / "sub" / "local.txt", False)
    assert not is_ignored(rule_set, root / "sub" / "deeper" / "local.txt", False)


def test_deeper_negation_overrides_parent(make_tree):
    root = make_tree({
        ".gitignore": "*.log\n",
        "logs/.gitignore": "!keep.log\n",
    })
    root_rules = gather_root_rule_set(root)
    child_rules = compose_child_rule_set(root_rules, root / "logs")

    assert is_ignored(child_rules, root / "logs" / "drop.log", False)
    assert not is_ignored(child_rules, root / "logs" / "keep.log", False)
    assert is_ignored(root_rules, root / "keep.log", False)


def test_root_rules_include_ancestors(make_tree):
    base = make_tree({
        ".gitignore": "*.log\n",
        "project/.gitignore": "!app.log\n",
        "project/src/x.py": "",
    })
    rule_set = gather_root_rule_set(base / "project" / "src")

    assert patterns(rule_set)[-2:] == ["*.log", "!app.log"]
    assert rule_set[-2].base == base.resolve()
    assert rule_set[-1].base == (base / "project").resolve()


def test_ancestor_directories_are_root_first(tmp_path):
    dirs = ancestor_directories(tmp_path)
    assert dirs[-1] == tmp_path.resolve()
    assert dirs[0] == Path(tmp_path.resolve().anchor)
    assert len(dirs) == len(tmp_path.resolve().parts)


def test_custom_ignore_filename(make_tree):
    root = make_tree({"sub/.treeignore": "*.bak\n", "sub/.gitignore": "*.log\n"})
    rule_set = compose_child_rule_set(EMPTY_RULE_SET, root / "sub", ignore_filename=".treeignore")
    assert patterns(rule_set) == ["*.bak"]
