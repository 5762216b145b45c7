"""
Segment-wise glob matching of ignore rules against path components
"""

from typing import Sequence

from .file_loader import IgnoreRule, DOUBLE_STAR


def match_segment(pattern: str, component: str) -> bool:
    """
    Match one pattern segment against one path component.

    '*' matches any run of characters (including none), '?' matches exactly
    one character, everything else matches itself. Backtracks to the most
    recent '*' on a mismatch.

    Args:
        pattern: Pattern segment, never containing '/'
        component: Path component

    Returns:
        True if the whole component matches the whole pattern
    """
    if pattern == DOUBLE_STAR:
        # Depth wildcards are resolved by match_segments
        return False

    p = 0
    c = 0
    star = -1
    star_component = 0

    while c < len(component):
        if p < len(pattern) and (pattern[p] == '?' or pattern[p] == component[c]):
            p += 1
            c += 1
        elif p < len(pattern) and pattern[p] == '*':
            star = p
            star_component = c
            p += 1
        elif star != -1:
            # Let the last '*' swallow one more character and retry
            p = star + 1
            star_component += 1
            c = star_component
        else:
            return False

    while p < len(pattern) and pattern[p] == '*':
        p += 1

    return p == len(pattern)


def match_segments(segments: Sequence[str], components: Sequence[str],
                   segment_index: int = 0, component_index: int = 0) -> bool:
    """
    Match a rule's segments against path components from the given cursors.

    A '**' segment absorbs zero or more whole components. Every absorption
    count is tried, so a '**' in the middle can backtrack. The match only
    succeeds when the components are fully consumed, or when every segment
    left over is '**'.

    Args:
        segments: Rule segments
        components: Path components relative to the rule's base
        segment_index: Cursor into segments
        component_index: Cursor into components

    Returns:
        True if the remaining segments match the remaining components
    """
    i = segment_index
    j = component_index

    while i < len(segments) and j < len(components):
        segment = segments[i]

        if segment == DOUBLE_STAR:
            if i == len(segments) - 1:
                return True
            for skip in range(len(components) - j + 1):
                if match_segments(segments, components, i + 1, j + skip):
                    return True
            return False

        if not match_segment(segment, components[j]):
            return False
        i += 1
        j += 1

    if i < len(segments):
        return all(segment == DOUBLE_STAR for segment in segments[i:])

    return j == len(components)


def rule_matches(rule: IgnoreRule, components: Sequence[str], is_directory: bool) -> bool:
    """
    Decide whether a single rule matches a path.

    Args:
        rule: Parsed ignore rule
        components: Path components relative to the rule's base
        is_directory: Whether the path is a directory

    Returns:
        True if the rule matches
    """
    if rule.directory_only and not is_directory:
        return False

    if not rule.segments or not components:
        return False

    if rule.anchored:
        return match_segments(rule.segments, components, 0, 0)

    # Unanchored rules behave as if prefixed with '**/'
    return any(
        match_segments(rule.segments, components, 0, start)
        for start in range(len(components))
    )
