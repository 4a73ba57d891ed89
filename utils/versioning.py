"""
Schema Version Helpers

Dotted-numeric versions ("1.2", "1.10.3") compared component by component.
Missing trailing components count as zero, so "1.2" == "1.2.0".
"""

import re
from typing import List, Tuple


_VERSION_RE = re.compile(r'^\d+(\.\d+)*$')


def is_valid_version(version: str) -> bool:
    """True for dotted non-negative integers such as "1", "1.2", "2.0.10" """
    if not isinstance(version, str):
        return False
    return bool(_VERSION_RE.match(version.strip()))


def parse_version(version: str) -> List[float]:
    """
    Split a version into numeric components

    Non-numeric components become NaN, which compares neither lower nor
    higher than anything. Callers that need a strict answer must check
    is_valid_version() first.
    """
    parts = []
    for part in str(version).split('.'):
        try:
            parts.append(int(part))
        except ValueError:
            parts.append(float('nan'))
    return parts


def compare_versions(a: str, b: str) -> int:
    """
    Compare two schema versions

    Returns:
        -1 if a < b, 0 if a == b, 1 if a > b
    """
    parts_a = parse_version(a)
    parts_b = parse_version(b)

    for i in range(max(len(parts_a), len(parts_b))):
        num_a = parts_a[i] if i < len(parts_a) else 0
        num_b = parts_b[i] if i < len(parts_b) else 0
        if num_a < num_b:
            return -1
        if num_a > num_b:
            return 1
    return 0


def version_key(version: str) -> Tuple[float, ...]:
    """
    Hashable form of a version for lookups

    Trailing zero components are dropped so "1.0", "1.0.0" and "1" share
    a key, matching compare_versions().
    """
    parts = parse_version(version)
    while len(parts) > 1 and parts[-1] == 0:
        parts.pop()
    return tuple(parts)
