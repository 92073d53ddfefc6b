"""
Exclusion pattern matching for files that must never be uploaded
"""
import re

from ..errors import ConfigError


def compile_patterns(raw_patterns):
    """
    Compile exclusion patterns.

    Args:
        raw_patterns: Iterable of regular expression strings or compiled patterns

    Returns:
        List of compiled patterns

    Raises:
        ConfigError: If a pattern is not a valid regular expression
    """
    compiled = []
    for pattern in raw_patterns or []:
        if isinstance(pattern, re.Pattern):
            compiled.append(pattern)
            continue
        try:
            compiled.append(re.compile(pattern))
        except re.error as e:
            raise ConfigError(f"Invalid exclusion pattern {pattern!r}: {e}") from e
    return compiled


def is_exception(filename, patterns) -> bool:
    """
    Check whether *filename* matches any exclusion pattern.

    Patterns match anywhere in the name (``re.search``), so anchor them
    with ``^``/``$`` for whole-name matches.

    Args:
        filename: Bare filename (no directory part)
        patterns: Sequence of compiled patterns or pattern strings

    Returns:
        True if any pattern matches, False for an empty pattern set
    """
    if not patterns:
        return False

    for pattern in patterns:
        if isinstance(pattern, re.Pattern):
            if pattern.search(filename):
                return True
        elif re.search(pattern, filename):
            return True
    return False
