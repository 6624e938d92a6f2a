"""Name matching: glob filter for file names and fnmatch-based exclusion."""

from __future__ import annotations

from fnmatch import fnmatch, fnmatchcase


def _validate_glob(pattern: str) -> None:
    """Reject glob patterns with unbalanced brackets or misplaced ``**``.

    Args:
        pattern: Glob pattern to check.

    Raises:
        ValueError: If the pattern is malformed.
    """
    i = 0
    n = len(pattern)
    while i < n:
        ch = pattern[i]
        if ch == "*" and pattern.startswith("**", i):
            before_ok = i == 0 or pattern[i - 1] == "/"
            after_ok = i + 2 == n or pattern[i + 2] == "/"
            if not (before_ok and after_ok):
                raise ValueError(
                    f"Invalid filter pattern '{pattern}': "
                    "recursive wildcards must form a single path component"
                )
            i += 2
            continue
        if ch == "[":
            # A ']' directly after '[' or '[!' is a literal member of the class.
            j = i + 1
            if j < n and pattern[j] == "!":
                j += 1
            if j < n and pattern[j] == "]":
                j += 1
            while j < n and pattern[j] != "]":
                j += 1
            if j >= n:
                raise ValueError(
                    f"Invalid filter pattern '{pattern}': unclosed character class"
                )
            i = j + 1
            continue
        i += 1


class FilterPattern:
    """A glob pattern matched against a file's base name only.

    Matching is case-sensitive and supports ``*``, ``?``, ``[...]`` and
    ``[!...]``.
    """

    def __init__(self, pattern: str) -> None:
        """Compile and validate a filter pattern.

        An empty pattern is valid and matches no file name.

        Args:
            pattern: Glob pattern such as ``*.py``.

        Raises:
            ValueError: If the pattern is malformed.
        """
        _validate_glob(pattern)
        self.pattern = pattern

    def matches(self, name: str) -> bool:
        return fnmatchcase(name, self.pattern)

    def __repr__(self) -> str:
        return f"FilterPattern({self.pattern!r})"


class PatternFilter:
    """Filter entries by fnmatch patterns.

    Implements ``-I PATTERN`` exclusion behavior.
    """

    def __init__(self, patterns: list[str] | None = None) -> None:
        self._patterns: list[str] = list(patterns) if patterns else []

    def should_exclude(self, name: str, is_dir: bool) -> bool:
        """Return whether an entry should be excluded.

        Args:
            name: Entry name.
            is_dir: Whether the entry is a directory.

        Returns:
            bool: ``True`` when any configured pattern matches.
        """
        return any(fnmatch(name, pat) for pat in self._patterns)
