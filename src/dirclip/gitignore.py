"""Gitignore integration — load .gitignore patterns via pathspec."""

from __future__ import annotations

import logging
from pathlib import Path

from pathspec import GitIgnoreSpec

logger = logging.getLogger(__name__)


class IgnoreRuleSet:
    """Exclusion rules compiled from a ``.gitignore`` file.

    Paths are matched relative to ``base``, the directory holding the
    ignore file. Paths outside ``base`` are never excluded.
    """

    def __init__(self, spec: GitIgnoreSpec, base: Path) -> None:
        self._spec = spec
        self.base = base

    @classmethod
    def from_lines(cls, lines: list[str], base: Path) -> IgnoreRuleSet:
        """Compile gitignore pattern lines.

        Raises:
            ValueError: If a pattern cannot be compiled.
        """
        return cls(GitIgnoreSpec.from_lines(lines), base)

    def is_excluded(self, path: Path, is_dir: bool = False) -> bool:
        """Return whether *path* is excluded by the rules.

        Evaluation errors are treated as "not excluded".

        Args:
            path: Path under ``base``.
            is_dir: Whether *path* is a directory, enabling ``dir/`` patterns.

        Returns:
            bool: ``True`` when the rules exclude the path.
        """
        try:
            rel = path.relative_to(self.base).as_posix()
        except ValueError:
            return False
        if rel == ".":
            return False
        if is_dir:
            rel += "/"
        try:
            return bool(self._spec.match_file(rel))
        except (ValueError, TypeError) as exc:
            logger.debug("Cannot evaluate ignore rules for %s: %s", path, exc)
            return False


def load_ignore_rules(root: Path) -> IgnoreRuleSet | None:
    """Load .gitignore patterns from *root* directory.

    Args:
        root: Directory containing the ``.gitignore`` file.

    Returns:
        A rule set when a ``.gitignore`` exists, is readable and parses,
        otherwise ``None``.
    """
    gitignore_path = root / ".gitignore"
    try:
        lines = gitignore_path.read_text(encoding="utf-8").splitlines()
    except (OSError, UnicodeDecodeError):
        logger.debug("Cannot read .gitignore: %s", gitignore_path)
        return None
    try:
        return IgnoreRuleSet.from_lines(lines, root)
    except (ValueError, TypeError) as exc:
        logger.debug("Cannot parse .gitignore %s: %s", gitignore_path, exc)
        return None
