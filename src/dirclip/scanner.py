"""Core directory scanner using os.scandir with explicit stack (DFS).

The scanner turns a directory tree into an ordered stream of
:class:`DirectoryEvent` and :class:`FileEvent` records. A directory is
announced once, right before the first file from it that passes the
filter and ignore checks.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Iterator
from dataclasses import dataclass
from pathlib import Path
from typing import Protocol, Union

from dirclip import PathError
from dirclip.filter import FilterPattern
from dirclip.gitignore import IgnoreRuleSet

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class Entry:
    """A single filesystem entry discovered during scanning.

    Attributes:
        path: Path of the entry, built from the scan root.
        name: Basename of the entry.
        is_dir: Whether the entry is a directory.
        depth: Parent directory depth from scanning root.
        parent_path: Parent directory path.
    """

    path: Path
    name: str
    is_dir: bool
    depth: int
    parent_path: Path


@dataclass(frozen=True, slots=True)
class DirectoryEvent:
    """A directory is entered and should be announced with its listing."""

    path: Path


@dataclass(frozen=True, slots=True)
class FileEvent:
    """A file passed all filters and its contents should be included."""

    path: Path


ScanEvent = Union[DirectoryEvent, FileEvent]


class EntryFilter(Protocol):
    """Protocol for name-based entry exclusion."""

    def should_exclude(self, name: str, is_dir: bool) -> bool: ...


@dataclass(frozen=True, slots=True)
class ScanConfig:
    """Options controlling one scan.

    Attributes:
        root: Root directory to scan.
        recursive: Whether to descend below the root's immediate children.
        filter_pattern: Optional glob matched against file base names.
        ignore_rules: Optional gitignore rule set.
        exclude: Optional name-based exclusion filter (``-I``).
    """

    root: Path
    recursive: bool = False
    filter_pattern: FilterPattern | None = None
    ignore_rules: IgnoreRuleSet | None = None
    exclude: EntryFilter | None = None


def should_process(
    path: Path,
    filter_pattern: FilterPattern | None,
    ignore_rules: IgnoreRuleSet | None,
) -> bool:
    """Return whether a file should contribute to the output.

    Ignore rules win over the filter pattern. The filter pattern only
    sees the base name.

    Args:
        path: File path.
        filter_pattern: Optional glob for the base name.
        ignore_rules: Optional exclusion rules.

    Returns:
        bool: ``True`` when the file passes both checks.
    """
    if ignore_rules is not None and ignore_rules.is_excluded(path):
        return False
    if filter_pattern is not None:
        return filter_pattern.matches(path.name)
    return True


def _walk_files(
    root: Path,
    max_depth: int | None,
    ignore_rules: IgnoreRuleSet | None,
    exclude: EntryFilter | None,
) -> Iterator[Entry]:
    """Yield regular files under *root* in deterministic DFS order.

    Entries of a directory are sorted by name. All files of a directory
    are yielded before any of its subdirectories is entered. Symlinks
    are neither followed nor yielded.

    Args:
        root: Directory to walk.
        max_depth: Maximum parent depth to visit. ``0`` visits only the
            immediate children of *root*; ``None`` means unlimited.
        ignore_rules: Rules used to prune ignored directories.
        exclude: Optional name-based exclusion filter.
    """
    # Stack items: (directory_path, depth)
    stack: list[tuple[Path, int]] = [(root, 0)]

    while stack:
        current_dir, depth = stack.pop()

        if max_depth is not None and depth > max_depth:
            continue

        try:
            with os.scandir(current_dir) as it:
                raw_entries = list(it)
        except OSError:
            logger.debug("Cannot list directory: %s", current_dir)
            continue

        raw_entries.sort(key=lambda e: e.name)

        child_dirs: list[tuple[Path, int]] = []

        for dir_entry in raw_entries:
            name = dir_entry.name
            try:
                is_dir = dir_entry.is_dir(follow_symlinks=False)
                is_file = dir_entry.is_file(follow_symlinks=False)
            except OSError:
                logger.debug("Cannot stat: %s", dir_entry.path)
                continue

            if not (is_dir or is_file):
                continue

            if exclude is not None and exclude.should_exclude(name, is_dir):
                continue

            path = current_dir / name

            if is_dir:
                if ignore_rules is not None and ignore_rules.is_excluded(
                    path, is_dir=True
                ):
                    logger.debug("Ignored directory: %s", path)
                    continue
                child_dirs.append((path, depth + 1))
                continue

            yield Entry(
                path=path,
                name=name,
                is_dir=False,
                depth=depth,
                parent_path=current_dir,
            )

        # Push children in reverse so first-alphabetical is popped first
        for child in reversed(child_dirs):
            stack.append(child)


def directory_has_match(dir_path: Path, config: ScanConfig) -> bool:
    """Return whether any file below *dir_path* passes :func:`should_process`.

    The search covers the whole subtree in recursive mode and only the
    immediate children otherwise.
    """
    max_depth = None if config.recursive else 0
    return any(
        should_process(entry.path, config.filter_pattern, config.ignore_rules)
        for entry in _walk_files(
            dir_path, max_depth, config.ignore_rules, config.exclude
        )
    )


def _check_root(root: Path) -> None:
    """Validate that *root* is a listable directory.

    Raises:
        PathError: If *root* is missing, not a directory, or unreadable.
    """
    if not root.exists():
        raise PathError(f"'{root}' does not exist")
    if not root.is_dir():
        raise PathError(f"'{root}' is not a directory")
    try:
        with os.scandir(root):
            pass
    except OSError as exc:
        raise PathError(f"cannot read directory '{root}': {exc.strerror}") from exc


def _scan_events(config: ScanConfig) -> Iterator[ScanEvent]:
    max_depth = None if config.recursive else 0
    last_directory: Path | None = None

    for entry in _walk_files(
        config.root, max_depth, config.ignore_rules, config.exclude
    ):
        if not should_process(entry.path, config.filter_pattern, config.ignore_rules):
            continue

        parent = entry.parent_path
        if parent != last_directory and (
            not config.recursive or directory_has_match(parent, config)
        ):
            yield DirectoryEvent(parent)
            last_directory = parent

        yield FileEvent(entry.path)


def scan(config: ScanConfig) -> Iterator[ScanEvent]:
    """Scan the configured root and return events in deterministic DFS order.

    The root is validated immediately; the events themselves are produced
    lazily as the returned iterator is consumed.

    Args:
        config: Scan configuration.

    Returns:
        Iterator[ScanEvent]: Directory announcements and file visits.

    Raises:
        PathError: If the root directory is missing or unreadable.
    """
    _check_root(config.root)
    return _scan_events(config)
