"""Assemble scan events into the clipboard document."""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from pathlib import Path

from dirclip.listing import DirectoryLister, display_path
from dirclip.scanner import DirectoryEvent, FileEvent, ScanEvent

logger = logging.getLogger(__name__)

DIRECTORY_HEADER = "\n=== Directory: {path} ===\n"
FILE_HEADER = "\n=== File: {path} ===\n"


@dataclass(frozen=True, slots=True)
class Document:
    """The assembled text plus counts for the summary.

    Attributes:
        text: Text delivered to the clipboard.
        file_count: Number of files whose contents were included.
        directory_count: Number of directory announcements.
        skipped: Files that passed the filters but could not be read.
    """

    text: str
    file_count: int
    directory_count: int
    skipped: tuple[Path, ...] = ()


def read_file_contents(path: Path) -> str:
    """Return the full UTF-8 text of *path* with newlines preserved.

    Raises:
        OSError: If the file cannot be opened or read.
        UnicodeDecodeError: If the file is not valid UTF-8.
    """
    with path.open("r", encoding="utf-8", newline="") as fh:
        return fh.read()


def assemble_document(
    events: Iterable[ScanEvent],
    lister: DirectoryLister,
    reader: Callable[[Path], str] = read_file_contents,
) -> Document:
    """Concatenate directory listings and file contents in event order.

    A directory whose listing fails still contributes its header. A file
    that cannot be read contributes nothing. Header paths are rendered
    with :func:`display_path`.

    Args:
        events: Scanner events in traversal order.
        lister: Directory listing provider.
        reader: File reader, ``read_file_contents`` by default.

    Returns:
        Document: Assembled text and counts.
    """
    parts: list[str] = []
    file_count = 0
    directory_count = 0
    skipped: list[Path] = []

    for event in events:
        if isinstance(event, DirectoryEvent):
            parts.append(DIRECTORY_HEADER.format(path=display_path(event.path)))
            directory_count += 1
            try:
                parts.append(lister.list_directory(event.path))
            except OSError as exc:
                logger.debug("Cannot list directory %s: %s", event.path, exc)
        elif isinstance(event, FileEvent):
            try:
                contents = reader(event.path)
            except (OSError, UnicodeDecodeError) as exc:
                logger.debug("Skipping unreadable file %s: %s", event.path, exc)
                skipped.append(event.path)
                continue
            parts.append(FILE_HEADER.format(path=display_path(event.path)))
            parts.append(contents)
            parts.append("\n")
            file_count += 1

    return Document(
        text="".join(parts),
        file_count=file_count,
        directory_count=directory_count,
        skipped=tuple(skipped),
    )
