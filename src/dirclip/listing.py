"""Directory listers producing a long-format text listing for a directory."""

from __future__ import annotations

import os
import stat
import subprocess
from datetime import datetime
from pathlib import Path
from typing import Protocol


def display_path(path: str | os.PathLike[str]) -> str:
    """Return *path* as text, replacing bytes that are not valid UTF-8.

    Names that the filesystem stores as arbitrary bytes are decoded by
    Python with surrogate escapes, which cannot be encoded for the
    clipboard. They are shown with U+FFFD instead.
    """
    return os.fsencode(path).decode("utf-8", errors="replace")


class DirectoryLister(Protocol):
    """Protocol for directory listing providers.

    Implementations return the listing as text or raise ``OSError``.
    """

    def list_directory(self, path: Path) -> str: ...


class LsLister:
    """List directories by running ``ls -l``."""

    def __init__(self, command: tuple[str, ...] = ("ls", "-l")) -> None:
        self.command = command

    def list_directory(self, path: Path) -> str:
        """Return ``ls -l`` output for *path*.

        Bytes in the output that are not valid UTF-8 are replaced.

        Raises:
            OSError: If ``ls`` is missing or exits non-zero.
        """
        try:
            result = subprocess.run(
                [*self.command, str(path)],
                capture_output=True,
                check=True,
            )
        except subprocess.CalledProcessError as exc:
            stderr = exc.stderr.decode("utf-8", errors="replace").strip()
            raise OSError(
                f"{self.command[0]} exited with {exc.returncode}: {stderr}"
            ) from exc
        return result.stdout.decode("utf-8", errors="replace")


def _format_row(st: os.stat_result, name: str) -> str:
    mtime = datetime.fromtimestamp(st.st_mtime).strftime("%b %d %H:%M")
    return f"{stat.filemode(st.st_mode)} {st.st_nlink:>3} {st.st_size:>10} {mtime} {name}"


class NativeLister:
    """List directories in-process with ``os.scandir``.

    Output resembles ``ls -l``: a ``total`` line with the space used in
    1K blocks, followed by one row per non-hidden entry, sorted by name.
    """

    def list_directory(self, path: Path) -> str:
        rows: list[str] = []
        blocks = 0
        with os.scandir(path) as it:
            entries = sorted(
                (e for e in it if not e.name.startswith(".")), key=lambda e: e.name
            )
        for entry in entries:
            try:
                st = entry.stat(follow_symlinks=False)
            except OSError:
                continue
            blocks += getattr(st, "st_blocks", 0)
            name = display_path(entry.name)
            if stat.S_ISLNK(st.st_mode):
                try:
                    name = f"{name} -> {display_path(os.readlink(entry.path))}"
                except OSError:
                    pass
            rows.append(_format_row(st, name))
        # st_blocks counts 512-byte units; ls reports 1K blocks.
        lines = [f"total {(blocks + 1) // 2}", *rows]
        return "\n".join(lines) + "\n"


LISTERS: dict[str, type[LsLister] | type[NativeLister]] = {
    "ls": LsLister,
    "native": NativeLister,
}


def get_lister(name: str) -> DirectoryLister:
    """Return a lister instance by name.

    Raises:
        ValueError: If ``name`` is not a known lister.
    """
    if name not in LISTERS:
        known = ", ".join(sorted(LISTERS))
        raise ValueError(f"Unknown lister '{name}'. Known listers: {known}")
    return LISTERS[name]()
