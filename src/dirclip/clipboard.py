"""Clipboard sinks: native clipboard via pyperclip or an xsel helper process."""

from __future__ import annotations

import subprocess
from typing import Protocol

import pyperclip

from dirclip import ClipboardError


class ClipboardSink(Protocol):
    """Protocol for clipboard destinations."""

    def copy(self, text: str) -> None: ...


class NativeClipboard:
    """Copy through the platform clipboard API exposed by pyperclip."""

    def copy(self, text: str) -> None:
        try:
            pyperclip.copy(text)
        except pyperclip.PyperclipException as exc:
            raise ClipboardError(f"clipboard unavailable: {exc}") from exc
        except UnicodeEncodeError as exc:
            raise ClipboardError(f"cannot encode text for the clipboard: {exc}") from exc


class XselClipboard:
    """Copy by piping text into ``xsel -b`` (the X11 clipboard selection)."""

    def __init__(self, command: tuple[str, ...] = ("xsel", "-b")) -> None:
        self.command = command

    def copy(self, text: str) -> None:
        """Write *text* to the helper's stdin and wait for it to exit.

        Raises:
            ClipboardError: If the helper is missing, exits non-zero, or the
                text cannot be encoded as UTF-8.
        """
        try:
            subprocess.run(
                list(self.command),
                input=text,
                encoding="utf-8",
                check=True,
            )
        except UnicodeEncodeError as exc:
            raise ClipboardError(
                f"cannot encode text for '{self.command[0]}': {exc}"
            ) from exc
        except FileNotFoundError as exc:
            raise ClipboardError(f"'{self.command[0]}' not found on PATH") from exc
        except subprocess.CalledProcessError as exc:
            raise ClipboardError(
                f"'{self.command[0]}' exited with status {exc.returncode}"
            ) from exc
        except OSError as exc:
            raise ClipboardError(f"cannot run '{self.command[0]}': {exc}") from exc


def get_clipboard(use_x11: bool = False) -> ClipboardSink:
    """Return the clipboard sink selected by ``-x/--x11``."""
    if use_x11:
        return XselClipboard()
    return NativeClipboard()
