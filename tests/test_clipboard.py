"""Tests for dirclip.clipboard — clipboard sinks."""

from __future__ import annotations

import shutil
import subprocess

import pyperclip
import pytest

from dirclip import ClipboardError
from dirclip.clipboard import NativeClipboard, XselClipboard, get_clipboard


class TestNativeClipboard:
    def test_copies_via_pyperclip(self, monkeypatch: pytest.MonkeyPatch) -> None:
        copied: list[str] = []
        monkeypatch.setattr(pyperclip, "copy", copied.append)
        NativeClipboard().copy("hello")
        assert copied == ["hello"]

    def test_failure_raises_clipboard_error(
        self, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        def broken_copy(text: str) -> None:
            raise pyperclip.PyperclipException("no clipboard mechanism")

        monkeypatch.setattr(pyperclip, "copy", broken_copy)
        with pytest.raises(ClipboardError, match="clipboard unavailable"):
            NativeClipboard().copy("hello")


    def test_unencodable_text_raises_clipboard_error(
        self, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        def strict_copy(text: str) -> None:
            text.encode("utf-8")

        monkeypatch.setattr(pyperclip, "copy", strict_copy)
        with pytest.raises(ClipboardError, match="cannot encode"):
            NativeClipboard().copy("bad\udcff")


class TestXselClipboard:
    def test_pipes_text_to_helper(self, monkeypatch: pytest.MonkeyPatch) -> None:
        calls: list[tuple[list[str], str]] = []

        def fake_run(cmd, **kwargs):
            calls.append((cmd, kwargs["input"]))
            return subprocess.CompletedProcess(cmd, 0)

        monkeypatch.setattr(subprocess, "run", fake_run)
        XselClipboard().copy("payload")
        assert calls == [(["xsel", "-b"], "payload")]

    def test_missing_helper(self) -> None:
        sink = XselClipboard(command=("definitely-not-a-real-xsel-binary", "-b"))
        with pytest.raises(ClipboardError, match="not found"):
            sink.copy("payload")

    def test_helper_failure(self, monkeypatch: pytest.MonkeyPatch) -> None:
        def fake_run(cmd, **kwargs):
            raise subprocess.CalledProcessError(1, cmd)

        monkeypatch.setattr(subprocess, "run", fake_run)
        with pytest.raises(ClipboardError, match="exited with status 1"):
            XselClipboard().copy("payload")

    @pytest.mark.skipif(shutil.which("cat") is None, reason="cat not available")
    def test_unencodable_text_raises_clipboard_error(self) -> None:
        with pytest.raises(ClipboardError, match="cannot encode"):
            XselClipboard(command=("cat",)).copy("bad\udcff")


class TestGetClipboard:
    def test_default_is_native(self) -> None:
        assert isinstance(get_clipboard(), NativeClipboard)

    def test_x11_selects_xsel(self) -> None:
        assert isinstance(get_clipboard(use_x11=True), XselClipboard)
