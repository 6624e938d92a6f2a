"""dirclip — copy directory listings and file contents to the clipboard."""

__version__ = "0.1.0"


class DirclipError(Exception):
    """User-facing CLI error.

    Raised for invalid arguments, unusable root directories, and
    clipboard failures. The message is printed to stderr and the
    process exits with code 1.
    """


class ConfigError(DirclipError):
    """Invalid flag or filter pattern, detected before any I/O."""


class PathError(DirclipError):
    """Root directory is missing, not a directory, or unreadable."""


class ClipboardError(DirclipError):
    """The assembled document could not be delivered to the clipboard."""
