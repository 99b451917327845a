"""
Exception hierarchy for hook parsing, validation and execution.

Every error raised by this package derives from HooksError so callers can
decide in one place whether to abort a whole manifest run.
"""

from __future__ import annotations


class HooksError(Exception):
    """Base class for all archinstall_hooks errors."""


class BadManifest(HooksError):
    """Structurally invalid manifest or hook line."""


class BadArgs(HooksError):
    """Unknown hook key or otherwise invalid arguments."""


class BadHookCmd(HooksError):
    """Malformed hook command (argument count, duplicate keys, bad alias)."""


class HookError(HooksError):
    """Runtime failure specific to a hook's semantics."""


class FileError(HooksError):
    """I/O failure on a hook target file."""

    def __init__(self, err: OSError, context: str) -> None:
        super().__init__(f"{context}: {err}")
        self.err = err
        self.context = context


class HookNotImplemented(HooksError, NotImplementedError):
    """Declared-incomplete code path."""


class InternalBug(HooksError):
    """Invariant violation in the caller or guard logic itself."""


class NoSuchDevice(HooksError):
    """Block device named in the manifest does not exist."""


class CmdFailed(HooksError):
    """External command failed to spawn or exited with a bad status."""
