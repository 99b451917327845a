from __future__ import annotations

from enum import Enum


class Caller(Enum):
    """Context a hook was invoked from."""

    MANIFEST_CHROOT = "chroot"
    MANIFEST_POSTINSTALL = "postinstall"
    CLI = "cli"

    def __str__(self) -> str:
        if self is Caller.CLI:
            return "subcommand `hooks`"
        return f"manifest key `{self.value}`"


class ModeHook(Enum):
    """Whether a hook may write changes to disk."""

    NORMAL = "normal"
    PRINT = "print"  # read-only, idempotent


ALL_CALLERS: frozenset[Caller] = frozenset(Caller)
