from __future__ import annotations

import shlex
from pathlib import Path

from archinstall_hooks.errors import BadHookCmd
from archinstall_hooks.shared import Caller


def tokenize(cmd: str) -> list[str]:
    """Split a hook command the way a POSIX shell would (quotes respected)."""
    try:
        return shlex.split(cmd)
    except ValueError as e:
        raise BadHookCmd(f"bad hook command {cmd!r}: {e}") from e


def split_whitespace(s: str) -> list[str]:
    return s.split()


def fmt_shell_array(name: str, elems: list[str]) -> str:
    """Render a bash array assignment, e.g. HOOKS=(base udev)."""
    return f"{name}=({' '.join(elems)})"


def resolve_target(caller: Caller, root_location: str, path: str) -> Path:
    """Map a hook file argument to the path to operate on.

    Postinstall and CLI hooks run outside the new root, so their paths are
    prefixed with the mountpoint. Chroot hooks already see the new root.
    """
    if caller in (Caller.MANIFEST_POSTINSTALL, Caller.CLI):
        return Path(root_location) / path.lstrip("/")
    return Path(path)
