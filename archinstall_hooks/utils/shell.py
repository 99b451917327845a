from __future__ import annotations

import shlex

from archinstall import debug, error
from archinstall.lib.exceptions import SysCallError
from archinstall.lib.general import SysCommand

from archinstall_hooks.errors import CmdFailed


def run_cmd(cmd: str) -> str:
    """Run cmd to completion and return its decoded output.

    Raises CmdFailed if the command cannot be spawned or exits non-zero.
    """
    debug(f"Running: {cmd}")
    try:
        return SysCommand(cmd).decode()
    except SysCallError as e:
        error(f"Command failed: {cmd}: {e!s}")
        raise CmdFailed(f"command {cmd} exited with bad status: {e!s}") from e


def run_shell(script: str, chroot: str | None = None) -> str:
    """Run a shell snippet with sh -c, optionally inside arch-chroot."""
    cmd = f"sh -c {shlex.quote(script)}"
    if chroot is not None:
        cmd = f"arch-chroot {shlex.quote(chroot)} {cmd}"
    return run_cmd(cmd)
