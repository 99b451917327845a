"""
Caller and mountpoint checks shared by every chroot-aware hook.

Manifest runs always mount the target somewhere other than /, so a manifest
caller seeing / means the runner itself is broken. From the CLI it is merely
suspicious.
"""

from __future__ import annotations

from enum import Enum
from types import MappingProxyType

from archinstall_hooks.errors import BadHookCmd, InternalBug
from archinstall_hooks.shared import Caller

from .base import HookWrapper

NO_MOUNTPOINT = "/"


class MountVerdict(Enum):
    OK = "ok"
    HINT = "hint"
    BUG = "bug"


# (caller, root_location == "/") -> verdict
MOUNT_POLICY: MappingProxyType[tuple[Caller, bool], MountVerdict] = MappingProxyType(
    {
        (Caller.CLI, False): MountVerdict.OK,
        (Caller.CLI, True): MountVerdict.HINT,
        (Caller.MANIFEST_CHROOT, False): MountVerdict.OK,
        (Caller.MANIFEST_CHROOT, True): MountVerdict.BUG,
        (Caller.MANIFEST_POSTINSTALL, False): MountVerdict.OK,
        (Caller.MANIFEST_POSTINSTALL, True): MountVerdict.BUG,
    }
)


def check_mountpoint(hook: HookWrapper, caller: Caller, root_location: str) -> None:
    no_mount = root_location == NO_MOUNTPOINT
    verdict = MOUNT_POLICY[(caller, no_mount)]

    if no_mount:
        hook.print_warn(f"got {NO_MOUNTPOINT} as mountpoint")

    if verdict is MountVerdict.HINT:
        hook.print_warn("hint: use --mountpoint flag to specify non-/ mountpoint")
    elif verdict is MountVerdict.BUG:
        raise InternalBug(f"got {NO_MOUNTPOINT} as mountpoint for hook {hook.hook_key()}")

    if no_mount and hook.abort_if_no_mount():
        raise BadHookCmd(f"hook {hook.hook_key()} is to be run with a mountpoint")

    preferred = hook.preferred_callers()
    if caller not in preferred:
        hook.print_warn(f"non-preferred caller {caller}")
        names = ", ".join(sorted(str(c) for c in preferred))
        hook.print_warn(f"preferred callers: {names}")
