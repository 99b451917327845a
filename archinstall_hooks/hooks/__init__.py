"""
Hook commands: parsing, validation and execution.

A hook command is a short line such as ``@uncomment Port /etc/ssh/sshd_config``.
Its first token selects the hook family and whether it only prints
(``-print`` suffix); the rest is parsed by the hook itself. ``@mnt`` and
``@no-mnt`` wrap another hook command and only change where it runs.
"""

from __future__ import annotations

from archinstall import debug

from archinstall_hooks.errors import BadArgs, BadManifest
from archinstall_hooks.shared import Caller
from archinstall_hooks.utils import tokenize

from . import keys
from .actions import ActionHook, dump_actions, load_actions
from .guard import check_mountpoint
from .mkinitcpio import MkinitcpioHook
from .quicknet import QuickNetHook
from .replace_token import ReplaceTokenHook
from .uncomment import UncommentHook
from .wrappers import MntWrapper, NoMntWrapper

HOOK_KEYS = keys.HOOK_KEYS

Hook = MntWrapper | NoMntWrapper | QuickNetHook | MkinitcpioHook | ReplaceTokenHook | UncommentHook

HOOK_PREFIX = "@"


def is_hook(cmd: str) -> bool:
    return cmd.startswith(HOOK_PREFIX)


def init_blank_hook(key: str) -> Hook:
    """Return an unparsed hook for key, or raise BadArgs for unknown keys."""
    match key:
        case keys.MNT:
            return MntWrapper(key)
        case keys.NO_MNT:
            return NoMntWrapper(key)
        case keys.QUICKNET | keys.QUICKNET_PRINT:
            return QuickNetHook(key)
        case keys.MKINITCPIO | keys.MKINITCPIO_PRINT:
            return MkinitcpioHook(key)
        case keys.REPLACE_TOKEN | keys.REPLACE_TOKEN_PRINT:
            return ReplaceTokenHook(key)
        case keys.UNCOMMENT | keys.UNCOMMENT_PRINT | keys.UNCOMMENT_ALL | keys.UNCOMMENT_ALL_PRINT:
            return UncommentHook(key)
        case _:
            raise BadArgs(f"unknown hook key: {key}")


def _parse_validate(cmd: str, caller: Caller, root_location: str) -> Hook:
    parts = tokenize(cmd)
    if not parts:
        raise BadManifest("empty hook")

    hook = init_blank_hook(parts[0])

    try:
        hook.try_parse(cmd)
    except Exception:
        hook.help()
        raise

    if hook.should_chroot():
        check_mountpoint(hook, caller, root_location)

    return hook


def apply_hook(cmd: str, caller: Caller, root_location: str) -> ActionHook:
    """Parse, validate and run a hook command, returning its audit record."""
    debug(f"Applying hook from {caller}: {cmd}")
    hook = _parse_validate(cmd, caller, root_location)
    return hook.run(caller, root_location)


def validate_hook(cmd: str, caller: Caller, root_location: str) -> None:
    """Check that cmd parses and is acceptable for caller, without running it."""
    _parse_validate(cmd, caller, root_location)


__all__ = [
    "HOOK_KEYS",
    "ActionHook",
    "Hook",
    "apply_hook",
    "dump_actions",
    "init_blank_hook",
    "is_hook",
    "load_actions",
    "validate_hook",
]
