"""
Mountpoint wrappers around another hook command.

``@mnt <HOOK_CMD>`` runs the inner hook with its file arguments resolved
under the mountpoint, whichever caller issued it. ``@no-mnt <HOOK_CMD>`` runs
the inner hook against the live system (``/``). Only the mountpoint handling
changes: the mode, the parsing and the audit record all come from the inner
hook.
"""

from __future__ import annotations

from archinstall import debug

from archinstall_hooks.errors import BadHookCmd, InternalBug
from archinstall_hooks.shared import ALL_CALLERS, Caller, ModeHook
from archinstall_hooks.utils import tokenize

from .actions import ActionHook
from .base import HookWrapper
from .keys import MNT, NO_MNT, WRAPPER_KEYS

LIVE_ROOT = "/"


def extract_key_and_inner(cmd: str) -> tuple[str, str]:
    """Split a wrapper command into its key and the untouched inner hook command."""
    parts = cmd.strip().split(maxsplit=1)
    if not parts:
        raise InternalBug("wrapper hook: got 0 parts")
    if len(parts) < 2:
        raise BadHookCmd(f"{parts[0]}: missing inner hook command")
    return parts[0], parts[1]


class _MountWrapper(HookWrapper):
    usage = "<HOOK_CMD>"

    def __init__(self, key: str) -> None:
        super().__init__(key)
        self.inner: HookWrapper | None = None

    def mode(self) -> ModeHook:
        if self.inner is None:
            return super().mode()
        return self.inner.mode()

    def preferred_callers(self) -> frozenset[Caller]:
        return ALL_CALLERS

    def try_parse(self, cmd: str) -> None:
        # The registry module imports this one
        from . import init_blank_hook

        key, inner_cmd = extract_key_and_inner(cmd)
        if key != self.base_key:
            raise InternalBug(f"got bad hook cmd: {key}")

        inner_key = tokenize(inner_cmd)[0]
        if inner_key in WRAPPER_KEYS:
            raise BadHookCmd(f"{self.base_key}: cannot wrap another wrapper ({inner_key})")

        inner = init_blank_hook(inner_key)
        try:
            inner.try_parse(inner_cmd)
        except Exception:
            inner.help()
            raise
        self.inner = inner
        debug(f"{self.base_key}: wrapping {inner.hook_key()}")


class MntWrapper(_MountWrapper):
    """Resolve the inner hook's paths under the mountpoint."""

    base_key = MNT

    def should_chroot(self) -> bool:
        return True

    def abort_if_no_mount(self) -> bool:
        return True

    def run(self, caller: Caller, root_location: str) -> ActionHook:
        if self.inner is None:
            raise self.not_parsed()

        # Chroot callers would get paths verbatim; postinstall ones are joined under the mountpoint
        if caller is Caller.MANIFEST_CHROOT:
            caller = Caller.MANIFEST_POSTINSTALL
        return self.inner.run(caller, root_location)


class NoMntWrapper(_MountWrapper):
    """Run the inner hook against the live system."""

    base_key = NO_MNT

    def should_chroot(self) -> bool:
        return False

    def abort_if_no_mount(self) -> bool:
        return False

    def run(self, caller: Caller, root_location: str) -> ActionHook:
        if self.inner is None:
            raise self.not_parsed()

        if root_location != LIVE_ROOT:
            debug(f"{self.base_key}: ignoring mountpoint {root_location}")
        return self.inner.run(caller, LIVE_ROOT)
