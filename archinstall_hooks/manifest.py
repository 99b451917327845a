from __future__ import annotations

from pathlib import Path

from archinstall import debug, info
from pydantic import BaseModel, Field, ValidationError

from archinstall_hooks.disk import ManifestDisk
from archinstall_hooks.errors import BadManifest, FileError
from archinstall_hooks.hooks import ActionHook, apply_hook, is_hook, validate_hook
from archinstall_hooks.shared import Caller
from archinstall_hooks.utils.shell import run_shell


class ManifestHooks(BaseModel):
    """The parts of an installation manifest this package executes."""

    disks: list[ManifestDisk] = Field(default_factory=list)
    chroot: list[str] = Field(default_factory=list)
    postinstall: list[str] = Field(default_factory=list)


def load_manifest(path: Path) -> ManifestHooks:
    try:
        raw = path.read_text()
    except OSError as e:
        raise FileError(e, f"read manifest {path}") from e

    try:
        return ManifestHooks.model_validate_json(raw)
    except ValidationError as e:
        raise BadManifest(f"{path}: {e}") from e


def _entries(manifest: ManifestHooks) -> list[tuple[Caller, str]]:
    return [(Caller.MANIFEST_CHROOT, cmd) for cmd in manifest.chroot] + [
        (Caller.MANIFEST_POSTINSTALL, cmd) for cmd in manifest.postinstall
    ]


def validate_manifest_hooks(manifest: ManifestHooks, mountpoint: str) -> None:
    """Pre-flight every hook entry without executing anything."""
    for caller, cmd in _entries(manifest):
        if is_hook(cmd):
            validate_hook(cmd, caller, mountpoint)


def apply_manifest_hooks(
    manifest: ManifestHooks, mountpoint: str, actions: list[ActionHook] | None = None
) -> list[ActionHook]:
    """Run chroot then postinstall entries in order.

    Hook entries go through apply_hook, anything else is a shell command run
    inside arch-chroot (chroot) or on the live system (postinstall). The first
    failure propagates; earlier entries are not rolled back, and their records
    are already in actions when one is passed in.
    """
    if actions is None:
        actions = []
    for caller, cmd in _entries(manifest):
        if is_hook(cmd):
            actions.append(apply_hook(cmd, caller, mountpoint))
            continue

        debug(f"{caller}: running shell command: {cmd}")
        if caller is Caller.MANIFEST_CHROOT:
            run_shell(cmd, chroot=mountpoint)
        else:
            run_shell(cmd)

    info(f"Applied {len(actions)} hooks")
    return actions
