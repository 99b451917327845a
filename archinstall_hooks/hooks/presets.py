"""
Boot hook presets for mkinitcpio.

Each preset is a pre-expanded HOOKS array for a common root filesystem setup.
Users may spell a preset in several ways; the alias tables below are the only
accepted spellings.
"""

from __future__ import annotations

from enum import Enum
from types import MappingProxyType


class BootHookPreset(Enum):
    LVM = "lvm"
    LUKS = "luks"
    LVM_ON_LUKS = "lvm_on_luks"
    LUKS_ON_LVM = "luks_on_lvm"


_HOOKS_HEAD = "base udev autodetect modconf kms keyboard keymap consolefont block"

PRESET_HOOKS: MappingProxyType[BootHookPreset, str] = MappingProxyType(
    {
        BootHookPreset.LVM: f"{_HOOKS_HEAD} lvm2 filesystems fsck",
        BootHookPreset.LUKS: f"{_HOOKS_HEAD} encrypt filesystems fsck",
        BootHookPreset.LVM_ON_LUKS: f"{_HOOKS_HEAD} encrypt lvm2 filesystems fsck",
        BootHookPreset.LUKS_ON_LVM: f"{_HOOKS_HEAD} lvm2 encrypt filesystems fsck",
    }
)

ALIASES_ROOT_LVM: tuple[str, ...] = (
    "root-on-lvm",
    "root_on_lvm",
    "root-lvm",
    "root_lvm",
    "lvm-root",
    "lvm_root",
    "lvm",
)

ALIASES_ROOT_LUKS: tuple[str, ...] = (
    "root-on-luks",
    "root_on_luks",
    "root-luks",
    "root_luks",
    "luks-root",
    "luks_root",
    "luks",
)

ALIASES_ROOT_LVM_ON_LUKS: tuple[str, ...] = (
    "root-on-lvm-on-luks",
    "root_on_lvm_on_luks",
    "lvm-on-luks-root",
    "lvm_on_luks_root",
    "root-lvm-on-luks",
    "root_lvm_on_luks",
    "lvm-on-luks",
    "lvm_on_luks",
)

ALIASES_ROOT_LUKS_ON_LVM: tuple[str, ...] = (
    "root-on-luks-on-lvm",
    "root_on_luks_on_lvm",
    "luks-on-lvm-root",
    "luks_on_lvm_root",
    "root-luks-on-lvm",
    "root_luks_on_lvm",
    "luks-on-lvm",
    "luks_on_lvm",
)

_ALIAS_TABLES: tuple[tuple[BootHookPreset, tuple[str, ...]], ...] = (
    (BootHookPreset.LVM, ALIASES_ROOT_LVM),
    (BootHookPreset.LUKS, ALIASES_ROOT_LUKS),
    (BootHookPreset.LVM_ON_LUKS, ALIASES_ROOT_LVM_ON_LUKS),
    (BootHookPreset.LUKS_ON_LVM, ALIASES_ROOT_LUKS_ON_LVM),
)


def resolve_preset(alias: str) -> BootHookPreset | None:
    """Return the preset spelled by alias, or None if no table knows it."""
    for preset, aliases in _ALIAS_TABLES:
        if alias in aliases:
            return preset
    return None


def preset_hooks(preset: BootHookPreset) -> list[str]:
    return PRESET_HOOKS[preset].split()
