from __future__ import annotations

from pydantic import BaseModel, ConfigDict

from archinstall_hooks.errors import BadHookCmd, HookNotImplemented
from archinstall_hooks.shared import Caller
from archinstall_hooks.utils import fmt_shell_array, split_whitespace, tokenize

from .actions import ActionMkinitcpio
from .base import HookWrapper
from .guard import check_mountpoint
from .keys import MKINITCPIO, MKINITCPIO_PRINT
from .presets import BootHookPreset, preset_hooks, resolve_preset


class MkinitcpioConfig(BaseModel):
    model_config = ConfigDict(frozen=True)

    boot_hook: BootHookPreset | None = None
    binaries: list[str] | None = None
    hooks: list[str] | None = None
    print_only: bool = True

    def resolved_hooks(self) -> list[str] | None:
        """Explicit hooks, or the preset expansion when boot_hook is set."""
        if self.boot_hook is not None:
            return preset_hooks(self.boot_hook)
        return self.hooks

    def render(self) -> list[str]:
        """BINARIES=(...) and HOOKS=(...) lines for the arrays actually set."""
        lines: list[str] = []
        if self.binaries is not None:
            lines.append(fmt_shell_array("BINARIES", self.binaries))
        hooks = self.resolved_hooks()
        if hooks is not None:
            lines.append(fmt_shell_array("HOOKS", hooks))
        return lines


def parse_mkinitcpio(cmd: str) -> MkinitcpioConfig:
    """
    Parse a mkinitcpio hook command.

    @mkinitcpio[-print] [boot_hook=<PRESET>] [binaries="<BIN>..."] [hooks="<HOOK>..."]

    Tokens without '=' and unknown keys are ignored. Duplicate keys, an
    unknown preset, or boot_hook together with hooks are rejected.
    """
    parts = tokenize(cmd)
    if len(parts) < 2:
        raise BadHookCmd(f"{MKINITCPIO}: need at least 1 argument")

    key = parts[0]
    if key not in (MKINITCPIO, MKINITCPIO_PRINT):
        raise BadHookCmd(f"{MKINITCPIO}: unknown hook command {key}")

    boot_hook: BootHookPreset | None = None
    binaries: list[str] | None = None
    hooks: list[str] | None = None
    seen: set[str] = set()

    for arg in parts[1:]:
        if "=" not in arg:
            continue
        k, v = arg.split("=", 1)
        if k in seen:
            raise BadHookCmd(f"{MKINITCPIO}: duplicate key {k}")
        seen.add(k)

        if k == "boot_hook":
            boot_hook = resolve_preset(v)
            if boot_hook is None:
                raise BadHookCmd(f"{MKINITCPIO}: no such boot_hook preset: {v}")
        elif k == "binaries":
            binaries = split_whitespace(v)
        elif k == "hooks":
            hooks = split_whitespace(v)

    if boot_hook is not None and hooks is not None:
        raise BadHookCmd(f"{key}: boot_hook and hooks are mutually exclusive, but found both")

    return MkinitcpioConfig(
        boot_hook=boot_hook,
        binaries=binaries,
        hooks=hooks,
        print_only=key == MKINITCPIO_PRINT,
    )


class MkinitcpioHook(HookWrapper):
    base_key = MKINITCPIO
    usage = '[boot_hook=<PRESET>] [binaries="<BINARY>..."] [hooks="<HOOK>..."]'

    def __init__(self, key: str) -> None:
        super().__init__(key)
        self.config: MkinitcpioConfig | None = None

    def should_chroot(self) -> bool:
        return True

    def preferred_callers(self) -> frozenset[Caller]:
        return frozenset({Caller.MANIFEST_CHROOT, Caller.CLI})

    def abort_if_no_mount(self) -> bool:
        return False

    def try_parse(self, cmd: str) -> None:
        self.config = parse_mkinitcpio(cmd)

    def run(self, caller: Caller, root_location: str) -> ActionMkinitcpio:
        if self.config is None:
            raise self.not_parsed()

        if self.config.print_only:
            for line in self.config.render():
                print(line)

            return ActionMkinitcpio(
                boot_hook=self.config.boot_hook,
                binaries=self.config.binaries,
                hooks=self.config.resolved_hooks(),
                print_only=True,
            )

        check_mountpoint(self, caller, root_location)

        raise HookNotImplemented(f"{MKINITCPIO}: write files")
