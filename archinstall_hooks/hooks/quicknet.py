from __future__ import annotations

from archinstall import info
from pydantic import BaseModel, ConfigDict

from archinstall_hooks.errors import BadHookCmd, FileError, InternalBug
from archinstall_hooks.shared import Caller, ModeHook
from archinstall_hooks.utils import resolve_target, tokenize

from .actions import ActionQuickNet
from .base import HookWrapper
from .keys import QUICKNET, QUICKNET_PRINT

DNS_KEYWORD = "dns"
NETWORKD_DIR = "/etc/systemd/network"


class QuickNetConfig(BaseModel):
    model_config = ConfigDict(frozen=True)

    interface: str
    dns: str | None = None
    print_only: bool = False

    @property
    def unit_path(self) -> str:
        return f"{NETWORKD_DIR}/{self.interface}.network"

    def render(self) -> str:
        """systemd-networkd unit bringing the interface up with DHCP."""
        lines = [
            "[Match]",
            f"Name={self.interface}",
            "",
            "[Network]",
            "DHCP=yes",
        ]
        if self.dns:
            lines.append(f"DNS={self.dns}")
        return "\n".join(lines) + "\n"


def parse_quicknet(cmd: str) -> QuickNetConfig:
    """
    Parse a quicknet hook command.

    @quicknet [dns <DNS_UPSTREAM>] <INTERFACE>
    """
    parts = tokenize(cmd)
    key = parts[0] if parts else ""
    if key not in (QUICKNET, QUICKNET_PRINT):
        raise InternalBug(f"got bad hook cmd: {key}")

    print_only = key == QUICKNET_PRINT

    if len(parts) == 2:
        return QuickNetConfig(interface=parts[1], print_only=print_only)

    if len(parts) == 4:
        if parts[1] != DNS_KEYWORD:
            raise BadHookCmd(f"{QUICKNET}: unexpected argument {parts[1]}, expecting 1st argument to be `{DNS_KEYWORD}`")
        return QuickNetConfig(interface=parts[3], dns=parts[2], print_only=print_only)

    raise BadHookCmd(f"{QUICKNET}: bad cmd parts: {len(parts)}")


class QuickNetHook(HookWrapper):
    base_key = QUICKNET
    usage = "[dns <DNS_UPSTREAM>] <INTERFACE>"

    def __init__(self, key: str) -> None:
        super().__init__(key)
        self.config: QuickNetConfig | None = None

    def should_chroot(self) -> bool:
        return True

    def preferred_callers(self) -> frozenset[Caller]:
        return frozenset({Caller.MANIFEST_CHROOT, Caller.MANIFEST_POSTINSTALL})

    def abort_if_no_mount(self) -> bool:
        # Printing the unit is harmless without a mountpoint
        return self.mode() is ModeHook.NORMAL

    def try_parse(self, cmd: str) -> None:
        self.config = parse_quicknet(cmd)

    def run(self, caller: Caller, root_location: str) -> ActionQuickNet:
        qn = self.config
        if qn is None:
            raise self.not_parsed()

        unit = qn.render()
        if qn.print_only:
            print(unit, end="")
        else:
            target = resolve_target(caller, root_location, qn.unit_path)
            try:
                target.parent.mkdir(parents=True, exist_ok=True)
                target.write_text(unit)
            except OSError as e:
                raise FileError(e, f"{QUICKNET}: write networkd unit to {target}") from e
            info(f"Wrote DHCP network unit for {qn.interface} to {target}")

        return ActionQuickNet(interface=qn.interface, dns=qn.dns, file=qn.unit_path)
