"""
Tests for the quicknet (systemd-networkd DHCP) hook.
"""

from pathlib import Path

import pytest
from archinstall_hooks.errors import BadHookCmd
from archinstall_hooks.hooks import apply_hook
from archinstall_hooks.hooks.quicknet import parse_quicknet
from archinstall_hooks.shared import Caller

ETH0_UNIT = "[Match]\nName=eth0\n\n[Network]\nDHCP=yes\n"


class TestParseQuickNet:
    """Test quicknet command parsing."""

    def test_interface_only(self) -> None:
        """Test the short form."""
        qn = parse_quicknet("@quicknet eth0")
        assert qn.interface == "eth0"
        assert qn.dns is None
        assert qn.print_only is False
        assert qn.unit_path == "/etc/systemd/network/eth0.network"

    def test_with_dns(self) -> None:
        """Test the dns keyword form."""
        qn = parse_quicknet("@quicknet-print dns 1.1.1.1 ens3")
        assert qn.interface == "ens3"
        assert qn.dns == "1.1.1.1"
        assert qn.print_only is True

    @pytest.mark.parametrize(
        "cmd",
        ["@quicknet", "@quicknet dns eth0", "@quicknet nameserver 1.1.1.1 eth0", "@quicknet a b c d"],
    )
    def test_rejected(self, cmd: str) -> None:
        """Test wrong token counts and a wrong keyword."""
        with pytest.raises(BadHookCmd):
            parse_quicknet(cmd)

    def test_render(self) -> None:
        """Test the rendered unit with and without DNS."""
        assert parse_quicknet("@quicknet eth0").render() == ETH0_UNIT
        assert parse_quicknet("@quicknet dns 9.9.9.9 eth0").render() == ETH0_UNIT + "DNS=9.9.9.9\n"


class TestQuickNetHook:
    """Test running the quicknet hook."""

    def test_writes_unit_under_mountpoint(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        """Test that postinstall writes below the mountpoint."""
        action = apply_hook("@quicknet dns 1.1.1.1 eth0", Caller.MANIFEST_POSTINSTALL, str(tmp_path))
        unit = tmp_path / "etc/systemd/network/eth0.network"
        assert unit.read_text() == ETH0_UNIT + "DNS=1.1.1.1\n"
        assert action.to_json() == {"interface": "eth0", "dns": "1.1.1.1", "file": "/etc/systemd/network/eth0.network"}
        assert capsys.readouterr().err == ""

    def test_print_mode(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        """Test that print mode writes nothing to disk."""
        apply_hook("@quicknet-print eth0", Caller.MANIFEST_CHROOT, str(tmp_path))
        assert ETH0_UNIT in capsys.readouterr().out
        assert list(tmp_path.iterdir()) == []

    def test_refuses_root_from_cli(self) -> None:
        """Test that writing to the live system is refused."""
        with pytest.raises(BadHookCmd, match="is to be run with a mountpoint"):
            apply_hook("@quicknet eth0", Caller.CLI, "/")
