"""
Tests for running the hook sections of a manifest.
"""

import json
import shlex
from pathlib import Path
from unittest.mock import Mock, call, patch

import pytest
from archinstall.lib.exceptions import SysCallError
from archinstall_hooks.errors import BadManifest, CmdFailed, FileError, InternalBug
from archinstall_hooks.hooks.actions import ActionQuickNet, ActionUncomment
from archinstall_hooks.manifest import (
    ManifestHooks,
    apply_manifest_hooks,
    load_manifest,
    validate_manifest_hooks,
)


def _write_manifest(path: Path, data: dict) -> Path:
    path.write_text(json.dumps(data))
    return path


class TestLoadManifest:
    """Test manifest loading."""

    def test_load(self, tmp_path: Path) -> None:
        """Test a manifest with all sections."""
        manifest = load_manifest(
            _write_manifest(
                tmp_path / "manifest.json",
                {
                    "disks": [{"device": "/dev/vda", "partitions": [{"size": "+512M", "type_code": "ef00"}, {}]}],
                    "chroot": ["@quicknet eth0"],
                    "postinstall": ["echo done"],
                },
            )
        )
        assert manifest.disks[0].partitions[1].size is None
        assert manifest.chroot == ["@quicknet eth0"]

    def test_invalid(self, tmp_path: Path) -> None:
        """Test that schema violations are manifest errors."""
        with pytest.raises(BadManifest):
            load_manifest(_write_manifest(tmp_path / "manifest.json", {"chroot": "not a list"}))

    def test_missing(self, tmp_path: Path) -> None:
        """Test a manifest path that does not exist."""
        with pytest.raises(FileError):
            load_manifest(tmp_path / "missing.json")


class TestApplyManifestHooks:
    """Test mixed hook and shell entries."""

    @patch("archinstall_hooks.utils.shell.SysCommand")
    def test_runs_in_order(self, mock_syscmd: Mock, tmp_path: Path) -> None:
        """Test that hooks and shell commands run chroot first, then postinstall."""
        mnt = tmp_path / "mnt"
        (mnt / "etc").mkdir(parents=True)
        (mnt / "etc/locale.gen").write_text("#en_US.UTF-8 UTF-8\n")

        manifest = ManifestHooks(
            chroot=["@quicknet-print eth0", "systemctl enable sshd"],
            postinstall=["@uncomment-all en_US.UTF-8 /etc/locale.gen", "echo done"],
        )
        actions = apply_manifest_hooks(manifest, str(mnt))

        assert [type(a) for a in actions] == [ActionQuickNet, ActionUncomment]
        assert (mnt / "etc/locale.gen").read_text() == "en_US.UTF-8 UTF-8\n"
        assert mock_syscmd.call_args_list == [
            call(f"arch-chroot {shlex.quote(str(mnt))} sh -c 'systemctl enable sshd'"),
            call("sh -c 'echo done'"),
        ]

    @patch("archinstall_hooks.utils.shell.SysCommand")
    def test_shell_failure_stops_run(self, mock_syscmd: Mock, tmp_path: Path) -> None:
        """Test that a failing command propagates without running later entries."""
        mock_syscmd.side_effect = SysCallError("exit 1")
        manifest = ManifestHooks(chroot=["false"], postinstall=["@uncomment Port /etc/ssh/sshd_config"])
        with pytest.raises(CmdFailed):
            apply_manifest_hooks(manifest, str(tmp_path))
        mock_syscmd.assert_called_once()

    def test_root_mountpoint_is_a_bug(self) -> None:
        """Test that manifest runs refuse / for chroot-aware hooks."""
        with pytest.raises(InternalBug):
            apply_manifest_hooks(ManifestHooks(chroot=["@quicknet eth0"]), "/")


class TestValidateManifestHooks:
    """Test pre-flight validation."""

    @patch("archinstall_hooks.utils.shell.SysCommand")
    def test_validates_without_running(self, mock_syscmd: Mock, tmp_path: Path) -> None:
        """Test that nothing is executed or written."""
        manifest = ManifestHooks(
            chroot=["@quicknet eth0", "systemctl enable sshd"],
            postinstall=["@uncomment Port /etc/ssh/sshd_config"],
        )
        validate_manifest_hooks(manifest, str(tmp_path))
        mock_syscmd.assert_not_called()
        assert list(tmp_path.iterdir()) == []
