"""
Tests for the archinstall-hooks command line.
"""

import json
from pathlib import Path
from unittest.mock import patch

import pytest
from archinstall_hooks.hooks import load_actions
from archinstall_hooks.main import main, parse_args


class TestParseArgs:
    """Test argument parsing."""

    @patch.dict("os.environ", {"ARCHINSTALL_HOOKS_MOUNTPOINT": "/mnt/target"})
    def test_mountpoint_from_environment(self) -> None:
        """Test the environment default for --mountpoint."""
        assert parse_args(["@uncomment Port /etc/ssh/sshd_config"]).mountpoint == "/mnt/target"

    @patch.dict("os.environ", {}, clear=True)
    def test_mountpoint_default(self) -> None:
        """Test that / is the default mountpoint."""
        opts = parse_args(["-m", "/mnt", "--validate", "@quicknet eth0"])
        assert opts.mountpoint == "/mnt"
        assert opts.validate_only is True
        assert opts.commands == ["@quicknet eth0"]
        assert parse_args(["@quicknet eth0"]).mountpoint == "/"

    @pytest.mark.parametrize(
        "argv",
        [[], ["--manifest", "m.json", "@quicknet eth0"], ["--partition", "@quicknet eth0"]],
    )
    def test_rejected(self, argv: list[str]) -> None:
        """Test invalid combinations."""
        with pytest.raises(SystemExit):
            parse_args(argv)


class TestMain:
    """Test end-to-end CLI runs."""

    def test_runs_hooks_and_writes_audit(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        """Test running a hook and recording its audit entry."""
        (tmp_path / "etc").mkdir()
        (tmp_path / "etc/locale.gen").write_text("#en_US.UTF-8 UTF-8\n")
        audit = tmp_path / "audit.json"

        rc = main(["-m", str(tmp_path), "--audit-log", str(audit), "@uncomment en_US.UTF-8 /etc/locale.gen"])

        assert rc == 0
        assert (tmp_path / "etc/locale.gen").read_text() == "en_US.UTF-8 UTF-8\n"
        record = {"comment_marker": "#", "pattern": "en_US.UTF-8", "file": "/etc/locale.gen"}
        assert json.dumps(record) in capsys.readouterr().out
        assert [a.to_json() for a in load_actions(audit.read_text())] == [record]

    def test_failure_exit_code(self, tmp_path: Path) -> None:
        """Test that hook errors map to exit status 1."""
        assert main(["-m", str(tmp_path), "@nope"]) == 1

    def test_validate_only(self, tmp_path: Path) -> None:
        """Test that --validate does not need the target files."""
        assert main(["-m", str(tmp_path), "--validate", "@uncomment Port /etc/ssh/sshd_config"]) == 0

    def test_manifest_validate(self, tmp_path: Path) -> None:
        """Test validating a manifest file."""
        manifest = tmp_path / "manifest.json"
        manifest.write_text(json.dumps({"chroot": ["@mkinitcpio-print boot_hook=lvm_on_luks"]}))
        assert main(["-m", "/mnt", "--validate", "--manifest", str(manifest)]) == 0

    def test_audit_log_kept_on_later_failure(self, tmp_path: Path) -> None:
        """Test that hooks applied before a failure are still recorded."""
        (tmp_path / "etc").mkdir()
        (tmp_path / "etc/locale.gen").write_text("#en_US.UTF-8 UTF-8\n")
        audit = tmp_path / "audit.json"

        rc = main(
            [
                "-m",
                str(tmp_path),
                "--audit-log",
                str(audit),
                "@uncomment en_US.UTF-8 /etc/locale.gen",
                "@uncomment Port /etc/ssh/sshd_config",
            ]
        )

        assert rc == 1
        assert (tmp_path / "etc/locale.gen").read_text() == "en_US.UTF-8 UTF-8\n"
        records = [a.to_json() for a in load_actions(audit.read_text())]
        assert records == [{"comment_marker": "#", "pattern": "en_US.UTF-8", "file": "/etc/locale.gen"}]

    def test_unwritable_audit_log(self, tmp_path: Path) -> None:
        """Test that a failed audit log write maps to exit status 1."""
        (tmp_path / "etc").mkdir()
        (tmp_path / "etc/locale.gen").write_text("#en_US.UTF-8 UTF-8\n")
        audit = tmp_path / "missing-dir" / "audit.json"

        rc = main(["-m", str(tmp_path), "--audit-log", str(audit), "@uncomment en_US.UTF-8 /etc/locale.gen"])

        assert rc == 1
        assert not audit.exists()
