from __future__ import annotations

import argparse
import json
import os
import sys
from dataclasses import dataclass
from pathlib import Path

from archinstall import debug, error, info

from archinstall_hooks.disk import apply_disks, validate_disks
from archinstall_hooks.errors import FileError, HooksError
from archinstall_hooks.hooks import ActionHook, apply_hook, dump_actions, validate_hook
from archinstall_hooks.manifest import apply_manifest_hooks, load_manifest, validate_manifest_hooks
from archinstall_hooks.shared import Caller

MOUNTPOINT_ENV = "ARCHINSTALL_HOOKS_MOUNTPOINT"


@dataclass
class CliOptions:
    mountpoint: str
    validate_only: bool
    manifest: Path | None
    partition: bool
    audit_log: Path | None
    commands: list[str]


def default_mountpoint() -> str:
    return os.getenv(MOUNTPOINT_ENV) or "/"


def parse_args(argv: list[str]) -> CliOptions:
    parser = argparse.ArgumentParser(prog="archinstall-hooks", description="Validate and run installation hook commands")
    parser.add_argument(
        "-m",
        "--mountpoint",
        default=default_mountpoint(),
        help=f"Root of the target installation (default: ${MOUNTPOINT_ENV} or /)",
    )
    parser.add_argument("--validate", action="store_true", help="Only parse and validate, do not run anything")
    parser.add_argument("--manifest", type=Path, help="Run the chroot/postinstall entries of a JSON manifest")
    parser.add_argument("--partition", action="store_true", help="With --manifest, also partition the manifest disks")
    parser.add_argument("--audit-log", type=Path, help="Write the JSON audit records of applied hooks to this file")
    parser.add_argument("commands", nargs="*", metavar="HOOK_CMD", help='Hook command, e.g. "@uncomment Port /etc/ssh/sshd_config"')

    ns = parser.parse_args(argv)
    if ns.manifest is None and not ns.commands:
        parser.error("either --manifest or at least one HOOK_CMD is required")
    if ns.manifest is not None and ns.commands:
        parser.error("--manifest and HOOK_CMD are mutually exclusive")
    if ns.partition and ns.manifest is None:
        parser.error("--partition requires --manifest")

    return CliOptions(
        mountpoint=ns.mountpoint,
        validate_only=ns.validate,
        manifest=ns.manifest,
        partition=ns.partition,
        audit_log=ns.audit_log,
        commands=ns.commands,
    )


def run_manifest(opts: CliOptions, actions: list[ActionHook]) -> None:
    assert opts.manifest is not None
    manifest = load_manifest(opts.manifest)

    if opts.validate_only:
        validate_disks(manifest.disks)
        validate_manifest_hooks(manifest, opts.mountpoint)
        info(f"Manifest {opts.manifest} is valid")
        return

    if opts.partition:
        apply_disks(manifest.disks)
    apply_manifest_hooks(manifest, opts.mountpoint, actions)


def run_commands(opts: CliOptions, actions: list[ActionHook]) -> None:
    for cmd in opts.commands:
        if opts.validate_only:
            validate_hook(cmd, Caller.CLI, opts.mountpoint)
            info(f"Valid hook: {cmd}")
            continue

        action = apply_hook(cmd, Caller.CLI, opts.mountpoint)
        print(json.dumps(action.to_json()))
        actions.append(action)


def write_audit_log(path: Path, actions: list[ActionHook]) -> None:
    try:
        path.write_text(dump_actions(actions))
    except OSError as e:
        raise FileError(e, f"write audit log {path}") from e
    info(f"Wrote {len(actions)} audit records to {path}")


def main(argv: list[str] | None = None) -> int:
    opts = parse_args(sys.argv[1:] if argv is None else argv)
    debug(f"Hooks CLI options: {opts}")

    # Filled as hooks complete, so a failure still leaves a record of earlier changes
    actions: list[ActionHook] = []
    rc = 0
    try:
        if opts.manifest is not None:
            run_manifest(opts, actions)
        else:
            run_commands(opts, actions)
    except HooksError as e:
        error(f"{type(e).__name__}: {e!s}")
        rc = 1

    if opts.audit_log is not None and actions:
        try:
            write_audit_log(opts.audit_log, actions)
        except HooksError as e:
            error(f"{type(e).__name__}: {e!s}")
            rc = 1

    return rc


if __name__ == "__main__":
    raise SystemExit(main())
