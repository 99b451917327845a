"""
Manifest disks: pre-flight checks and partitioning.

Only GPT partition tables are supported. Every disk gets a fresh table and
its partitions from sgdisk; MBR/dos tables are rejected when the manifest is
loaded.
"""

from pathlib import Path
from typing import Literal

from archinstall import debug, info
from pydantic import BaseModel, Field

from archinstall_hooks.errors import NoSuchDevice
from archinstall_hooks.utils.shell import run_cmd


class ManifestPartition(BaseModel):
    """One partition, created in manifest order"""

    size: str | None = None  # e.g. "+512M"; None takes the rest of the disk
    type_code: str = Field(default="8300")  # sgdisk type code, e.g. ef00 for EFI


class ManifestDisk(BaseModel):
    device: str
    table: Literal["gpt"] = "gpt"
    partitions: list[ManifestPartition] = Field(default_factory=list)


def validate_disks(disks: list[ManifestDisk]) -> None:
    """Fail before touching anything if any device is missing"""
    for disk in disks:
        if not Path(disk.device).exists():
            raise NoSuchDevice(disk.device)


def partition_disk(disk: ManifestDisk) -> None:
    """Creates a fresh partition table and all partitions, one sgdisk call each"""
    debug(f"Creating {disk.table} partition table on {disk.device}")
    run_cmd(f"sgdisk -o {disk.device}")

    for n, part in enumerate(disk.partitions, start=1):
        end = part.size if part.size else "0"
        debug(f"Creating partition {n} ({end}) on {disk.device}")
        run_cmd(f"sgdisk -n {n}:0:{end} -t {n}:{part.type_code} {disk.device}")

    info(f"Partitioned {disk.device}")


def apply_disks(disks: list[ManifestDisk]) -> None:
    validate_disks(disks)
    for disk in disks:
        partition_disk(disk)
