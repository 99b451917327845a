from __future__ import annotations

import sys
from abc import ABC, abstractmethod
from typing import ClassVar

from archinstall import debug, info

from archinstall_hooks.errors import HookError, InternalBug
from archinstall_hooks.shared import Caller, ModeHook

from .actions import ActionHook
from .keys import PRINT_SUFFIX


class HookWrapper(ABC):
    """Abstract base class for hooks.

    A wrapper is created blank from its key, which fixes the ModeHook for the
    rest of its life. It is then fed the full command string via try_parse,
    checked by the caller/mountpoint guard, and finally run.
    """

    base_key: ClassVar[str]
    usage: ClassVar[str]

    def __init__(self, key: str) -> None:
        self.key: str = key
        self._mode: ModeHook = ModeHook.PRINT if key.endswith(PRINT_SUFFIX) else ModeHook.NORMAL

    def mode(self) -> ModeHook:
        return self._mode

    def hook_key(self) -> str:
        """Full key of the hook, including any -print suffix."""
        return self.key

    def help(self) -> None:
        info(f"{self.hook_key()}: {self.usage}", fg="green")

    def print_warn(self, msg: str) -> None:
        """Warnings go to stderr so print-mode output on stdout stays clean."""
        line = f"### {self.base_key} WARN: {msg} ###"
        print(line, file=sys.stderr)
        debug(line)

    def hook_error(self, msg: str) -> HookError:
        return HookError(f"{self.hook_key()}: {msg}")

    def not_parsed(self) -> InternalBug:
        return InternalBug(f"{self.hook_key()}: hook run before parsing")

    @abstractmethod
    def should_chroot(self) -> bool:
        """Whether the caller/mountpoint guard applies to this hook."""

    @abstractmethod
    def preferred_callers(self) -> frozenset[Caller]:
        """Callers this hook expects; others only produce a warning."""

    @abstractmethod
    def abort_if_no_mount(self) -> bool:
        """Whether / as mountpoint is fatal for this hook."""

    @abstractmethod
    def try_parse(self, cmd: str) -> None:
        """Parse the full command (key included) and keep the result."""

    @abstractmethod
    def run(self, caller: Caller, root_location: str) -> ActionHook:
        """Execute the parsed hook and return its audit record."""
