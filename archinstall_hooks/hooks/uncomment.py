from __future__ import annotations

from enum import Enum

from archinstall import debug, info
from pydantic import BaseModel, ConfigDict

from archinstall_hooks.errors import BadHookCmd, FileError, HookError, InternalBug
from archinstall_hooks.shared import ALL_CALLERS, Caller
from archinstall_hooks.utils import resolve_target, tokenize

from .actions import ActionUncomment
from .base import HookWrapper
from .keys import UNCOMMENT, UNCOMMENT_ALL, UNCOMMENT_ALL_PRINT, UNCOMMENT_PRINT

DEFAULT_MARKER = "#"
MARKER_KEYWORD = "marker"
# Widest gap tried between the comment marker and the pattern
MAX_WHITESPACE = 4


class UncommentMode(Enum):
    ONCE = "once"
    ALL = "all"


class UncommentConfig(BaseModel):
    model_config = ConfigDict(frozen=True)

    marker: str = DEFAULT_MARKER
    pattern: str
    file: str
    mode: UncommentMode = UncommentMode.ONCE
    print_only: bool = False


def _commented(marker: str, width: int, pattern: str) -> str:
    return f"{marker}{' ' * width}{pattern}"


def _no_such_pattern(marker: str, pattern: str) -> HookError:
    return HookError(f"{UNCOMMENT}: no such comment pattern '{marker} {pattern}'")


def uncomment_text_once(original: str, marker: str, pattern: str) -> str:
    """Uncomment the first commented occurrence of pattern.

    Lines are scanned in order; on each line gaps of 0 to MAX_WHITESPACE
    spaces after the marker are tried. Only the first hit is rewritten and
    every other line is returned untouched.
    """
    lines = original.split("\n")
    for i, line in enumerate(lines):
        for width in range(MAX_WHITESPACE + 1):
            commented = _commented(marker, width, pattern)
            if commented in line:
                lines[i] = line.replace(commented, pattern, 1)
                return "\n".join(lines)

    raise _no_such_pattern(marker, pattern)


def uncomment_text_all(original: str, marker: str, pattern: str) -> str:
    """Uncomment every occurrence of pattern commented with the narrowest gap.

    Gaps are tried from 0 upwards; the first gap width that changes the text
    wins and all of its occurrences are replaced document-wide.
    """
    for width in range(MAX_WHITESPACE + 1):
        uncommented = original.replace(_commented(marker, width, pattern), pattern)
        if uncommented != original:
            return uncommented

    raise _no_such_pattern(marker, pattern)


def parse_uncomment(cmd: str) -> UncommentConfig:
    """
    Parse an uncomment hook command.

    @uncomment <PATTERN> [marker <COMMENT_MARKER="#">] FILE

    Examples:
        @uncomment PubkeyAuthentication /etc/ssh/sshd_config
        @uncomment-all en_US.UTF-8 /etc/locale.gen
        @uncomment include marker "//" /etc/foo.conf
    """
    parts = tokenize(cmd)
    if len(parts) < 3:
        raise BadHookCmd(f"{UNCOMMENT}: expect at least 2 arguments")

    key = parts[0]
    if key in (UNCOMMENT, UNCOMMENT_PRINT):
        mode = UncommentMode.ONCE
    elif key in (UNCOMMENT_ALL, UNCOMMENT_ALL_PRINT):
        mode = UncommentMode.ALL
    else:
        raise InternalBug(f"got bad hook cmd: {key}")

    print_only = key in (UNCOMMENT_PRINT, UNCOMMENT_ALL_PRINT)

    if len(parts) == 3:
        return UncommentConfig(pattern=parts[1], file=parts[2], mode=mode, print_only=print_only)

    if len(parts) == 5:
        if parts[2] != MARKER_KEYWORD:
            raise BadHookCmd(f"{UNCOMMENT}: unexpected argument {parts[2]}, expecting 2nd argument to be `{MARKER_KEYWORD}`")
        return UncommentConfig(marker=parts[3], pattern=parts[1], file=parts[4], mode=mode, print_only=print_only)

    raise BadHookCmd(f"{UNCOMMENT}: bad cmd parts: {len(parts)}")


class UncommentHook(HookWrapper):
    base_key = UNCOMMENT
    usage = '<PATTERN> [marker <COMMENT_MARKER="#">] FILE'

    def __init__(self, key: str) -> None:
        super().__init__(key)
        self.config: UncommentConfig | None = None

    def should_chroot(self) -> bool:
        return False

    def preferred_callers(self) -> frozenset[Caller]:
        return ALL_CALLERS

    def abort_if_no_mount(self) -> bool:
        return False

    def try_parse(self, cmd: str) -> None:
        self.config = parse_uncomment(cmd)

    def run(self, caller: Caller, root_location: str) -> ActionUncomment:
        uc = self.config
        if uc is None:
            raise self.not_parsed()

        target = resolve_target(caller, root_location, uc.file)
        try:
            original = target.read_text()
        except OSError as e:
            raise FileError(e, f"{UNCOMMENT}: read original file to uncomment: {target}") from e

        if uc.mode is UncommentMode.ALL:
            uncommented = uncomment_text_all(original, uc.marker, uc.pattern)
        else:
            uncommented = uncomment_text_once(original, uc.marker, uc.pattern)

        if uc.print_only:
            print(uncommented)
        else:
            try:
                target.write_text(uncommented)
            except OSError as e:
                raise FileError(e, f"{UNCOMMENT}: write uncommented to {target}") from e
            info(f"Uncommented '{uc.pattern}' in {target}")

        debug(f"{self.hook_key()}: marker={uc.marker!r} mode={uc.mode.value}")
        return ActionUncomment(comment_marker=uc.marker, pattern=uc.pattern, file=uc.file)
