from __future__ import annotations

import re

from archinstall import info
from pydantic import BaseModel, ConfigDict

from archinstall_hooks.errors import BadHookCmd, FileError, HookError, InternalBug
from archinstall_hooks.shared import ALL_CALLERS, Caller
from archinstall_hooks.utils import resolve_target, tokenize

from .actions import ActionReplaceToken
from .base import HookWrapper
from .keys import REPLACE_TOKEN, REPLACE_TOKEN_PRINT


class ReplaceTokenConfig(BaseModel):
    model_config = ConfigDict(frozen=True)

    token: str
    value: str
    template: str
    output: str
    print_only: bool = False


def token_regex(token: str) -> re.Pattern[str]:
    """Match {{ token }} with any inner whitespace."""
    return re.compile(r"\{\{\s*" + re.escape(token) + r"\s*\}\}")


def replace_token_text(original: str, token: str, value: str) -> str:
    replaced, count = token_regex(token).subn(lambda _: value, original)
    if count == 0:
        raise HookError(f"{REPLACE_TOKEN}: no such token '{{{{ {token} }}}}'")
    return replaced


def parse_replace_token(cmd: str) -> ReplaceTokenConfig:
    """
    Parse a replace-token hook command.

    @replace-token <TOKEN> <VALUE> <TEMPLATE> [OUTPUT]

    OUTPUT defaults to TEMPLATE, i.e. the template is rewritten in place.
    """
    parts = tokenize(cmd)
    key = parts[0] if parts else ""
    if key not in (REPLACE_TOKEN, REPLACE_TOKEN_PRINT):
        raise InternalBug(f"got bad hook cmd: {key}")

    if len(parts) not in (4, 5):
        raise BadHookCmd(f"{REPLACE_TOKEN}: expect 3 or 4 arguments, got {len(parts) - 1}")

    template = parts[3]
    return ReplaceTokenConfig(
        token=parts[1],
        value=parts[2],
        template=template,
        output=parts[4] if len(parts) == 5 else template,
        print_only=key == REPLACE_TOKEN_PRINT,
    )


class ReplaceTokenHook(HookWrapper):
    base_key = REPLACE_TOKEN
    usage = "<TOKEN> <VALUE> <TEMPLATE> [OUTPUT]"

    def __init__(self, key: str) -> None:
        super().__init__(key)
        self.config: ReplaceTokenConfig | None = None

    def should_chroot(self) -> bool:
        return False

    def preferred_callers(self) -> frozenset[Caller]:
        return ALL_CALLERS

    def abort_if_no_mount(self) -> bool:
        return False

    def try_parse(self, cmd: str) -> None:
        self.config = parse_replace_token(cmd)

    def run(self, caller: Caller, root_location: str) -> ActionReplaceToken:
        rt = self.config
        if rt is None:
            raise self.not_parsed()

        template = resolve_target(caller, root_location, rt.template)
        try:
            original = template.read_text()
        except OSError as e:
            raise FileError(e, f"{REPLACE_TOKEN}: read template {template}") from e

        replaced = replace_token_text(original, rt.token, rt.value)

        if rt.print_only:
            print(replaced)
        else:
            output = resolve_target(caller, root_location, rt.output)
            try:
                output.write_text(replaced)
            except OSError as e:
                raise FileError(e, f"{REPLACE_TOKEN}: write output {output}") from e
            info(f"Replaced token {rt.token} in {template} -> {output}")

        return ActionReplaceToken(token=rt.token, value=rt.value, template=rt.template, output=rt.output)
