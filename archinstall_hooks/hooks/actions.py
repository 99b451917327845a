"""
Audit records returned by hooks.

Callers outside the hooks package only need to know which hook ran and with
which inputs, never the hook's internal configuration. Each record carries a
``hook`` tag so a list of actions can be stored and loaded back as JSON.
"""

from __future__ import annotations

from typing import Annotated, Any, Literal

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter

from .presets import BootHookPreset


class _Action(BaseModel):
    model_config = ConfigDict(frozen=True, use_enum_values=True)

    def to_json(self) -> dict[str, Any]:
        """Payload without the family tag."""
        return self.model_dump(mode="json", exclude={"hook"})


class ActionQuickNet(_Action):
    hook: Literal["quicknet"] = "quicknet"
    interface: str
    dns: str | None = None
    file: str


class ActionReplaceToken(_Action):
    hook: Literal["replace-token"] = "replace-token"
    token: str
    value: str
    template: str
    output: str


class ActionUncomment(_Action):
    hook: Literal["uncomment"] = "uncomment"
    comment_marker: str
    pattern: str
    file: str


class ActionMkinitcpio(_Action):
    hook: Literal["mkinitcpio"] = "mkinitcpio"
    boot_hook: BootHookPreset | None = None
    binaries: list[str] | None = None
    hooks: list[str] | None = None
    print_only: bool


ActionHook = Annotated[
    ActionQuickNet | ActionReplaceToken | ActionUncomment | ActionMkinitcpio,
    Field(discriminator="hook"),
]

ACTIONS_ADAPTER: TypeAdapter[list[ActionHook]] = TypeAdapter(list[ActionHook])


def dump_actions(actions: list[ActionHook]) -> str:
    return ACTIONS_ADAPTER.dump_json(actions, indent=4).decode()


def load_actions(data: str | bytes) -> list[ActionHook]:
    return ACTIONS_ADAPTER.validate_json(data)
