from __future__ import annotations
from .enums import ApplicationCommandType, ApplicationCommandOptionType
from .base import RawBaseModel, PydanticArbitraryType
from .interaction import InteractionCallback
from typing import Annotated, Any, Literal, Self
from pydantic import Field, model_validator
from re import fullmatch


__all__ = (
    'ApplicationCommand',
    'ApplicationCommandOption',
    'ApplicationCommandOptionChoice',
    'AutocompleteValue',
    'ContextMenuCommand',
    'SlashCommand',
)


COMMAND_NAME_PATTERN = r'^[-_\w]{1,32}$'

AutocompleteValue = str | int | float | dict[str, Any]


class ApplicationCommandOptionChoice(RawBaseModel):
    name: str
    name_localizations: dict[str, str] | None = None
    value: str | int | float


class ApplicationCommandOption(RawBaseModel):
    type: ApplicationCommandOptionType
    name: str = Field(pattern=COMMAND_NAME_PATTERN)
    name_localizations: dict[str, str] | None = None
    description: str = Field('', max_length=100)
    description_localizations: dict[str, str] | None = None
    required: bool = False
    choices: list[ApplicationCommandOptionChoice] | None = None
    min_value: int | float | None = None
    max_value: int | float | None = None
    min_length: int | None = None
    max_length: int | None = None
    # ? library stuff, sent back verbatim as the autocomplete choices for this option
    auto_complete: AutocompleteValue | list[AutocompleteValue] | None = Field(None, exclude=True)

    def matches(self, name: str, type: ApplicationCommandOptionType) -> bool:
        return self.name == name and self.type == type

    def _as_registration_dict(self) -> dict[str, Any]:
        json = self.as_payload()

        if self.auto_complete is not None:
            json['autocomplete'] = True

        return json


class SlashCommand(RawBaseModel):
    type: Literal[ApplicationCommandType.CHAT_INPUT] = ApplicationCommandType.CHAT_INPUT
    description: str = Field(max_length=100)
    description_localizations: dict[str, str] | None = None
    options: list[ApplicationCommandOption] | None = None
    error: str | None = None


class ContextMenuCommand(RawBaseModel):
    type: Literal[ApplicationCommandType.USER, ApplicationCommandType.MESSAGE]
    name: str = Field(min_length=1, max_length=32)
    name_localizations: dict[str, str] | None = None
    options: list[ApplicationCommandOption] | None = None
    error: str | None = None


class ApplicationCommand(RawBaseModel):
    type: ApplicationCommandType
    name: str
    name_localizations: dict[str, str] | None = None
    description: str | None = None
    description_localizations: dict[str, str] | None = None
    options: list[ApplicationCommandOption] | None = None
    error: str | None = None
    # ? library stuff
    callback: Annotated[InteractionCallback,
                        PydanticArbitraryType] = Field(exclude=True)

    @model_validator(mode='after')
    def check_slash_name(self) -> Self:
        # ? context menu names may contain spaces, slash command names may not
        if (
            self.type == ApplicationCommandType.CHAT_INPUT and
            fullmatch(COMMAND_NAME_PATTERN, self.name) is None
        ):
            raise ValueError(f'invalid slash command name {self.name!r}')

        return self

    def autocomplete_choices(
        self,
        requested: list[tuple[str, ApplicationCommandOptionType]]
    ) -> list[AutocompleteValue]:
        choices: list[AutocompleteValue] = []

        for option in self.options or []:
            if option.auto_complete is None:
                continue

            if not any(
                option.matches(name, type)
                for name, type in requested
            ):
                continue

            if isinstance(option.auto_complete, list):
                choices.extend(option.auto_complete)
            else:
                choices.append(option.auto_complete)

        return choices

    def _as_registration_dict(self) -> dict[str, Any]:
        json: dict[str, Any] = {
            'name': self.name,
            'type': self.type.value,
        }

        if self.type == ApplicationCommandType.CHAT_INPUT:
            json['description'] = self.description
            json['options'] = [
                option._as_registration_dict()
                for option in self.options or []
            ]

            if self.description_localizations is not None:
                json['description_localizations'] = self.description_localizations

        elif self.name_localizations is not None:
            json['name_localizations'] = self.name_localizations

        return json
