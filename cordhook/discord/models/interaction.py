from __future__ import annotations
from .enums import InteractionType, ApplicationCommandType, ApplicationCommandOptionType
from typing import Annotated, Protocol, Any, Self, TYPE_CHECKING
from cordhook.discord.types import Snowflake
from pydantic import Field, model_validator
from .base import RawBaseModel


if TYPE_CHECKING:
    from .response import InteractionResponse, Reply


__all__ = (
    'ApplicationCommandInteractionData',
    'ApplicationCommandInteractionDataOption',
    'Interaction',
    'InteractionCallback',
    'MessageComponentInteractionData',
    'ModalSubmitInteractionData',
)


COMMAND_INTERACTION_TYPES = {
    InteractionType.APPLICATION_COMMAND.value,
    InteractionType.APPLICATION_COMMAND_AUTOCOMPLETE.value
}


class InteractionCallback(Protocol):
    __name__: str

    async def __call__(self, interaction: Interaction) -> Reply | InteractionResponse:
        ...


class ApplicationCommandInteractionDataOption(RawBaseModel):
    name: str
    type: ApplicationCommandOptionType
    value: str | int | float | bool | None = None
    options: list[ApplicationCommandInteractionDataOption] | None = None
    focused: bool | None = None


class ApplicationCommandInteractionData(RawBaseModel):
    id: Snowflake | None = None
    name: str
    type: ApplicationCommandType = ApplicationCommandType.CHAT_INPUT
    resolved: dict[str, Any] | None = None
    options: list[ApplicationCommandInteractionDataOption] | None = None
    guild_id: Snowflake | None = None
    target_id: Snowflake | None = None


class MessageComponentInteractionData(RawBaseModel):
    custom_id: str
    component_type: int
    values: list[str] | None = None


class ModalSubmitInteractionData(RawBaseModel):
    custom_id: str
    # ? always a list of action rows, we don't care what's inside
    components: list[dict[str, Any]] | None = None


class Interaction(RawBaseModel):
    # ? kept as a plain int so unknown types fall through to the default reply
    type: int
    id: Snowflake | None = None
    application_id: Snowflake | None = None
    # ? first match wins, data we don't model stays a raw dict
    data: Annotated[
        ApplicationCommandInteractionData |
        MessageComponentInteractionData |
        ModalSubmitInteractionData |
        dict[str, Any] |
        None,
        Field(union_mode='left_to_right')
    ] = None
    guild_id: Snowflake | None = None
    channel_id: Snowflake | None = None
    member: dict[str, Any] | None = None
    user: dict[str, Any] | None = None
    token: str | None = None
    version: int | None = None
    locale: str | None = None
    guild_locale: str | None = None

    @model_validator(mode='before')
    @classmethod
    def strip_ping(cls, data: Any) -> Any:  # noqa: ANN401
        # ? pings only ever need the discriminant, ignore whatever else came with them
        if isinstance(data, dict) and data.get('type') == InteractionType.PING.value:
            return {'type': InteractionType.PING.value}

        return data

    @model_validator(mode='after')
    def ensure_command_data(self) -> Self:
        if (
            self.type in COMMAND_INTERACTION_TYPES and
            not isinstance(self.data, ApplicationCommandInteractionData)
        ):
            raise ValueError(
                f'interaction type {self.type} requires application command data')

        return self

    @property
    def interaction_type(self) -> InteractionType | None:
        try:
            return InteractionType(self.type)
        except ValueError:
            return None

    @property
    def command_data(self) -> ApplicationCommandInteractionData:
        assert isinstance(self.data, ApplicationCommandInteractionData)
        return self.data
