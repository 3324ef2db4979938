from __future__ import annotations
from cordhook.discord import CommandRegistry, Interaction, InteractionResponse, InteractionType, ApplicationCommandType, StructuredReply, TextReply, Reply
from .locale import LocaleBundle, CommandText, BASE_LOCALE, to_supported_locale, format_message
from collections.abc import Mapping
from typing import Any
from cordhook.errors import InteractionError
import logfire


__all__ = ('InteractionRouter',)


class InteractionRouter:
    def __init__(
        self,
        registry: CommandRegistry,
        locales: Mapping[str, Mapping[str, CommandText | dict[str, Any]]] | None = None,
        default_reply: str = 'hi'
    ) -> None:
        self.registry = registry
        # ? bundles may be given as plain dicts straight out of a json/toml file
        self.locales: LocaleBundle = {
            locale: {
                name: CommandText.model_validate(text)
                for name, text in texts.items()
            }
            for locale, texts in (locales or {}).items()
        }
        self.default_reply = default_reply

    async def dispatch(self, interaction: Interaction) -> InteractionResponse:
        match interaction.interaction_type:
            case InteractionType.PING:
                return InteractionResponse.pong()
            case InteractionType.APPLICATION_COMMAND:
                return await self._on_command(interaction)
            case InteractionType.APPLICATION_COMMAND_AUTOCOMPLETE:
                return self._on_autocomplete(interaction)
            case _:
                # ? components, modals and anything we don't know about
                logfire.debug(
                    'unhandled interaction type {interaction_type}',
                    interaction_type=interaction.type)
                return InteractionResponse.from_reply(
                    TextReply(content=self.default_reply))

    async def _on_command(self, interaction: Interaction) -> InteractionResponse:
        command = self.registry.get(interaction.command_data.name)

        logfire.debug(
            'invoking {command_name}',
            command_name=command.name)

        result = await command.callback(interaction)

        match result:
            case InteractionResponse():
                return result
            case TextReply() | StructuredReply():
                return InteractionResponse.from_reply(result)

        raise InteractionError(
            f'command {command.name} returned {type(result).__name__}, expected a reply')

    def _on_autocomplete(self, interaction: Interaction) -> InteractionResponse:
        command = self.registry.get(interaction.command_data.name)

        return InteractionResponse.autocomplete_result(
            command.autocomplete_choices([
                (option.name, option.type)
                for option in interaction.command_data.options or []
            ])
        )

    def reply(self, content: str | None = None, **kwargs) -> Reply:  # noqa: ANN003
        if not kwargs:
            if content is None:
                raise InteractionError('reply needs content or message fields')

            return TextReply(content=content)

        return StructuredReply(content=content, **kwargs)

    def to_supported_locale(self, locale: str | None) -> str:
        return to_supported_locale(locale, self.locales)

    def error(
        self,
        command: str,
        *args: object,
        locale: str | None = None
    ) -> StructuredReply:
        template = None

        for bundle_locale in (self.to_supported_locale(locale), BASE_LOCALE):
            text = self.locales.get(bundle_locale, {}).get(command)

            if text is not None and text.error is not None:
                template = text.error
                break

        if template is None:
            template = self.registry.get(command).error

        if template is None:
            raise InteractionError(f'no error template for command {command}')

        return StructuredReply(
            content=format_message(template, *args),
            ephemeral=True
        )

    def help(self, locale: str | None = None) -> str:
        lines = ''

        for command in self.registry:
            if command.type != ApplicationCommandType.CHAT_INPUT:
                continue

            description = command.description
            if (
                locale is not None and
                command.description_localizations and
                locale in command.description_localizations
            ):
                description = command.description_localizations[locale]

            lines += f'{command.name}:\n  {description}\n\n'

        return f'```\n{lines}```'
