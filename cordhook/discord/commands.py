from __future__ import annotations
from .models import ApplicationCommand, ApplicationCommandType, ContextMenuCommand, SlashCommand, InteractionCallback
from cordhook.errors import DuplicateCommandError, UnknownCommand
from collections.abc import Iterator
from typing import Any
import logfire


__all__ = ('CommandRegistry',)


class CommandRegistry:
    def __init__(self) -> None:
        self._commands: dict[str, ApplicationCommand] = {}

    def __contains__(self, name: object) -> bool:
        return name in self._commands

    def __iter__(self) -> Iterator[ApplicationCommand]:
        return iter(self._commands.values())

    def __len__(self) -> int:
        return len(self._commands)

    def register(
        self,
        descriptor: SlashCommand | ContextMenuCommand,
        handler: InteractionCallback,
        *,
        replace: bool = False
    ) -> ApplicationCommand:
        match descriptor:
            case SlashCommand():
                # ? slash commands are keyed by the handler's own name
                name = getattr(handler, '__name__', None)

                if name is None:
                    raise TypeError(
                        f'slash command handler {handler!r} has no __name__')

                command = ApplicationCommand(
                    type=ApplicationCommandType.CHAT_INPUT,
                    name=name,
                    description=descriptor.description,
                    description_localizations=descriptor.description_localizations,
                    options=descriptor.options,
                    error=descriptor.error,
                    callback=handler
                )
            case ContextMenuCommand():
                command = ApplicationCommand(
                    type=descriptor.type,
                    name=descriptor.name,
                    name_localizations=descriptor.name_localizations,
                    options=descriptor.options,
                    error=descriptor.error,
                    callback=handler
                )
            case _:
                raise TypeError(
                    f'unsupported command descriptor {type(descriptor).__name__}')

        if command.name in self._commands:
            if not replace:
                raise DuplicateCommandError(command.name)

            logfire.warn(
                'replacing already registered command {command_name}',
                command_name=command.name)

        self._commands[command.name] = command

        logfire.debug(
            'registered {command_type} command {command_name}',
            command_type=command.type.name,
            command_name=command.name)

        return command

    def get(self, name: str) -> ApplicationCommand:
        try:
            return self._commands[name]
        except KeyError:
            raise UnknownCommand(name) from None

    def as_registration_payload(self) -> list[dict[str, Any]]:
        return [
            command._as_registration_dict()
            for command in self._commands.values()
        ]
