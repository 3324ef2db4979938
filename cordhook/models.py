from cordhook.discord.http import _get_bot_id
from pydantic import BaseModel
from typing import Self
from os import environ


class Env(BaseModel):
    bot_token: str
    public_key: str
    logfire_token: str | None = None
    dev: bool = True
    sync_commands: bool = False

    @classmethod
    def new(cls) -> Self:
        return cls.model_validate({
            'bot_token': environ.get('BOT_TOKEN'),
            'public_key': environ.get('PUBLIC_KEY'),
            'logfire_token': environ.get('LOGFIRE_TOKEN') or None,
            'dev': environ.get('DEV', '1') != '0',
            'sync_commands': environ.get('SYNC_COMMANDS', '0') != '0'
        })

    @property
    def application_id(self) -> int:
        return _get_bot_id(self.bot_token)
