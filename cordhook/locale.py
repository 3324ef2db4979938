from __future__ import annotations
from collections.abc import Mapping
from pydantic import BaseModel
from re import sub, Match


__all__ = (
    'BASE_LOCALE',
    'CommandText',
    'LocaleBundle',
    'format_message',
    'to_supported_locale',
)


BASE_LOCALE = 'en'


class CommandText(BaseModel):
    description: str | None = None
    error: str | None = None


LocaleBundle = Mapping[str, Mapping[str, CommandText]]


def to_supported_locale(
    locale: str | None,
    bundle: Mapping[str, object]
) -> str:
    if locale is None:
        return BASE_LOCALE

    if locale.startswith(f'{BASE_LOCALE}-'):
        locale = BASE_LOCALE

    if locale not in bundle:
        return BASE_LOCALE

    return locale


def format_message(template: str, *args: object) -> str:
    def replace(match: Match[str]) -> str:
        index = int(match.group(1))

        if index >= len(args):
            return match.group(0)

        return str(args[index])

    return sub(r'\{(\d+)\}', replace, template)
