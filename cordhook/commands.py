from cordhook.discord import Interaction, SlashCommand, ContextMenuCommand, ApplicationCommandOption, ApplicationCommandOptionType, ApplicationCommandType, StructuredReply, TextReply, Reply
from cordhook.locale import CommandText
from cordhook.client import InteractionRouter


FORECASTS = {
    'Tokyo': 'sunny, 24°C',
    'Kyoto': 'light rain, 19°C',
    'Osaka': 'cloudy, 22°C',
}

LOCALES: dict[str, dict[str, CommandText]] = {
    'en': {
        'ping': CommandText(description='check that the bot is alive'),
        'help': CommandText(description='list available commands'),
        'weather': CommandText(
            description='get the forecast for a city',
            error='no forecast available for `{0}`'),
    },
    'ja': {
        'ping': CommandText(description='ボットの応答を確認します'),
        'help': CommandText(description='コマンド一覧を表示します'),
        'weather': CommandText(
            description='都市の天気予報を表示します',
            error='`{0}` の天気予報はありません'),
    },
}


def _localized_descriptions(name: str) -> dict[str, str]:
    return {
        locale: texts[name].description
        for locale, texts in LOCALES.items()
        if locale != 'en' and texts[name].description is not None
    }


def setup(client: InteractionRouter) -> None:
    async def ping(interaction: Interaction) -> Reply:
        return TextReply(content='pong!')

    async def help(interaction: Interaction) -> Reply:
        return StructuredReply(
            content=client.help(client.to_supported_locale(interaction.locale)),
            ephemeral=True
        )

    async def weather(interaction: Interaction) -> Reply:
        city = next((
            str(option.value)
            for option in interaction.command_data.options or []
            if option.name == 'city'),
            '')

        if city not in FORECASTS:
            return client.error('weather', city, locale=interaction.locale)

        return StructuredReply(
            content=f'{city}: {FORECASTS[city]}',
            suppress_embeds=True
        )

    async def avatar(interaction: Interaction) -> Reply:
        target_id = interaction.command_data.target_id
        users = (interaction.command_data.resolved or {}).get('users', {})
        user = users.get(str(target_id))

        if user is None or not user.get('avatar'):
            return StructuredReply(content='that user has no avatar', ephemeral=True)

        avatar_hash = user['avatar']

        return StructuredReply(
            embeds=[{
                'title': user.get('username'),
                'image': {
                    'url': f'https://cdn.discordapp.com/avatars/{target_id}/{avatar_hash}.png'
                }
            }],
            ephemeral=True
        )

    client.registry.register(
        SlashCommand(
            description=LOCALES['en']['ping'].description,
            description_localizations=_localized_descriptions('ping')),
        ping)

    client.registry.register(
        SlashCommand(
            description=LOCALES['en']['help'].description,
            description_localizations=_localized_descriptions('help')),
        help)

    client.registry.register(
        SlashCommand(
            description=LOCALES['en']['weather'].description,
            description_localizations=_localized_descriptions('weather'),
            options=[
                ApplicationCommandOption(
                    type=ApplicationCommandOptionType.STRING,
                    name='city',
                    description='city to get the forecast for',
                    required=True,
                    auto_complete=[
                        {'name': city, 'value': city}
                        for city in FORECASTS
                    ]
                )
            ]),
        weather)

    client.registry.register(
        ContextMenuCommand(
            type=ApplicationCommandType.USER,
            name='avatar',
            name_localizations={'ja': 'アバター'}),
        avatar)
