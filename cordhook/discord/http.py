from __future__ import annotations
from cordhook.errors import HTTPException, Forbidden, NotFound, ServerError, Unauthorized, InteractionError
from aiohttp import __version__ as aiohttp_version, ClientSession, ClientResponse
from typing import Any, TYPE_CHECKING
from cordhook.version import VERSION
from binascii import Error as B64Error
from orjson import dumps, loads
from urllib.parse import quote
from sys import version_info
from base64 import b64decode
import logfire


if TYPE_CHECKING:
    from .commands import CommandRegistry


BASE_URL = 'https://discord.com/api/v10'
USER_AGENT = ' '.join([
    f'DiscordBot (https://github.com/cordhook/cordhook, {VERSION})',
    'Python/{}'.format('.'.join(str(i) for i in version_info[:3])),
    f'aiohttp/{aiohttp_version}'
])


class Route:
    def __init__(
        self,
        method: str,
        path: str,
        **params  # noqa: ANN003
    ) -> None:
        self.method = method
        self.path = path
        url = BASE_URL + path

        self.url = url.format(**{
            k: quote(v) if isinstance(v, str) else v
            for k, v in params.items()
        }) if params else url


async def json_or_text(response: ClientResponse) -> dict[str, Any] | list[Any] | str:
    text = await response.text(encoding='utf-8')
    if response.headers.get('content-type', '').startswith('application/json'):
        return loads(text)

    return text


def _get_bot_id(token: str) -> int:
    # ? the first segment of a bot token is the base64 encoded application id
    try:
        return int(b64decode(token.split('.')[0] + '==').decode())
    except (B64Error, UnicodeDecodeError, ValueError):
        raise InteractionError('invalid token format') from None


async def request(
    route: Route,
    *,
    token: str,
    json: dict[str, Any] | list[Any] | None = None,
    session: ClientSession | None = None,
) -> Any:  # noqa: ANN401
    headers: dict[str, str] = {
        'User-Agent': USER_AGENT,
        'Authorization': f'Bot {token}'
    }

    data = None
    if json is not None:
        headers['Content-Type'] = 'application/json'
        data = dumps(json)

    owned_session = session is None
    session = session or ClientSession()

    try:
        async with session.request(
            route.method,
            route.url,
            data=data,
            headers=headers
        ) as response:
            resp_data = await json_or_text(response)

            if 300 > response.status >= 200:
                return resp_data

            match response.status:
                case 401:
                    raise Unauthorized(resp_data)
                case 403:
                    raise Forbidden(resp_data)
                case 404:
                    raise NotFound(resp_data)
                case _ if response.status >= 500:
                    raise ServerError(resp_data)
                case _:
                    raise HTTPException(resp_data)
    finally:
        if owned_session:
            await session.close()


async def sync_commands(
    registry: CommandRegistry,
    token: str,
    session: ClientSession | None = None
) -> Any:  # noqa: ANN401
    application_id = _get_bot_id(token)

    with logfire.span(
        'sync_commands with {application_id}',
        application_id=application_id
    ):
        logfire.debug(
            'registering {count} commands',
            count=len(registry))

        return await request(
            Route(
                'PUT',
                '/applications/{application_id}/commands',
                application_id=application_id
            ),
            token=token,
            json=registry.as_registration_payload(),
            session=session
        )
