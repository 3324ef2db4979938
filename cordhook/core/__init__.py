from __future__ import annotations
from logging import getLogger, Filter, LogRecord
from fastapi import FastAPI, Request, WebSocket
from contextlib import asynccontextmanager
from cordhook.errors import install_error_handlers
from fastapi.responses import Response
from cordhook.version import VERSION
from typing import Any, TYPE_CHECKING
import logfire


if TYPE_CHECKING:
    from cordhook.client import InteractionRouter
    from cordhook.models import Env


class LocalHealthcheckFilter(Filter):
    def filter(self, record: LogRecord) -> bool:
        return not bool(
            isinstance(record.args, tuple) and
            len(record.args) == 5 and
            all((
                str(record.args[0]).startswith(('127.', '172.')),
                record.args[1] == 'GET',
                record.args[2] == '/healthcheck',
                record.args[4] == 204
            ))
        )


getLogger('uvicorn.access').addFilter(LocalHealthcheckFilter())


def interaction_redaction(request: Request | WebSocket, attributes: dict[str, Any]) -> dict[str, Any] | None:
    match request.url.path:
        # ? interaction bodies carry user tokens
        case '/discord/interaction':
            return None

    return attributes


def create_app(
    client: InteractionRouter,
    public_key: str,
    env: Env | None = None
) -> FastAPI:
    @asynccontextmanager
    async def lifespan(app: FastAPI):  # noqa: ANN202
        if env is not None and env.sync_commands:
            from cordhook.discord.http import sync_commands

            await sync_commands(client.registry, env.bot_token)

        yield

        logfire.info('shutting down')
        logfire.shutdown()

    app = FastAPI(
        title='cordhook',
        lifespan=lifespan,
        docs_url=None,
        redoc_url=None,
        version=VERSION,
        debug=env.dev if env is not None else False
    )

    app.state.client = client
    app.state.public_key = public_key

    install_error_handlers(app)

    from cordhook.routers import discord
    app.include_router(discord.router)

    @app.get(
        '/healthcheck',
        status_code=204,
        include_in_schema=False)
    async def get__healthcheck() -> Response:
        return Response(status_code=204)

    if env is not None and env.logfire_token:
        logfire.configure(
            service_name='cordhook' + ('-dev' if env.dev else ''),
            service_version=VERSION,
            token=env.logfire_token,
            environment='development' if env.dev else 'production',
            console=False
        )
        logfire.instrument_aiohttp_client()
        logfire.instrument_fastapi(
            app,
            capture_headers=app.debug,
            request_attributes_mapper=interaction_redaction,
            excluded_urls=['/healthcheck']
        )

    return app
