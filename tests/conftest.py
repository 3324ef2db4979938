"""Shared pytest fixtures for cordhook tests.

Provides real Ed25519 keys, a request signer and a router wired with a few
commands.
"""

from collections.abc import Callable

import logfire
import pytest
from fastapi.testclient import TestClient
from nacl.signing import SigningKey

from cordhook.client import InteractionRouter
from cordhook.core import create_app
from cordhook.discord import (
    ApplicationCommandOption,
    ApplicationCommandOptionType,
    CommandRegistry,
    Interaction,
    Reply,
    SlashCommand,
    TextReply,
)

logfire.configure(send_to_logfire=False, console=False)

TIMESTAMP = "1700000000"


@pytest.fixture
def signing_key() -> SigningKey:
    return SigningKey.generate()


@pytest.fixture
def public_key(signing_key: SigningKey) -> str:
    return signing_key.verify_key.encode().hex()


@pytest.fixture
def signer(signing_key: SigningKey) -> Callable[..., dict[str, str]]:
    """Fixture returning a function that builds signed request headers.

    Returns:
        Callable taking the raw body (and optionally a timestamp) and
        returning the two signature headers
    """

    def sign(body: bytes, timestamp: str = TIMESTAMP) -> dict[str, str]:
        signature = signing_key.sign(timestamp.encode() + body).signature
        return {
            "X-Signature-Ed25519": signature.hex(),
            "X-Signature-Timestamp": timestamp,
            "Content-Type": "application/json",
        }

    return sign


@pytest.fixture
def registry() -> CommandRegistry:
    """Fixture with a `ping` slash command and an autocompleting `forecast`."""
    registry = CommandRegistry()

    async def ping(interaction: Interaction) -> Reply:
        return TextReply(content="pong")

    async def forecast(interaction: Interaction) -> Reply:
        return TextReply(content="sunny")

    registry.register(SlashCommand(description="check the bot"), ping)
    registry.register(
        SlashCommand(
            description="get a forecast",
            options=[
                ApplicationCommandOption(
                    type=ApplicationCommandOptionType.STRING,
                    name="city",
                    description="city",
                    auto_complete=["Tokyo", "Kyoto"],
                )
            ],
        ),
        forecast,
    )
    return registry


@pytest.fixture
def router(registry: CommandRegistry) -> InteractionRouter:
    return InteractionRouter(
        registry,
        {
            "en": {"forecast": {"description": "get a forecast", "error": "unknown city {0}"}},
            "fr": {"forecast": {"description": "prévisions", "error": "ville inconnue {0}"}},
        },
    )


@pytest.fixture
def http(router: InteractionRouter, public_key: str) -> TestClient:
    return TestClient(create_app(router, public_key))
