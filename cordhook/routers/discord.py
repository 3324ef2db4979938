from cordhook.core.auth import discord_key_validator
from fastapi import APIRouter, Depends, Request
from cordhook.errors import MalformedPayload
from pydantic_core import ValidationError
from cordhook.discord import Interaction
from fastapi.responses import Response
from typing import Annotated
import logfire

router = APIRouter(prefix='/discord', tags=['Discord'])


@router.post(
    '/interaction',
    include_in_schema=False)
async def post__interaction(
    request: Request,
    body: Annotated[bytes, Depends(discord_key_validator)]
) -> Response:
    try:
        interaction = Interaction.model_validate_json(body)
    except ValidationError as e:
        raise MalformedPayload(str(e)) from e

    logfire.debug(
        'received interaction {interaction_id} of type {interaction_type}',
        interaction_id=interaction.id,
        interaction_type=interaction.type)

    response = await request.app.state.client.dispatch(interaction)

    return response.as_http()
