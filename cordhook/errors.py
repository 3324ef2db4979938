from __future__ import annotations
from fastapi.responses import Response
from typing import TYPE_CHECKING
from fastapi import Request
import logfire


if TYPE_CHECKING:
    from fastapi import FastAPI


class BaseCordhookException(Exception):
    ...


class AuthenticationFailure(BaseCordhookException):
    status_code: int = 401
    ...


class MalformedPayload(BaseCordhookException):
    status_code: int = 400
    ...


class UnknownCommand(BaseCordhookException):
    status_code: int = 500

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f'command {name!r} is not registered')


class DuplicateCommandError(BaseCordhookException):
    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f'command {name!r} is already registered')


class InteractionError(BaseCordhookException):
    ...


class HTTPException(BaseCordhookException):
    status_code: int = 0
    ...


class Unauthorized(HTTPException):
    status_code: int = 401
    ...


class Forbidden(HTTPException):
    status_code: int = 403
    ...


class NotFound(HTTPException):
    status_code: int = 404
    ...


class ServerError(HTTPException):
    status_code: int = 500
    ...


async def on_authentication_failure(
    request: Request,
    error: AuthenticationFailure
) -> Response:
    # ? never tell the caller which check failed
    return Response(status_code=error.status_code)


async def on_malformed_payload(
    request: Request,
    error: MalformedPayload
) -> Response:
    logfire.debug(
        'malformed interaction payload: {error}',
        error=str(error))

    return Response(status_code=error.status_code)


async def on_unknown_command(
    request: Request,
    error: UnknownCommand
) -> Response:
    logfire.error(
        'interaction for unregistered command {command_name}',
        command_name=error.name,
        _exc_info=error)

    return Response(status_code=error.status_code)


def install_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(AuthenticationFailure, on_authentication_failure)  # type: ignore[arg-type]
    app.add_exception_handler(MalformedPayload, on_malformed_payload)  # type: ignore[arg-type]
    app.add_exception_handler(UnknownCommand, on_unknown_command)  # type: ignore[arg-type]
