from __future__ import annotations
from .enums import InteractionCallbackType, MessageFlag
from fastapi.responses import Response
from pydantic import ConfigDict, Field
from typing import Any, Literal
from .base import RawBaseModel
from orjson import dumps
from io import BytesIO
from uuid import uuid4


__all__ = (
    'Attachment',
    'InteractionResponse',
    'Reply',
    'StructuredReply',
    'TextReply',
    'create_multipart',
)


class Attachment(RawBaseModel):
    id: int
    filename: str
    data: bytes = Field(exclude=True)
    description: str | None = None
    content_type: str = Field('application/octet-stream', exclude=True)

    @property
    def form_name(self) -> str:
        return f'files[{self.id}]'


class TextReply(RawBaseModel):
    kind: Literal['text'] = 'text'
    content: str

    def as_message(self) -> dict[str, Any]:
        return {'content': self.content}


class StructuredReply(RawBaseModel):
    # ? unknown message fields (tts, poll, etc.) are passed through untouched
    model_config = ConfigDict(frozen=True, extra='allow')

    kind: Literal['structured'] = 'structured'
    content: str | None = None
    embeds: list[dict[str, Any]] | None = None
    components: list[dict[str, Any]] | None = None
    allowed_mentions: dict[str, Any] | None = None
    ephemeral: bool = False
    suppress_embeds: bool = False
    flags: MessageFlag = MessageFlag.NONE
    attachments: list[Attachment] = Field(default_factory=list)

    @property
    def message_flags(self) -> MessageFlag:
        flags = self.flags

        if self.ephemeral:
            flags |= MessageFlag.EPHEMERAL

        if self.suppress_embeds:
            flags |= MessageFlag.SUPPRESS_EMBEDS

        return flags

    def as_message(self) -> dict[str, Any]:
        json: dict[str, Any] = {'flags': self.message_flags.value}

        extra = set(self.model_extra or {})

        json.update(self.model_dump(
            mode='json',
            exclude={'kind', 'ephemeral', 'suppress_embeds', 'flags', 'attachments'} | extra,
            exclude_none=True
        ))

        # ? passthrough fields go out exactly as given, explicit nulls included
        if extra:
            json.update(self.model_dump(mode='json', include=extra))

        if self.attachments:
            json['attachments'] = [
                attachment.as_payload()
                for attachment in self.attachments
            ]

        return json


Reply = TextReply | StructuredReply


def create_multipart(
    json_payload: dict,
    files: list[Attachment]
) -> tuple[str, bytes]:  # boundary, body
    boundary = uuid4().hex

    body = BytesIO()

    body.write(f'--{boundary}\r\n'.encode('latin-1'))
    body.write(
        'Content-Disposition: form-data; name="payload_json"\r\n'.encode('latin-1'))
    body.write('Content-Type: application/json\r\n\r\n'.encode('latin-1'))
    body.write(dumps(json_payload))
    body.write(b'\r\n')

    for file in files:
        filename = file.filename.replace('"', '%22')

        body.write(f'--{boundary}\r\n'.encode('latin-1'))
        body.write(
            f'Content-Disposition: form-data; name="{file.form_name}"; filename="{filename}"\r\n'.encode())
        body.write(
            f'Content-Type: {file.content_type}\r\n\r\n'.encode('latin-1'))
        body.write(file.data)
        body.write(b'\r\n')

    body.write(f'--{boundary}--\r\n'.encode('latin-1'))

    return boundary, body.getvalue()


class InteractionResponse(RawBaseModel):
    type: InteractionCallbackType
    data: dict[str, Any] | None = None
    files: list[Attachment] = Field(default_factory=list, exclude=True)

    @classmethod
    def pong(cls) -> InteractionResponse:
        return cls(type=InteractionCallbackType.PONG)

    @classmethod
    def from_reply(cls, reply: Reply) -> InteractionResponse:
        match reply:
            case TextReply():
                return cls(
                    type=InteractionCallbackType.CHANNEL_MESSAGE_WITH_SOURCE,
                    data=reply.as_message()
                )
            case StructuredReply():
                return cls(
                    type=InteractionCallbackType.CHANNEL_MESSAGE_WITH_SOURCE,
                    data=reply.as_message(),
                    files=reply.attachments
                )

        raise TypeError(f'unsupported reply type {type(reply).__name__}')

    @classmethod
    def autocomplete_result(cls, choices: list[Any]) -> InteractionResponse:
        return cls(
            type=InteractionCallbackType.APPLICATION_COMMAND_AUTOCOMPLETE_RESULT,
            data={'choices': choices}
        )

    @property
    def envelope(self) -> dict[str, Any]:
        json: dict[str, Any] = {'type': self.type.value}

        if self.data is not None:
            json['data'] = self.data

        return json

    def as_http(self) -> Response:
        if not self.files:
            return Response(
                content=dumps(self.envelope),
                media_type='application/json'
            )

        boundary, body = create_multipart(self.envelope, self.files)

        return Response(
            content=body,
            media_type=f'multipart/form-data; boundary={boundary}'
        )
