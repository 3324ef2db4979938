"""Tests for reply encoding."""

import orjson
import pytest

from cordhook.discord import (
    Attachment,
    InteractionCallbackType,
    InteractionResponse,
    MessageFlag,
    StructuredReply,
    TextReply,
)


def _split_multipart(content_type: str, body: bytes) -> dict[bytes, tuple[bytes, bytes]]:
    """Split a multipart body into {disposition line: (headers, payload)}."""
    boundary = content_type.split("boundary=", 1)[1].encode()
    parts: dict[bytes, tuple[bytes, bytes]] = {}

    for chunk in body.split(b"--" + boundary):
        if not chunk.strip() or chunk.strip() == b"--":
            continue

        headers, payload = chunk.strip(b"\r\n").split(b"\r\n\r\n", 1)
        disposition = headers.split(b"\r\n")[0]
        parts[disposition] = (headers, payload)

    return parts


class TestFlags:
    """Tests for flag bit composition."""

    @pytest.mark.parametrize(
        ("ephemeral", "suppress_embeds", "flags"),
        [(True, False, 64), (True, True, 68), (False, True, 4), (False, False, 0)],
    )
    def test_flag_bits(self, ephemeral: bool, suppress_embeds: bool, flags: int) -> None:
        reply = StructuredReply(content="x", ephemeral=ephemeral, suppress_embeds=suppress_embeds)

        assert reply.as_message()["flags"] == flags

    def test_absent_flags_are_zero(self) -> None:
        assert StructuredReply(content="x").as_message()["flags"] == 0

    def test_explicit_flags_are_combined(self) -> None:
        reply = StructuredReply(content="x", flags=MessageFlag.SUPPRESS_NOTIFICATIONS, ephemeral=True)

        assert reply.as_message()["flags"] == (1 << 12) | 64


class TestStructuredReply:
    """Tests for structured reply payloads."""

    def test_request_only_fields_are_stripped(self) -> None:
        message = StructuredReply(content="x", ephemeral=True, suppress_embeds=True).as_message()

        assert "ephemeral" not in message
        assert "suppress_embeds" not in message
        assert "kind" not in message

    def test_other_fields_pass_through(self) -> None:
        embed = {"title": "hi", "fields": [{"name": "a", "value": "b"}]}

        message = StructuredReply(content="x", embeds=[embed], tts=True).as_message()

        assert message == {"flags": 0, "content": "x", "embeds": [embed], "tts": True}

    def test_passthrough_null_is_kept(self) -> None:
        message = StructuredReply(content="x", poll=None, tts=False).as_message()

        assert message == {"flags": 0, "content": "x", "poll": None, "tts": False}

    def test_unset_declared_fields_are_omitted(self) -> None:
        message = StructuredReply(content="x", embeds=None).as_message()

        assert message == {"flags": 0, "content": "x"}

    def test_attachment_metadata_is_listed(self) -> None:
        reply = StructuredReply(
            attachments=[Attachment(id=3, filename="a.png", data=b"\x89PNG", description="pic")]
        )

        assert reply.as_message()["attachments"] == [
            {"id": 3, "filename": "a.png", "description": "pic"}
        ]


class TestInteractionResponse:
    """Tests for the response envelope and its HTTP rendering."""

    def test_text_reply_round_trip(self) -> None:
        response = InteractionResponse.from_reply(TextReply(content="hello"))

        body = orjson.loads(response.as_http().body)

        assert body == {"type": 4, "data": {"content": "hello"}}
        assert body["type"] == InteractionCallbackType.CHANNEL_MESSAGE_WITH_SOURCE.value

    def test_pong_has_no_data(self) -> None:
        response = InteractionResponse.pong()

        assert orjson.loads(response.as_http().body) == {"type": 1}

    def test_autocomplete_result(self) -> None:
        response = InteractionResponse.autocomplete_result(["Tokyo"])

        assert response.envelope == {"type": 8, "data": {"choices": ["Tokyo"]}}

    def test_without_attachments_is_json(self) -> None:
        http = InteractionResponse.from_reply(StructuredReply(content="x")).as_http()

        assert http.media_type == "application/json"

    def test_attachments_are_multipart(self) -> None:
        reply = StructuredReply(
            content="see attached",
            ephemeral=True,
            attachments=[
                Attachment(id=0, filename="report.txt", data=b"line one\r\nline two"),
                Attachment(id=1, filename="b.bin", data=b"\x00\x01"),
            ],
        )

        http = InteractionResponse.from_reply(reply).as_http()

        assert http.media_type.startswith("multipart/form-data; boundary=")
        parts = _split_multipart(http.media_type, http.body)

        _, payload = parts[b'Content-Disposition: form-data; name="payload_json"']
        assert orjson.loads(payload) == {
            "type": 4,
            "data": {
                "flags": 64,
                "content": "see attached",
                "attachments": [
                    {"id": 0, "filename": "report.txt"},
                    {"id": 1, "filename": "b.bin"},
                ],
            },
        }

        _, first = parts[b'Content-Disposition: form-data; name="files[0]"; filename="report.txt"']
        assert first == b"line one\r\nline two"

        _, second = parts[b'Content-Disposition: form-data; name="files[1]"; filename="b.bin"']
        assert second == b"\x00\x01"
