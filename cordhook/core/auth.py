from nacl.exceptions import BadSignatureError
from cordhook.errors import AuthenticationFailure
from nacl.signing import VerifyKey
from fastapi import Request, Header
from typing import Annotated
import logfire


def verify_signature(
    body: bytes,
    timestamp: str | None,
    signature: str | None,
    public_key: str
) -> bool:
    # ? fail before touching any crypto if either header is missing
    if not timestamp or not signature:
        return False

    try:
        verify_key = VerifyKey(bytes.fromhex(public_key))
        verify_key.verify(
            timestamp.encode() + body,
            bytes.fromhex(signature)
        )
    except (BadSignatureError, ValueError) as e:
        # ? nacl raises ValueError subclasses for keys/signatures of the wrong length
        logfire.debug(
            'signature verification failed: {error}',
            error=str(e) or type(e).__name__)
        return False

    return True


async def discord_key_validator(
    request: Request,
    x_signature_ed25519: Annotated[str | None, Header()] = None,
    x_signature_timestamp: Annotated[str | None, Header()] = None,
) -> bytes:
    if not x_signature_ed25519 or not x_signature_timestamp:
        raise AuthenticationFailure('missing signature headers')

    body = await request.body()

    if not verify_signature(
        body,
        x_signature_timestamp,
        x_signature_ed25519,
        request.app.state.public_key
    ):
        raise AuthenticationFailure('invalid request signature')

    return body
