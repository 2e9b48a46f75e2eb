"""Signed, self-contained session tokens carried in a cookie."""

import base64
import binascii
import json
import logging
import time
from collections.abc import Callable
from typing import Any

from pydantic import ValidationError
from starlette.responses import Response

from brainfeed.core.signing import SignatureCodec
from brainfeed.schemas.auth import SessionData

logger = logging.getLogger(__name__)

TOKEN_SEPARATOR = "."


def _b64url_encode(raw: bytes) -> str:
    return base64.urlsafe_b64encode(raw).rstrip(b"=").decode("ascii")


def _b64url_decode(encoded: str) -> bytes:
    padding = "=" * (-len(encoded) % 4)
    return base64.urlsafe_b64decode(encoded + padding)


class SessionManager:
    """
    Encode a SessionData payload into `<base64url(json)>.<hmac>` and back.

    The signed JSON also carries an `exp` timestamp; tokens past it are rejected
    even if the client still holds the cookie. No server-side store is involved.
    """

    def __init__(
        self,
        codec: SignatureCodec,
        max_age_seconds: int,
        cookie_name: str = "session",
        secure_cookie: bool = False,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self._codec = codec
        self.max_age_seconds = max_age_seconds
        self.cookie_name = cookie_name
        self.secure_cookie = secure_cookie
        self._clock = clock

    def create(self, payload: SessionData) -> str:
        """Serialize, sign and return the token string for payload."""
        body: dict[str, Any] = payload.model_dump()
        body["exp"] = int(self._clock()) + self.max_age_seconds
        raw = json.dumps(body, sort_keys=True, separators=(",", ":")).encode("utf-8")
        encoded = _b64url_encode(raw)
        signature = self._codec.sign(encoded.encode("ascii"))
        return f"{encoded}{TOKEN_SEPARATOR}{signature}"

    def parse(self, token: str | None) -> SessionData | None:
        """
        Return the payload of a valid token, or None.

        Malformed, unsigned, tampered, undecodable and expired tokens all yield None.
        """
        if not token:
            return None
        parts = token.split(TOKEN_SEPARATOR)
        if len(parts) != 2 or not parts[0] or not parts[1]:
            return None
        encoded, signature = parts
        if not self._codec.verify(encoded.encode("utf-8", errors="surrogatepass"), signature):
            return None
        try:
            body = json.loads(_b64url_decode(encoded))
        except (binascii.Error, ValueError):
            logger.warning("Signed session token has an undecodable payload")
            return None
        if not isinstance(body, dict):
            return None
        exp = body.pop("exp", None)
        if not isinstance(exp, int) or isinstance(exp, bool) or exp <= self._clock():
            return None
        try:
            return SessionData.model_validate(body)
        except ValidationError:
            return None

    def set_cookie(self, response: Response, token: str) -> None:
        response.set_cookie(
            key=self.cookie_name,
            value=token,
            max_age=self.max_age_seconds,
            path="/",
            secure=self.secure_cookie,
            httponly=True,
            samesite="lax",
        )

    def destroy(self, response: Response) -> None:
        """Tell the client to discard the session cookie."""
        response.delete_cookie(
            key=self.cookie_name,
            path="/",
            secure=self.secure_cookie,
            httponly=True,
            samesite="lax",
        )
