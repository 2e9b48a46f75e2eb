"""HMAC-SHA256 signing and constant-time verification of opaque byte strings."""

import hashlib
import hmac


class SignatureCodec:
    """
    Sign and verify byte blobs with a shared secret.

    Signatures are lowercase hex HMAC-SHA256 digests. The same data and secret
    always produce the same signature.
    """

    def __init__(self, secret: str | bytes) -> None:
        if isinstance(secret, str):
            secret = secret.encode("utf-8")
        if not secret:
            raise ValueError("Signing secret must be non-empty")
        self._secret = secret

    def sign(self, data: bytes) -> str:
        """Return the hex HMAC-SHA256 of data."""
        return hmac.new(self._secret, data, hashlib.sha256).hexdigest()

    def verify(self, data: bytes, signature: str | bytes) -> bool:
        """Return True iff signature matches sign(data). Never raises."""
        if isinstance(signature, str):
            signature = signature.encode("utf-8", errors="surrogatepass")
        elif not isinstance(signature, bytes):
            return False
        expected = self.sign(data).encode("ascii")
        # compare_digest handles unequal lengths without an early exit on content
        return hmac.compare_digest(expected, signature)
