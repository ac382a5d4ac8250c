"""
post_handshake_auth Extension (RFC 8446 Section 4.2.6)

Sent by a client willing to authenticate after the handshake. The body is
always empty; whether to request a certificate later is up to the caller.
"""

from .constants import EXT_POST_HANDSHAKE_AUTH
from .errors import InvalidExtensionData
from .extension import Extension, check_consumed, report_error


class PostHandshakeAuthExtension(Extension):
    TYPE_ID = EXT_POST_HANDSHAKE_AUTH

    def encode(self) -> bytes:
        return b""

    @classmethod
    def decode(cls, data: bytes, strict: bool = False,
               debug: bool = False) -> "PostHandshakeAuthExtension":
        try:
            check_consumed("post_handshake_auth", data, 0, strict)
        except InvalidExtensionData as e:
            report_error("post_handshake_auth", e, debug)
            raise
        if debug:
            print("    🪪 post_handshake_auth")
        return cls()

    def to_dict(self) -> dict:
        return {"extension": self.name()}

    def __eq__(self, other):
        if not isinstance(other, PostHandshakeAuthExtension):
            return NotImplemented
        return True

    def __repr__(self):
        return "PostHandshakeAuthExtension()"
