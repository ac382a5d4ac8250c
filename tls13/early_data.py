"""
early_data Extension (RFC 8446 Section 4.2.10)

    struct {} Empty;

    struct {
        select (Handshake.msg_type) {
            case new_session_ticket:   uint32 max_early_data_size;
            case client_hello:         Empty;
            case encrypted_extensions: Empty;
        };
    } EarlyDataIndication;

ServerHello is accepted as a context as well and is always empty.
"""

from enum import Enum

from .constants import (
    EXT_EARLY_DATA, HANDSHAKE_CLIENT_HELLO, HANDSHAKE_SERVER_HELLO,
    HANDSHAKE_ENCRYPTED_EXTENSIONS, HANDSHAKE_NEW_SESSION_TICKET, UINT32_MAX,
)
from .errors import InvalidExtensionData
from .extension import Extension, check_consumed, check_range, report_error
from .wire import encode_u32, decode_u32


class EarlyDataFormat(Enum):
    """Handshake message the early_data extension is carried in."""
    CLIENT_HELLO = 1
    SERVER_HELLO = 2
    ENCRYPTED_EXTENSIONS = 3
    NEW_SESSION_TICKET = 4

    @property
    def handshake_type(self) -> int:
        return {
            EarlyDataFormat.CLIENT_HELLO: HANDSHAKE_CLIENT_HELLO,
            EarlyDataFormat.SERVER_HELLO: HANDSHAKE_SERVER_HELLO,
            EarlyDataFormat.ENCRYPTED_EXTENSIONS: HANDSHAKE_ENCRYPTED_EXTENSIONS,
            EarlyDataFormat.NEW_SESSION_TICKET: HANDSHAKE_NEW_SESSION_TICKET,
        }[self]


class EarlyDataExtension(Extension):
    """early_data extension body."""
    TYPE_ID = EXT_EARLY_DATA

    def __init__(self, format: EarlyDataFormat = EarlyDataFormat.CLIENT_HELLO,
                 max_early_data_size: int = 0):
        self._format = EarlyDataFormat(format)
        self.max_early_data_size = max_early_data_size

    @property
    def format(self) -> EarlyDataFormat:
        return self._format

    @property
    def max_early_data_size(self) -> int:
        """Only carried on the wire in NewSessionTicket."""
        return self._max_early_data_size

    @max_early_data_size.setter
    def max_early_data_size(self, value: int):
        check_range("max_early_data_size", value, UINT32_MAX)
        self._max_early_data_size = value

    def encode(self) -> bytes:
        if self._format is EarlyDataFormat.NEW_SESSION_TICKET:
            return encode_u32(self._max_early_data_size)
        return b""

    @classmethod
    def decode(cls, data: bytes, format: EarlyDataFormat = EarlyDataFormat.CLIENT_HELLO,
               strict: bool = False, debug: bool = False) -> "EarlyDataExtension":
        """
        Decode an early_data extension body.

        Args:
            data: Extension body (without type/length header)
            format: Handshake message the body came from
            strict: Reject bytes beyond what the format defines
            debug: Enable debug output

        Returns:
            EarlyDataExtension: Decoded extension

        Raises:
            InvalidExtensionData: If a NewSessionTicket body is shorter than 4 bytes
        """
        extension = cls(format)
        try:
            if extension.format is EarlyDataFormat.NEW_SESSION_TICKET:
                if len(data) < 4:
                    raise InvalidExtensionData(
                        f"early_data NewSessionTicket body too short: {len(data)} bytes")
                size, offset = decode_u32(data, 0, field="early_data max_early_data_size")
                extension.max_early_data_size = size
            else:
                # nothing to parse; presence of the extension is the signal
                offset = 0
            check_consumed("early_data", data, offset, strict)
        except InvalidExtensionData as e:
            report_error("early_data", e, debug)
            raise

        if debug:
            print(f"    ⏩ early_data ({extension.format.name}): "
                  f"max_early_data_size={extension.max_early_data_size}")
        return extension

    def to_dict(self) -> dict:
        result = {
            "extension": self.name(),
            "format": self._format.name.lower(),
        }
        if self._format is EarlyDataFormat.NEW_SESSION_TICKET:
            result["max_early_data_size"] = self._max_early_data_size
        return result

    def __eq__(self, other):
        if not isinstance(other, EarlyDataExtension):
            return NotImplemented
        return (self._format is other._format
                and self._max_early_data_size == other._max_early_data_size)

    def __repr__(self):
        return (f"EarlyDataExtension(format={self._format.name}, "
                f"max_early_data_size={self._max_early_data_size})")
