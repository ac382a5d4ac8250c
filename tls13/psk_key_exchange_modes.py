"""
psk_key_exchange_modes Extension (RFC 8446 Section 4.2.9)

    enum { psk_ke(0), psk_dhe_ke(1), (255) } PskKeyExchangeMode;

    struct {
        PskKeyExchangeMode ke_modes<1..255>;
    } PskKeyExchangeModes;

Only the client sends this extension.
"""

from typing import List

from .constants import EXT_PSK_KEY_EXCHANGE_MODES, PSK_KE, PSK_DHE_KE, PSK_MODE_NAMES, UINT8_MAX
from .errors import InvalidExtensionData
from .extension import Extension, check_consumed, check_range, report_error
from .wire import encode_u8, decode_u8, read_bytes


class PSKKeyExchangeModesExtension(Extension):
    """psk_key_exchange_modes extension body: a flat list of mode bytes."""
    TYPE_ID = EXT_PSK_KEY_EXCHANGE_MODES

    PSK_KE = PSK_KE
    PSK_DHE_KE = PSK_DHE_KE

    def __init__(self, modes: List[int] = None):
        modes = list(modes) if modes else []
        if len(modes) > UINT8_MAX:
            raise ValueError(f"at most {UINT8_MAX} modes fit in the list, got {len(modes)}")
        for mode in modes:
            check_range("mode", mode, UINT8_MAX)
        self._modes = tuple(modes)

    @property
    def modes(self) -> tuple:
        return self._modes

    def supports(self, mode: int) -> bool:
        return mode in self._modes

    def encode(self) -> bytes:
        return encode_u8(len(self.modes)) + bytes(self.modes)

    @classmethod
    def decode(cls, data: bytes, strict: bool = False,
               debug: bool = False) -> "PSKKeyExchangeModesExtension":
        """
        Decode a psk_key_exchange_modes extension body.

        Args:
            data: Extension body (without type/length header)
            strict: Require at least one mode and no trailing bytes
            debug: Enable debug output

        Returns:
            PSKKeyExchangeModesExtension: Decoded extension

        Raises:
            InvalidExtensionData: If fewer than 1 + list length bytes are present
        """
        try:
            list_len, offset = decode_u8(data, 0, field="psk_key_exchange_modes length")
            if offset + list_len > len(data):
                raise InvalidExtensionData(
                    f"psk_key_exchange_modes length {list_len} exceeds remaining "
                    f"{len(data) - offset} bytes")
            raw, offset = read_bytes(data, offset, list_len, field="psk_key_exchange_modes")
            if strict and not raw:
                raise InvalidExtensionData("psk_key_exchange_modes list is empty")
            check_consumed("psk_key_exchange_modes", data, offset, strict)
        except InvalidExtensionData as e:
            report_error("psk_key_exchange_modes", e, debug)
            raise

        modes = list(raw)
        if debug:
            names = [PSK_MODE_NAMES.get(mode, f"0x{mode:02x}") for mode in modes]
            print(f"    🔐 psk_key_exchange_modes: {', '.join(names) or '(none)'}")
        return cls(modes)

    def to_dict(self) -> dict:
        return {
            "extension": self.name(),
            "modes": [PSK_MODE_NAMES.get(mode, f"0x{mode:02x}") for mode in self.modes],
        }

    def __eq__(self, other):
        if not isinstance(other, PSKKeyExchangeModesExtension):
            return NotImplemented
        return self.modes == other.modes

    def __repr__(self):
        return f"PSKKeyExchangeModesExtension(modes={self.modes!r})"
