"""
key_share Extension (RFC 8446 Section 4.2.8)

    struct {
        NamedGroup group;
        opaque key_exchange<1..2^16-1>;
    } KeyShareEntry;

    struct {
        KeyShareEntry client_shares<0..2^16-1>;
    } KeyShareClientHello;

    struct {
        KeyShareEntry server_share;
    } KeyShareServerHello;
"""

from dataclasses import dataclass
from typing import List, Optional

from .constants import EXT_KEY_SHARE, GROUP_NAMES, UINT16_MAX
from .errors import InvalidExtensionData
from .extension import Extension, Role, check_consumed, check_range, report_error
from .wire import encode_u16, decode_u16, read_bytes


@dataclass(frozen=True)
class KeyShareEntry:
    """One (group, key_exchange) pair."""
    group: int
    key_exchange: bytes = b""

    def __post_init__(self):
        check_range("group", self.group, UINT16_MAX)
        if not isinstance(self.key_exchange, bytes):
            raise ValueError(f"key_exchange must be bytes, got {type(self.key_exchange).__name__}")
        if len(self.key_exchange) > UINT16_MAX:
            raise ValueError(f"key_exchange too long: {len(self.key_exchange)} bytes")

    @property
    def group_name(self) -> str:
        return GROUP_NAMES.get(self.group, f"0x{self.group:04x}")

    def encode(self) -> bytes:
        return encode_u16(self.group) + encode_u16(len(self.key_exchange)) + self.key_exchange

    def to_dict(self) -> dict:
        return {
            "group": self.group_name,
            "key_exchange": self.key_exchange.hex(),
        }


def _decode_entry(data: bytes, offset: int, end: int) -> tuple:
    """
    Parse one KeyShareEntry that must lie entirely before `end`.

    Returns:
        tuple: (KeyShareEntry, new_offset)
    """
    if offset + 4 > end:
        raise InvalidExtensionData(
            f"key_share entry header incomplete: need 4 bytes, have {end - offset}")
    group, offset = decode_u16(data, offset, end, "key_share group")
    key_len, offset = decode_u16(data, offset, end, "key_share key_exchange length")
    if offset + key_len > end:
        raise InvalidExtensionData(
            f"key_share key_exchange incomplete: declared {key_len} bytes, have {end - offset}")
    key_exchange, offset = read_bytes(data, offset, key_len, end, "key_share key_exchange")
    return KeyShareEntry(group, key_exchange), offset


class KeyShareExtension(Extension):
    """
    key_share extension body.

    The client sends a list of entries in preference order; the server
    answers with exactly one entry and no list length, so a server-role
    extension must be built with its entry.
    """
    TYPE_ID = EXT_KEY_SHARE

    def __init__(self, role: Role = Role.CLIENT, entries: List[KeyShareEntry] = None):
        self._role = Role(role)
        entries = list(entries) if entries else []
        if self._role is Role.SERVER and len(entries) != 1:
            raise ValueError(f"server key_share carries exactly one entry, got {len(entries)}")
        self._entries = []
        for entry in entries:
            self._append(entry)

    @property
    def role(self) -> Role:
        return self._role

    @property
    def is_server_format(self) -> bool:
        return self._role is Role.SERVER

    @property
    def entries(self) -> tuple:
        return tuple(self._entries)

    def _append(self, entry: KeyShareEntry):
        if not isinstance(entry, KeyShareEntry):
            raise ValueError(f"expected KeyShareEntry, got {type(entry).__name__}")
        self._entries.append(entry)

    def add_entry(self, entry: KeyShareEntry) -> "KeyShareExtension":
        if self.is_server_format:
            raise ValueError("server key_share carries exactly one entry")
        self._append(entry)
        return self

    def get_entry_by_group(self, group: int) -> Optional[KeyShareEntry]:
        """Return the first entry offered for `group`, or None."""
        for entry in self._entries:
            if entry.group == group:
                return entry
        return None

    def encode(self) -> bytes:
        entries = b"".join(entry.encode() for entry in self._entries)
        if self.is_server_format:
            return entries
        return encode_u16(len(entries)) + entries

    @classmethod
    def decode(cls, data: bytes, role: Role = Role.CLIENT, strict: bool = False,
               debug: bool = False) -> "KeyShareExtension":
        """
        Decode a key_share extension body.

        Args:
            data: Extension body (without type/length header)
            role: Role of the sender
            strict: Reject trailing bytes after the body
            debug: Enable debug output

        Returns:
            KeyShareExtension: Decoded extension

        Raises:
            InvalidExtensionData: If the body is truncated or inconsistent
        """
        role = Role(role)
        try:
            if role is Role.SERVER:
                entries, offset = cls._decode_server(data, debug)
            else:
                entries, offset = cls._decode_client(data, debug)
            check_consumed("key_share", data, offset, strict)
        except InvalidExtensionData as e:
            report_error("key_share", e, debug)
            raise
        return cls(role, entries)

    @staticmethod
    def _decode_server(data: bytes, debug: bool) -> tuple:
        if len(data) < 4:
            raise InvalidExtensionData(
                f"key_share server body too short: {len(data)} bytes")
        entry, offset = _decode_entry(data, 0, len(data))
        if debug:
            print(f"    🔑 key_share (server): {entry.group_name}, {len(entry.key_exchange)} bytes")
        return [entry], offset

    @staticmethod
    def _decode_client(data: bytes, debug: bool) -> tuple:
        if len(data) < 2:
            raise InvalidExtensionData(
                f"key_share client body too short: {len(data)} bytes")
        list_len, offset = decode_u16(data, 0, field="key_share client_shares length")
        if offset + list_len > len(data):
            raise InvalidExtensionData(
                f"key_share client_shares length {list_len} exceeds remaining {len(data) - offset} bytes")

        end = offset + list_len
        entries = []
        while offset < end:
            entry, offset = _decode_entry(data, offset, end)
            entries.append(entry)
            if debug:
                print(f"    🔑 key_share (client): {entry.group_name}, {len(entry.key_exchange)} bytes")
        return entries, offset

    def to_dict(self) -> dict:
        return {
            "extension": self.name(),
            "role": self.role.value,
            "entries": [entry.to_dict() for entry in self.entries],
        }

    def __eq__(self, other):
        if not isinstance(other, KeyShareExtension):
            return NotImplemented
        return self.role is other.role and self.entries == other.entries

    def __repr__(self):
        return f"KeyShareExtension(role={self.role.value}, entries={self.entries!r})"
