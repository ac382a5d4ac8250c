"""
pre_shared_key Extension (RFC 8446 Section 4.2.11)

This extension MUST be the last extension in ClientHello.

Structure:
    struct {
        opaque identity<1..2^16-1>;
        uint32 obfuscated_ticket_age;
    } PskIdentity;

    opaque PskBinderEntry<32..255>;

    struct {
        PskIdentity identities<7..2^16-1>;
        PskBinderEntry binders<33..2^16-1>;
    } OfferedPsks;

    struct {
        select (Handshake.msg_type) {
            case client_hello: OfferedPsks;
            case server_hello: uint16 selected_identity;
        };
    } PreSharedKeyExtension;

Binder values are treated as opaque here; computing and verifying them
is left to the handshake layer.
"""

from dataclasses import dataclass
from typing import List

from .constants import (
    EXT_PRE_SHARED_KEY, PSK_BINDER_MIN_LENGTH, PSK_BINDER_MAX_LENGTH,
    UINT16_MAX, UINT32_MAX,
)
from .errors import InvalidExtensionData
from .extension import Extension, Role, check_consumed, check_range, report_error
from .wire import (
    encode_u8, encode_u16, encode_u32, decode_u8, decode_u16, decode_u32, read_bytes,
)


@dataclass(frozen=True)
class PSKIdentity:
    """A PSK label (usually a session ticket) and its obfuscated age."""
    identity: bytes = b""
    obfuscated_ticket_age: int = 0

    def __post_init__(self):
        if not isinstance(self.identity, bytes):
            raise ValueError(f"identity must be bytes, got {type(self.identity).__name__}")
        if len(self.identity) > UINT16_MAX:
            raise ValueError(f"identity too long: {len(self.identity)} bytes")
        check_range("obfuscated_ticket_age", self.obfuscated_ticket_age, UINT32_MAX)

    def encode(self) -> bytes:
        return (encode_u16(len(self.identity)) + self.identity
                + encode_u32(self.obfuscated_ticket_age))

    def to_dict(self) -> dict:
        return {
            "identity": self.identity.hex(),
            "obfuscated_ticket_age": self.obfuscated_ticket_age,
        }


def _decode_identities(data: bytes, offset: int) -> tuple:
    """
    Parse the identities section starting at `offset`.

    Returns:
        tuple: (list of PSKIdentity, new_offset)
    """
    section_len, offset = decode_u16(data, offset, field="pre_shared_key identities length")
    if offset + section_len > len(data):
        raise InvalidExtensionData(
            f"pre_shared_key identities length {section_len} exceeds remaining "
            f"{len(data) - offset} bytes")

    end = offset + section_len
    identities = []
    while offset < end:
        if offset + 2 > end:
            raise InvalidExtensionData("pre_shared_key identity length field incomplete")
        identity_len, offset = decode_u16(data, offset, end, "pre_shared_key identity length")
        # identity bytes and the 4-byte age must both fit in the section
        if offset + identity_len + 4 > end:
            raise InvalidExtensionData(
                f"pre_shared_key identity incomplete: need {identity_len + 4} bytes, "
                f"have {end - offset}")
        identity, offset = read_bytes(data, offset, identity_len, end, "pre_shared_key identity")
        age, offset = decode_u32(data, offset, end, "pre_shared_key obfuscated_ticket_age")
        identities.append(PSKIdentity(identity, age))
    return identities, offset


def _decode_binders(data: bytes, offset: int) -> tuple:
    """
    Parse the binders section starting at `offset`.

    Returns:
        tuple: (list of binder bytes, new_offset)
    """
    if offset + 2 > len(data):
        raise InvalidExtensionData("pre_shared_key binders length field missing")
    section_len, offset = decode_u16(data, offset, field="pre_shared_key binders length")
    if offset + section_len > len(data):
        raise InvalidExtensionData(
            f"pre_shared_key binders length {section_len} exceeds remaining "
            f"{len(data) - offset} bytes")

    end = offset + section_len
    binders = []
    while offset < end:
        binder_len, offset = decode_u8(data, offset, end, "pre_shared_key binder length")
        if offset + binder_len > end:
            raise InvalidExtensionData(
                f"pre_shared_key binder incomplete: declared {binder_len} bytes, "
                f"have {end - offset}")
        binder, offset = read_bytes(data, offset, binder_len, end, "pre_shared_key binder")
        binders.append(binder)
    return binders, offset


class PreSharedKeyExtension(Extension):
    """
    pre_shared_key extension body.

    Client format carries the offered identities and their binders, which
    are separate length-prefixed lists paired by position. Server format
    carries only the index of the identity the server accepted.
    """
    TYPE_ID = EXT_PRE_SHARED_KEY

    def __init__(self, role: Role = Role.CLIENT, identities: List[PSKIdentity] = None,
                 binders: List[bytes] = None, selected_identity: int = 0):
        self._role = Role(role)
        self._identities = []
        self._binders = []
        for identity in identities or ():
            self.add_identity(identity)
        for binder in binders or ():
            self.add_binder(binder)
        self.selected_identity = selected_identity

    @property
    def role(self) -> Role:
        return self._role

    @property
    def is_server_format(self) -> bool:
        return self._role is Role.SERVER

    @property
    def identities(self) -> tuple:
        return tuple(self._identities)

    @property
    def binders(self) -> tuple:
        return tuple(self._binders)

    @property
    def selected_identity(self) -> int:
        return self._selected_identity

    @selected_identity.setter
    def selected_identity(self, value: int):
        check_range("selected_identity", value, UINT16_MAX)
        self._selected_identity = value

    def add_identity(self, identity: PSKIdentity) -> "PreSharedKeyExtension":
        if not isinstance(identity, PSKIdentity):
            raise ValueError(f"expected PSKIdentity, got {type(identity).__name__}")
        self._identities.append(identity)
        return self

    def add_binder(self, binder: bytes) -> "PreSharedKeyExtension":
        if not isinstance(binder, bytes):
            raise ValueError(f"binder must be bytes, got {type(binder).__name__}")
        if len(binder) > PSK_BINDER_MAX_LENGTH:
            raise ValueError(f"binder too long: {len(binder)} bytes")
        self._binders.append(binder)
        return self

    def validate(self):
        """
        Apply the RFC 8446 offer rules that the wire format alone does not
        enforce.

        Raises:
            InvalidExtensionData: If the offer is not a valid OfferedPsks
        """
        if self.is_server_format:
            return
        if not self.identities:
            raise InvalidExtensionData("pre_shared_key offers no identities")
        if len(self.identities) != len(self.binders):
            raise InvalidExtensionData(
                f"pre_shared_key has {len(self.identities)} identities but "
                f"{len(self.binders)} binders")
        for index, identity in enumerate(self.identities):
            if not identity.identity:
                raise InvalidExtensionData(f"pre_shared_key identity {index} is empty")
        for index, binder in enumerate(self.binders):
            if not PSK_BINDER_MIN_LENGTH <= len(binder) <= PSK_BINDER_MAX_LENGTH:
                raise InvalidExtensionData(
                    f"pre_shared_key binder {index} is {len(binder)} bytes, expected "
                    f"{PSK_BINDER_MIN_LENGTH}..{PSK_BINDER_MAX_LENGTH}")

    def encode(self) -> bytes:
        if self.is_server_format:
            return encode_u16(self.selected_identity)

        identities = b"".join(identity.encode() for identity in self.identities)
        binders = b"".join(encode_u8(len(binder)) + binder for binder in self.binders)
        return (encode_u16(len(identities)) + identities
                + encode_u16(len(binders)) + binders)

    def binders_length(self) -> int:
        """
        Size of the encoded binders section, including its 2-byte length.

        The handshake layer hashes the ClientHello truncated by this many
        bytes when computing binders.
        """
        return 2 + sum(1 + len(binder) for binder in self.binders)

    @classmethod
    def decode(cls, data: bytes, role: Role = Role.CLIENT, strict: bool = False,
               debug: bool = False) -> "PreSharedKeyExtension":
        """
        Decode a pre_shared_key extension body.

        Args:
            data: Extension body (without type/length header)
            role: Role of the sender
            strict: Also enforce validate() and reject trailing bytes
            debug: Enable debug output

        Returns:
            PreSharedKeyExtension: Decoded extension

        Raises:
            InvalidExtensionData: If the body is truncated or inconsistent
        """
        role = Role(role)
        try:
            if role is Role.SERVER:
                if len(data) < 2:
                    raise InvalidExtensionData(
                        f"pre_shared_key server body too short: {len(data)} bytes")
                selected, offset = decode_u16(data, 0, field="pre_shared_key selected_identity")
                extension = cls(role, selected_identity=selected)
                if debug:
                    print(f"    🎫 pre_shared_key (server): selected_identity={selected}")
            else:
                # Two 2-byte section lengths at minimum
                if len(data) < 4:
                    raise InvalidExtensionData(
                        f"pre_shared_key client body too short: {len(data)} bytes")
                identities, offset = _decode_identities(data, 0)
                binders, offset = _decode_binders(data, offset)
                extension = cls(role, identities, binders)
                if debug:
                    for identity in identities:
                        print(f"    🎫 pre_shared_key identity: {len(identity.identity)} bytes, "
                              f"age=0x{identity.obfuscated_ticket_age:08x}")
                    for binder in binders:
                        print(f"    🎫 pre_shared_key binder: {binder.hex()[:64]}")
            check_consumed("pre_shared_key", data, offset, strict)
            if strict:
                extension.validate()
        except InvalidExtensionData as e:
            report_error("pre_shared_key", e, debug)
            raise
        return extension

    def to_dict(self) -> dict:
        result = {
            "extension": self.name(),
            "role": self.role.value,
        }
        if self.is_server_format:
            result["selected_identity"] = self.selected_identity
        else:
            result["identities"] = [identity.to_dict() for identity in self.identities]
            result["binders"] = [binder.hex() for binder in self.binders]
        return result

    def __eq__(self, other):
        if not isinstance(other, PreSharedKeyExtension):
            return NotImplemented
        return (self.role is other.role
                and self.identities == other.identities
                and self.binders == other.binders
                and self.selected_identity == other.selected_identity)

    def __repr__(self):
        if self.is_server_format:
            return f"PreSharedKeyExtension(role=server, selected_identity={self.selected_identity})"
        return (f"PreSharedKeyExtension(role=client, identities={len(self.identities)}, "
                f"binders={len(self.binders)})")
