"""
TLS Presentation Language Primitives (RFC 8446 Section 3)

Big-endian fixed-width integers and length-prefixed opaque vectors.
Every decoder takes an explicit `end` bound so that fields inside a
length-prefixed section are checked against the section, not the buffer.
"""

import struct

from .errors import TruncatedInput


def _check_bound(data: bytes, offset: int, size: int, end: int, field: str) -> int:
    """
    Verify that `size` bytes starting at `offset` fit before `end`.

    Args:
        data: Buffer being decoded
        offset: Position of the field
        size: Number of bytes the field needs
        end: Bound the field must not cross (None = end of buffer)
        field: Field name used in the error reason

    Returns:
        int: The resolved bound
    """
    if end is None or end > len(data):
        end = len(data)
    if offset < 0 or offset + size > end:
        have = max(end - offset, 0)
        raise TruncatedInput(f"{field}: need {size} bytes at offset {offset}, have {have}")
    return end


def encode_u8(value: int) -> bytes:
    """Encode an unsigned 8-bit integer."""
    return struct.pack("B", value)


def encode_u16(value: int) -> bytes:
    """Encode an unsigned 16-bit integer (big-endian)."""
    return struct.pack(">H", value)


def encode_u32(value: int) -> bytes:
    """Encode an unsigned 32-bit integer (big-endian)."""
    return struct.pack(">I", value)


def decode_u8(data: bytes, offset: int = 0, end: int = None, field: str = "uint8") -> tuple:
    """
    Decode an unsigned 8-bit integer.

    Returns:
        tuple: (value, new_offset)
    """
    _check_bound(data, offset, 1, end, field)
    return data[offset], offset + 1


def decode_u16(data: bytes, offset: int = 0, end: int = None, field: str = "uint16") -> tuple:
    """
    Decode a big-endian unsigned 16-bit integer.

    Args:
        data: Bytes to decode from
        offset: Starting offset in data
        end: Bound the field must not cross (default: end of data)
        field: Field name used in the error reason

    Returns:
        tuple: (value, new_offset)

    Raises:
        TruncatedInput: If fewer than 2 bytes remain before `end`
    """
    _check_bound(data, offset, 2, end, field)
    return struct.unpack(">H", data[offset:offset+2])[0], offset + 2


def decode_u32(data: bytes, offset: int = 0, end: int = None, field: str = "uint32") -> tuple:
    """
    Decode a big-endian unsigned 32-bit integer.

    Returns:
        tuple: (value, new_offset)
    """
    _check_bound(data, offset, 4, end, field)
    return struct.unpack(">I", data[offset:offset+4])[0], offset + 4


def read_bytes(data: bytes, offset: int, length: int, end: int = None, field: str = "opaque") -> tuple:
    """
    Read exactly `length` raw bytes.

    Returns:
        tuple: (bytes, new_offset)
    """
    _check_bound(data, offset, length, end, field)
    return bytes(data[offset:offset+length]), offset + length


def encode_opaque8(value: bytes) -> bytes:
    """Encode opaque<0..2^8-1>: 1-byte length + data."""
    return struct.pack("B", len(value)) + value


def encode_opaque16(value: bytes) -> bytes:
    """Encode opaque<0..2^16-1>: 2-byte length + data."""
    return struct.pack(">H", len(value)) + value


def decode_opaque8(data: bytes, offset: int = 0, end: int = None, field: str = "opaque8") -> tuple:
    """
    Decode opaque<0..2^8-1>.

    Returns:
        tuple: (bytes, new_offset)
    """
    length, offset = decode_u8(data, offset, end, f"{field} length")
    return read_bytes(data, offset, length, end, field)


def decode_opaque16(data: bytes, offset: int = 0, end: int = None, field: str = "opaque16") -> tuple:
    """
    Decode opaque<0..2^16-1>.

    Returns:
        tuple: (bytes, new_offset)
    """
    length, offset = decode_u16(data, offset, end, f"{field} length")
    return read_bytes(data, offset, length, end, field)
