"""Tests for the key_share extension codec."""

import pytest
from cryptography.hazmat.primitives.asymmetric.x25519 import X25519PrivateKey
from cryptography.hazmat.primitives.serialization import Encoding, PublicFormat

from tls13.constants import EXT_KEY_SHARE, GROUP_X25519, GROUP_SECP256R1
from tls13.errors import InvalidExtensionData
from tls13.extension import Role
from tls13.key_share import KeyShareEntry, KeyShareExtension


def x25519_public_key() -> bytes:
    return X25519PrivateKey.generate().public_key().public_bytes(Encoding.Raw, PublicFormat.Raw)


class TestKeyShareEntry:

    def test_fields(self):
        entry = KeyShareEntry(GROUP_X25519, b"\x01\x02")
        assert entry.group == 0x001d
        assert entry.key_exchange == b"\x01\x02"
        assert entry.group_name == "x25519"

    def test_unknown_group_name(self):
        assert KeyShareEntry(0x1234).group_name == "0x1234"

    def test_rejects_oversized_key_exchange(self):
        with pytest.raises(ValueError):
            KeyShareEntry(GROUP_X25519, b"\x00" * 65536)

    def test_rejects_group_out_of_range(self):
        with pytest.raises(ValueError):
            KeyShareEntry(0x10000, b"")

    def test_rejects_non_bytes_key_exchange(self):
        with pytest.raises(ValueError, match="must be bytes"):
            KeyShareEntry(GROUP_X25519, "abc")

    def test_add_entry_rejects_other_types(self):
        with pytest.raises(ValueError):
            KeyShareExtension().add_entry((GROUP_X25519, b"\x01"))


class TestKeyShareClient:

    def test_type_and_version(self):
        extension = KeyShareExtension()
        assert extension.type_id() == EXT_KEY_SHARE == 51
        assert extension.is_applicable("1.3")
        assert not extension.is_applicable("1.2")
        assert extension.is_applicable_for_version("1.3")
        assert not extension.is_server_format

    def test_encode_single_entry(self):
        extension = KeyShareExtension().add_entry(KeyShareEntry(0x001d, bytes.fromhex("0102")))
        assert extension.encode() == bytes.fromhex("0006001d00020102")

    def test_decode_single_entry(self):
        extension = KeyShareExtension.decode(bytes.fromhex("0006001d00020102"))
        assert extension.entries == (KeyShareEntry(0x001d, b"\x01\x02"),)

    def test_empty_list_encodes_to_zero_length(self):
        assert KeyShareExtension().encode() == b"\x00\x00"
        assert KeyShareExtension.decode(b"\x00\x00").entries == ()

    def test_multiple_entries_keep_order(self):
        x25519 = x25519_public_key()
        p256 = b"\x04" + b"\x11" * 64
        extension = KeyShareExtension(entries=[
            KeyShareEntry(GROUP_X25519, x25519),
            KeyShareEntry(GROUP_SECP256R1, p256),
        ])
        encoded = extension.encode()
        assert len(encoded) == 2 + (4 + 32) + (4 + 65)

        decoded = KeyShareExtension.decode(encoded)
        assert [entry.group for entry in decoded.entries] == [GROUP_X25519, GROUP_SECP256R1]
        assert decoded.entries[0].key_exchange == x25519
        assert decoded == extension

    def test_get_entry_by_group(self):
        first = KeyShareEntry(GROUP_X25519, b"\xaa")
        second = KeyShareEntry(GROUP_X25519, b"\xbb")
        extension = KeyShareExtension(entries=[first, second])
        assert extension.get_entry_by_group(GROUP_X25519) is first
        assert extension.get_entry_by_group(GROUP_SECP256R1) is None

    def test_key_length_overruns_buffer(self):
        with pytest.raises(InvalidExtensionData):
            KeyShareExtension.decode(bytes.fromhex("0006001d0000"))

    def test_list_length_exceeds_buffer(self):
        with pytest.raises(InvalidExtensionData, match="exceeds remaining"):
            KeyShareExtension.decode(bytes.fromhex("0008001d00020102"))

    def test_too_short_for_list_length(self):
        for data in (b"", b"\x00"):
            with pytest.raises(InvalidExtensionData):
                KeyShareExtension.decode(data)

    def test_entry_checked_against_list_end_not_buffer_end(self):
        # list declares 5 bytes, entry claims 2 key bytes; only 1 lies inside the list
        data = bytes.fromhex("0005001d00020102")
        with pytest.raises(InvalidExtensionData, match="key_exchange incomplete"):
            KeyShareExtension.decode(data)

    def test_entry_header_crossing_list_end(self):
        data = bytes.fromhex("0002001d00020102")
        with pytest.raises(InvalidExtensionData, match="header incomplete"):
            KeyShareExtension.decode(data)

    def test_trailing_bytes_outside_list(self):
        data = bytes.fromhex("0006001d00020102ffff")
        extension = KeyShareExtension.decode(data)
        assert extension.entries == (KeyShareEntry(0x001d, b"\x01\x02"),)

        with pytest.raises(InvalidExtensionData, match="trailing"):
            KeyShareExtension.decode(data, strict=True)


class TestKeyShareServer:

    def test_encode_has_no_list_length(self):
        extension = KeyShareExtension(Role.SERVER, [KeyShareEntry(0x001d, b"\x01\x02")])
        assert extension.is_server_format
        assert extension.encode() == bytes.fromhex("001d00020102")

    def test_roundtrip_x25519(self):
        public_key = x25519_public_key()
        extension = KeyShareExtension(Role.SERVER, [KeyShareEntry(GROUP_X25519, public_key)])
        decoded = KeyShareExtension.decode(extension.encode(), Role.SERVER)
        assert decoded.is_server_format
        assert decoded.get_entry_by_group(GROUP_X25519).key_exchange == public_key

    def test_only_one_entry(self):
        extension = KeyShareExtension(Role.SERVER, [KeyShareEntry(GROUP_X25519)])
        with pytest.raises(ValueError):
            extension.add_entry(KeyShareEntry(GROUP_SECP256R1))

    def test_entry_required(self):
        with pytest.raises(ValueError, match="exactly one entry"):
            KeyShareExtension(Role.SERVER)
        with pytest.raises(ValueError, match="exactly one entry"):
            KeyShareExtension(Role.SERVER, [KeyShareEntry(GROUP_X25519), KeyShareEntry(GROUP_SECP256R1)])

    def test_role_is_fixed(self):
        extension = KeyShareExtension(entries=[
            KeyShareEntry(GROUP_X25519, b"\xaa"),
            KeyShareEntry(GROUP_SECP256R1, b"\xbb"),
        ])
        with pytest.raises(AttributeError):
            extension.role = Role.SERVER
        assert KeyShareExtension.decode(extension.encode()) == extension

    def test_entries_only_grow_through_add_entry(self):
        extension = KeyShareExtension(Role.SERVER, [KeyShareEntry(GROUP_X25519, b"\x01")])
        with pytest.raises(AttributeError):
            extension.entries.append(KeyShareEntry(GROUP_SECP256R1, b"\x02"))
        decoded = KeyShareExtension.decode(extension.encode(), Role.SERVER)
        assert decoded == extension

    def test_too_short(self):
        with pytest.raises(InvalidExtensionData, match="too short"):
            KeyShareExtension.decode(b"\x00\x1d\x00", Role.SERVER)

    def test_key_exchange_incomplete(self):
        with pytest.raises(InvalidExtensionData):
            KeyShareExtension.decode(bytes.fromhex("001d000401"), Role.SERVER)

    def test_debug_output(self, capsys):
        KeyShareExtension.decode(bytes.fromhex("001d00020102"), Role.SERVER, debug=True)
        assert "x25519" in capsys.readouterr().out

    def test_debug_reports_failure(self, capsys):
        with pytest.raises(InvalidExtensionData):
            KeyShareExtension.decode(b"\x00", Role.SERVER, debug=True)
        assert "decode failed" in capsys.readouterr().out
