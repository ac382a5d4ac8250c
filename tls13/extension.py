"""
Common pieces shared by every extension codec
"""

from enum import Enum

from .constants import EXTENSION_NAMES, TLS_VERSION_1_3
from .errors import InvalidExtensionData


class Role(Enum):
    """Which side of the handshake produced the extension body."""
    CLIENT = "client"
    SERVER = "server"


class Extension:
    """
    Base for TLS 1.3 extension body codecs.

    Subclasses set TYPE_ID and implement encode() and the decode()
    classmethod. The 4-byte extension header (type + length) is owned by
    the caller; only the body is handled here.
    """
    TYPE_ID = None

    @classmethod
    def type_id(cls) -> int:
        """IANA extension number."""
        return cls.TYPE_ID

    @classmethod
    def name(cls) -> str:
        return EXTENSION_NAMES.get(cls.TYPE_ID, f"unknown({cls.TYPE_ID})")

    @staticmethod
    def is_applicable(tls_version: str) -> bool:
        """True if the extension may appear in a handshake of `tls_version`."""
        return tls_version == TLS_VERSION_1_3

    def is_applicable_for_version(self, tls_version: str) -> bool:
        return self.is_applicable(tls_version)

    def encode(self) -> bytes:
        raise NotImplementedError

    def to_dict(self) -> dict:
        raise NotImplementedError


def report_error(name: str, error: InvalidExtensionData, debug: bool):
    if debug:
        print(f"    ⚠️  {name} decode failed: {error.reason}")


def check_consumed(name: str, data: bytes, offset: int, strict: bool):
    """In strict mode, reject bytes left over after the body was parsed."""
    if strict and offset != len(data):
        raise InvalidExtensionData(f"{name} extension has {len(data) - offset} trailing bytes")


def check_range(name: str, value: int, maximum: int):
    """Reject a value that does not fit its wire field."""
    if not isinstance(value, int) or value < 0 or value > maximum:
        raise ValueError(f"{name} must be in range 0..{maximum}, got {value!r}")
