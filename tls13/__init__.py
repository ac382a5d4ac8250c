"""
TLS 1.3 Extension Body Codecs (RFC 8446)

Provides:
- key_share, pre_shared_key, psk_key_exchange_modes, early_data and
  post_handshake_auth body encoding and decoding
- Bounds-checked TLS presentation-language primitives
"""

from .constants import *
from .errors import InvalidExtensionData, TruncatedInput
from .extension import Extension, Role
from .wire import encode_u16, decode_u16
from .key_share import KeyShareEntry, KeyShareExtension
from .pre_shared_key import PSKIdentity, PreSharedKeyExtension
from .psk_key_exchange_modes import PSKKeyExchangeModesExtension
from .early_data import EarlyDataFormat, EarlyDataExtension
from .post_handshake_auth import PostHandshakeAuthExtension
