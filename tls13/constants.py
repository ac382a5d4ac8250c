"""
TLS 1.3 Constants (RFC 8446)
"""

# TLS extensions handled by this package
EXT_PRE_SHARED_KEY = 41
EXT_EARLY_DATA = 42
EXT_PSK_KEY_EXCHANGE_MODES = 45
EXT_POST_HANDSHAKE_AUTH = 49
EXT_KEY_SHARE = 51

EXTENSION_NAMES = {
    41: "pre_shared_key",
    42: "early_data",
    45: "psk_key_exchange_modes",
    49: "post_handshake_auth",
    51: "key_share",
}

# Only version these extensions are defined for
TLS_VERSION_1_3 = "1.3"

# PSK key exchange modes
PSK_KE = 0  # PSK-only key exchange (no ECDH)
PSK_DHE_KE = 1  # PSK with ECDH key exchange

PSK_MODE_NAMES = {
    0: "psk_ke",
    1: "psk_dhe_ke",
}

# Binder is HMAC output: opaque PskBinderEntry<32..255>
PSK_BINDER_MIN_LENGTH = 32
PSK_BINDER_MAX_LENGTH = 255

# Named groups
GROUP_SECP256R1 = 23
GROUP_SECP384R1 = 24
GROUP_SECP521R1 = 25
GROUP_X25519 = 29
GROUP_X448 = 30

GROUP_NAMES = {
    23: "secp256r1",
    24: "secp384r1",
    25: "secp521r1",
    29: "x25519",
    30: "x448",
    256: "ffdhe2048",
    257: "ffdhe3072",
    258: "ffdhe4096",
    259: "ffdhe6144",
    260: "ffdhe8192",
}

# TLS handshake message types an extension body can appear in
HANDSHAKE_CLIENT_HELLO = 1
HANDSHAKE_SERVER_HELLO = 2
HANDSHAKE_NEW_SESSION_TICKET = 4
HANDSHAKE_ENCRYPTED_EXTENSIONS = 8

HANDSHAKE_TYPE_NAMES = {
    1: "ClientHello",
    2: "ServerHello",
    4: "NewSessionTicket",
    8: "EncryptedExtensions",
}

# Field limits
UINT8_MAX = 0xFF
UINT16_MAX = 0xFFFF
UINT32_MAX = 0xFFFFFFFF
