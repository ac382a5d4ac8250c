#!/usr/bin/env python3
"""
TLS 1.3 Extension Decoder - Command Line Entry Point

Decodes a hex-encoded extension body (the bytes after the 4-byte
type/length header) and prints it as JSON.

Usage:
    python -m tls13 [options] extension hex

Examples:
    python -m tls13 key_share 0006001d00020102
    python -m tls13 pre_shared_key 0002 --role server
    python -m tls13 early_data 00004000 --format new_session_ticket
"""

import argparse
import json
import sys

from .early_data import EarlyDataExtension, EarlyDataFormat
from .errors import InvalidExtensionData
from .extension import Role
from .key_share import KeyShareExtension
from .post_handshake_auth import PostHandshakeAuthExtension
from .pre_shared_key import PreSharedKeyExtension
from .psk_key_exchange_modes import PSKKeyExchangeModesExtension


EXTENSIONS = {
    "key_share": KeyShareExtension,
    "pre_shared_key": PreSharedKeyExtension,
    "psk_key_exchange_modes": PSKKeyExchangeModesExtension,
    "early_data": EarlyDataExtension,
    "post_handshake_auth": PostHandshakeAuthExtension,
}


def decode_body(extension: str, data: bytes, role: Role = Role.CLIENT,
                format: EarlyDataFormat = EarlyDataFormat.CLIENT_HELLO,
                strict: bool = False, debug: bool = False):
    """
    Decode `data` with the codec registered for `extension`.

    Role only applies to key_share and pre_shared_key; format only to
    early_data.
    """
    cls = EXTENSIONS[extension]
    if cls in (KeyShareExtension, PreSharedKeyExtension):
        return cls.decode(data, role, strict=strict, debug=debug)
    if cls is EarlyDataExtension:
        return cls.decode(data, format, strict=strict, debug=debug)
    return cls.decode(data, strict=strict, debug=debug)


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(
        prog="python -m tls13",
        description="Decode a TLS 1.3 extension body",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # ClientHello key_share with one x25519 share
  python -m tls13 key_share 0006001d00020102

  # ServerHello pre_shared_key
  python -m tls13 pre_shared_key 0002 --role server

  # NewSessionTicket early_data
  python -m tls13 early_data 00004000 --format new_session_ticket
"""
    )

    parser.add_argument(
        "extension",
        choices=sorted(EXTENSIONS),
        help="Extension the body belongs to"
    )

    parser.add_argument(
        "hex",
        help="Extension body as hex (may be empty: '')"
    )

    parser.add_argument(
        "-r", "--role",
        choices=[role.value for role in Role],
        default=Role.CLIENT.value,
        help="Sender role for key_share / pre_shared_key (default: client)"
    )

    parser.add_argument(
        "-f", "--format",
        choices=[fmt.name.lower() for fmt in EarlyDataFormat],
        default=EarlyDataFormat.CLIENT_HELLO.name.lower(),
        help="Handshake message for early_data (default: client_hello)"
    )

    parser.add_argument(
        "--strict",
        action="store_true",
        help="Enforce RFC 8446 rules beyond the wire layout"
    )

    parser.add_argument(
        "-d", "--debug",
        action="store_true",
        help="Print each parsed field"
    )

    args = parser.parse_args(argv)

    try:
        data = bytes.fromhex(args.hex)
    except ValueError:
        print(f"❌ Not a hex string: {args.hex!r}", file=sys.stderr)
        return 2

    try:
        extension = decode_body(
            args.extension, data,
            role=Role(args.role),
            format=EarlyDataFormat[args.format.upper()],
            strict=args.strict,
            debug=args.debug,
        )
    except InvalidExtensionData as e:
        print(f"❌ Invalid {args.extension} body: {e.reason}", file=sys.stderr)
        return 1

    print(json.dumps(extension.to_dict(), indent=2))
    return 0


if __name__ == "__main__":
    sys.exit(main())
