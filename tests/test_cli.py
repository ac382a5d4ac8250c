"""Tests for the command-line decoder."""

import json

from tls13.__main__ import main


def test_decode_key_share(capsys):
    assert main(["key_share", "0006001d00020102"]) == 0
    output = json.loads(capsys.readouterr().out)
    assert output == {
        "extension": "key_share",
        "role": "client",
        "entries": [{"group": "x25519", "key_exchange": "0102"}],
    }


def test_decode_server_pre_shared_key(capsys):
    assert main(["pre_shared_key", "0002", "--role", "server"]) == 0
    assert json.loads(capsys.readouterr().out)["selected_identity"] == 2


def test_decode_new_session_ticket_early_data(capsys):
    assert main(["early_data", "00004000", "-f", "new_session_ticket"]) == 0
    assert json.loads(capsys.readouterr().out)["max_early_data_size"] == 0x4000


def test_invalid_body(capsys):
    assert main(["key_share", "0006001d0000"]) == 1
    assert "Invalid key_share body" in capsys.readouterr().err


def test_strict_flag(capsys):
    assert main(["post_handshake_auth", "00"]) == 0
    capsys.readouterr()
    assert main(["post_handshake_auth", "00", "--strict"]) == 1


def test_not_hex(capsys):
    assert main(["psk_key_exchange_modes", "zz"]) == 2
    assert "Not a hex string" in capsys.readouterr().err
