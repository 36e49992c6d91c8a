from __future__ import annotations

import json

import pytest

from contract_crypto.cli import tool

HELLO_SHA256 = "2cf24dba5fb0a30e26e83b2ac5b9e29e1b161e5c1fa7425e73043362938b9824"
K1_KEY = "0002c0ded2bc1f1305fb0faac5e6c03ee3a1924234985427b6167ca569d13df435cf"


def _run(capsys, *argv: str):
    code = tool.main(list(argv))
    out = capsys.readouterr().out
    return code, json.loads(out)


def test_digest_text(native_host, capsys) -> None:
    code, out = _run(capsys, "digest", "--algo", "sha256", "--text", "hello")
    assert code == 0
    assert out == {"algo": "sha256", "length": 5, "digest": HELLO_SHA256}


def test_digest_hex_and_file_agree(native_host, capsys, tmp_path) -> None:
    path = tmp_path / "msg.bin"
    path.write_bytes(b"hello")
    _, from_hex = _run(capsys, "digest", "--hex", "0x68656c6c6f")
    _, from_file = _run(capsys, "digest", "--file", str(path))
    assert from_hex["digest"] == from_file["digest"] == HELLO_SHA256


def test_decode_key(capsys) -> None:
    code, out = _run(capsys, "decode-key", K1_KEY)
    assert code == 0
    assert out["kind"] == "PublicKey"
    assert out["curve"] == "K1"
    assert out["encoded"] == K1_KEY


def test_decode_sig_unknown_curve(capsys) -> None:
    encoded = "05" + "1f" * 65
    code, out = _run(capsys, "decode-sig", encoded)
    assert code == 0
    assert out["type"] == 5
    assert out["curve"] == "UNKNOWN"


def test_truncated_key_exits_2(capsys) -> None:
    code, out = _run(capsys, "decode-key", K1_KEY[:-2])
    assert code == 2
    assert out["error"]["code"] == "decode_error"


def test_bad_hex_message_exits_2(capsys) -> None:
    code, out = _run(capsys, "digest", "--hex", "zz")
    assert code == 2
    assert out["error"]["code"] == "invalid_input"


def test_unreadable_file_exits_2(capsys, tmp_path) -> None:
    code, out = _run(capsys, "digest", "--file", str(tmp_path / "missing.bin"))
    assert code == 2
    assert out["error"]["code"] == "invalid_input"


def test_verify_rsa_reports_host_result(fake_host, capsys) -> None:
    code, out = _run(capsys, "verify-rsa", "--text", "m", "--sig", "aa", "--exp", "03", "--mod", "bb")
    assert (code, out["valid"]) == (0, True)

    fake_host.rsa_result = False
    code, out = _run(capsys, "verify-rsa", "--text", "m", "--sig", "aa", "--exp", "03", "--mod", "bb")
    assert (code, out["valid"]) == (1, False)


def test_message_source_is_required(capsys) -> None:
    with pytest.raises(SystemExit):
        tool.main(["digest"])
