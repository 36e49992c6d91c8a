#!/usr/bin/env python3
"""
contract-crypto tool

Small developer tool over the contract crypto surface. Runs against the
in-process NativeHost (configured from CONTRACT_CRYPTO_* env vars).

Examples:
  python -m contract_crypto.cli.tool digest --algo sha256 --text hello
  python -m contract_crypto.cli.tool decode-key 0002c0ded2bc1f1305fb0faac5e6c03ee3a1924234985427b6167ca569d13df435cf
  python -m contract_crypto.cli.tool verify-rsa --text hello --sig <hex> --exp 010001 --mod <hex>

Exit codes:
  0 on success (verify-rsa: signature valid)
  1 verify-rsa: signature invalid
  2 malformed input
"""
from __future__ import annotations

import argparse
import json
import logging
import sys
from typing import Any, Dict, List, Optional

from contract_crypto.errors import CryptoError
from contract_crypto.stdlib import crypto, rsa
from contract_crypto.types.keys import PublicKey, Signature

DIGESTS = {
    "sha256": crypto.sha256,
    "sha1": crypto.sha1,
    "sha512": crypto.sha512,
    "ripemd160": crypto.ripemd160,
}


def _emit(obj: Dict[str, Any]) -> None:
    print(json.dumps(obj, indent=2, sort_keys=True))


def _read_message(args: argparse.Namespace) -> bytes:
    if getattr(args, "text", None) is not None:
        return args.text.encode("utf-8")
    if getattr(args, "hex", None) is not None:
        h = args.hex[2:] if args.hex.startswith(("0x", "0X")) else args.hex
        try:
            return bytes.fromhex(h)
        except ValueError as e:
            raise CryptoError(f"invalid --hex message: {e}", code="invalid_input") from e
    if getattr(args, "file", None) is not None:
        try:
            with open(args.file, "rb") as f:
                return f.read()
        except OSError as e:
            raise CryptoError(f"cannot read --file {args.file}: {e}", code="invalid_input") from e
    return b""


def _describe(value: Any) -> Dict[str, Any]:
    return {
        "kind": type(value).__name__,
        "type": value.type,
        "curve": value.curve.name,
        "data": value.data.hex(),
        "encoded": value.hex(),
    }


def cmd_digest(args: argparse.Namespace) -> int:
    msg = _read_message(args)
    digest = DIGESTS[args.algo](msg)
    _emit({"algo": args.algo, "length": len(msg), "digest": digest.hex()})
    return 0


def cmd_decode_key(args: argparse.Namespace) -> int:
    _emit(_describe(PublicKey.from_hex(args.encoded)))
    return 0


def cmd_decode_sig(args: argparse.Namespace) -> int:
    _emit(_describe(Signature.from_hex(args.encoded)))
    return 0


def cmd_verify_rsa(args: argparse.Namespace) -> int:
    msg = _read_message(args)
    ok = rsa.verify_rsa_sha256_sig(msg, args.sig, args.exp, args.mod)
    _emit({"valid": ok, "length": len(msg)})
    return 0 if ok else 1


def _add_message_args(p: argparse.ArgumentParser) -> None:
    g = p.add_mutually_exclusive_group(required=True)
    g.add_argument("--text", help="Message as UTF-8 text")
    g.add_argument("--hex", help="Message as hex bytes (0x optional)")
    g.add_argument("--file", help="Read message bytes from a file")


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(
        prog="contract-crypto",
        description="Inspect canonical key/signature encodings and run host crypto calls.",
    )
    ap.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    sub = ap.add_subparsers(dest="command", required=True)

    p = sub.add_parser("digest", help="Compute a digest")
    p.add_argument("--algo", choices=sorted(DIGESTS), default="sha256")
    _add_message_args(p)
    p.set_defaults(func=cmd_digest)

    p = sub.add_parser("decode-key", help="Strictly decode a canonical PublicKey (hex)")
    p.add_argument("encoded")
    p.set_defaults(func=cmd_decode_key)

    p = sub.add_parser("decode-sig", help="Strictly decode a canonical Signature (hex)")
    p.add_argument("encoded")
    p.set_defaults(func=cmd_decode_sig)

    p = sub.add_parser("verify-rsa", help="Verify an RSA PKCS#1 v1.5 SHA-256 signature")
    _add_message_args(p)
    p.add_argument("--sig", required=True, help="Signature as hex text")
    p.add_argument("--exp", required=True, help="Public exponent as hex text")
    p.add_argument("--mod", required=True, help="Modulus as hex text (no leading zero)")
    p.set_defaults(func=cmd_verify_rsa)
    return ap


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    try:
        return args.func(args)
    except CryptoError as e:
        _emit({"error": e.to_dict()})
        return 2


if __name__ == "__main__":
    sys.exit(main())
