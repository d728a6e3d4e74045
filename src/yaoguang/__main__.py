"""
Identity key command line tool.

Generate, derive, inspect and use node identity keys.

Usage::

    python -m yaoguang generate --curve secp256k1
    python -m yaoguang derive --secret alice --curve ed25519
    python -m yaoguang pubkey --private-key <hex> --curve ed25519
    python -m yaoguang sign --private-key <hex> --message hello
    python -m yaoguang verify --public-key <hex> --message hello --signature <hex>
    python -m yaoguang check --private-key <hex>

Options:
    --curve       Curve name: ed25519 or secp256k1 (default: $YAOGUANG_DEFAULT_CURVE)
    --log-level   Logging level (default: $YAOGUANG_LOG_LEVEL or INFO)

Exit status is 0 on success, 1 when a signature does not verify and 2 when a
key, signature or curve is rejected.
"""

from __future__ import annotations

import argparse
import logging
import sys

from yaoguang import config
from yaoguang.crypto import (
    CryptoError,
    CurveType,
    PrivateKey,
    ensure_ed25519_private_key_correct,
    generate_private_key,
    private_key_from_raw_bytes,
    private_key_from_secret,
    public_key_from_bytes,
    signature_from_bytes,
)

EXIT_OK = 0
EXIT_INVALID_SIGNATURE = 1
EXIT_REJECTED = 2

logger = logging.getLogger(__name__)


def setup_logging(level: str) -> None:
    """
    Configure root logging to stderr at the given level.

    Leaves an already configured root logger alone, so repeated calls in one
    process do not stack handlers.
    """
    logging.basicConfig(
        level=level,
        stream=sys.stderr,
        format="%(asctime)s %(levelname)-8s %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )


def _parse_hex(value: str) -> bytes:
    """Parse a hex string, with or without a 0x prefix."""
    try:
        return bytes.fromhex(value.removeprefix("0x"))
    except ValueError:
        raise argparse.ArgumentTypeError(f"not a hex string: {value!r}") from None


def _parse_curve(value: str) -> CurveType:
    try:
        return CurveType.from_name(value)
    except CryptoError as exc:
        raise argparse.ArgumentTypeError(exc.message) from None


def _print_key(private_key: PrivateKey) -> None:
    print(f"curve:       {private_key.curve_type}")
    print(f"public key:  {private_key.get_public_key().key.hex()}")
    print(f"private key: {private_key.raw_bytes().hex()}")


def cmd_generate(args: argparse.Namespace) -> int:
    """Generate a fresh key from the platform randomness source."""
    _print_key(generate_private_key(None, args.curve))
    return EXIT_OK


def cmd_derive(args: argparse.Namespace) -> int:
    """Derive a key deterministically from a secret."""
    if config.YAOGUANG_ENV == "prod":
        logger.warning("Derived keys are reproducible from the secret; use for test identities only")
    _print_key(private_key_from_secret(args.secret, args.curve))
    return EXIT_OK


def cmd_pubkey(args: argparse.Namespace) -> int:
    """Print the public key of a stored private key."""
    private_key = private_key_from_raw_bytes(args.private_key, args.curve)
    print(private_key.get_public_key().key.hex())
    return EXIT_OK


def cmd_sign(args: argparse.Namespace) -> int:
    """Sign a UTF-8 message."""
    private_key = private_key_from_raw_bytes(args.private_key, args.curve)
    print(private_key.sign(args.message.encode("utf-8")).signature.hex())
    return EXIT_OK


def cmd_verify(args: argparse.Namespace) -> int:
    """Verify a signature over a UTF-8 message."""
    public_key = public_key_from_bytes(args.public_key, args.curve)
    if public_key is None:
        print("no public key for curve unset", file=sys.stderr)
        return EXIT_REJECTED

    signature = signature_from_bytes(args.signature, args.curve)
    if public_key.verify(args.message.encode("utf-8"), signature):
        print("valid")
        return EXIT_OK
    print("invalid")
    return EXIT_INVALID_SIGNATURE


def cmd_check(args: argparse.Namespace) -> int:
    """Check an Ed25519 private key for corruption."""
    ensure_ed25519_private_key_correct(args.private_key)
    print("ok")
    return EXIT_OK


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser with one subcommand per operation."""
    parser = argparse.ArgumentParser(
        prog="yaoguang",
        description="Node identity keys",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    parser.add_argument(
        "--log-level",
        default=config.LOG_LEVEL,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        type=str.upper,
        help="Logging level (default: %(default)s)",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    def add_curve(sub: argparse.ArgumentParser) -> None:
        sub.add_argument(
            "--curve",
            type=_parse_curve,
            default=config.DEFAULT_CURVE,
            help=f"Curve name (default: {config.DEFAULT_CURVE})",
        )

    generate = subparsers.add_parser("generate", help="Generate a fresh private key")
    add_curve(generate)
    generate.set_defaults(func=cmd_generate)

    derive = subparsers.add_parser("derive", help="Derive a private key from a secret")
    derive.add_argument("--secret", required=True, help="Secret string to derive from")
    add_curve(derive)
    derive.set_defaults(func=cmd_derive)

    pubkey = subparsers.add_parser("pubkey", help="Print the public key of a private key")
    pubkey.add_argument("--private-key", required=True, type=_parse_hex, help="Private key hex")
    add_curve(pubkey)
    pubkey.set_defaults(func=cmd_pubkey)

    sign = subparsers.add_parser("sign", help="Sign a message")
    sign.add_argument("--private-key", required=True, type=_parse_hex, help="Private key hex")
    sign.add_argument("--message", required=True, help="Message text (UTF-8)")
    add_curve(sign)
    sign.set_defaults(func=cmd_sign)

    verify = subparsers.add_parser("verify", help="Verify a signature")
    verify.add_argument("--public-key", required=True, type=_parse_hex, help="Public key hex")
    verify.add_argument("--message", required=True, help="Message text (UTF-8)")
    verify.add_argument("--signature", required=True, type=_parse_hex, help="Signature hex")
    add_curve(verify)
    verify.set_defaults(func=cmd_verify)

    check = subparsers.add_parser("check", help="Check an Ed25519 private key for corruption")
    check.add_argument("--private-key", required=True, type=_parse_hex, help="Private key hex")
    check.set_defaults(func=cmd_check)

    return parser


def main(argv: list[str] | None = None) -> int:
    """CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    setup_logging(args.log_level)

    # Error messages never contain private key bytes, so they are shown verbatim.
    try:
        return args.func(args)
    except CryptoError as exc:
        print(f"error: {exc.message}", file=sys.stderr)
        return EXIT_REJECTED


if __name__ == "__main__":
    sys.exit(main())
