"""
stealth-pki command-line tool.

Usage:
    stealth-pki keygen [--seed TEXT]
    stealth-pki address --psk HEX
    stealth-pki scan --vk HEX --address HEX
    stealth-pki recover --ssk HEX --address HEX

Every command prints a JSON document on stdout. Malformed keys or addresses
print "error: ..." on stderr and exit with status 2.
"""

from __future__ import annotations

import argparse
import logging
import secrets
import sys

from stealth_pki.config import PkiConfig
from stealth_pki.core.public_spend import PublicSpendKey
from stealth_pki.core.secret_spend import SecretSpendKey
from stealth_pki.core.stealth import StealthAddress
from stealth_pki.core.view import ViewKey
from stealth_pki.errors import PkiError
from stealth_pki.models import KeyBundle, ScanResult, StealthAddressRecord

logger = logging.getLogger("stealth_pki.cli")


def _cmd_keygen(args: argparse.Namespace, config: PkiConfig) -> str:
    if args.seed is not None:
        ssk = SecretSpendKey.from_seed(args.seed.encode("utf-8"))
    else:
        ssk = SecretSpendKey.random(secrets.SystemRandom())
    return KeyBundle.from_secret_spend_key(ssk, config).model_dump_json(indent=2)


def _cmd_address(args: argparse.Namespace, config: PkiConfig) -> str:
    psk = PublicSpendKey.from_hex(args.psk)
    sa = psk.new_stealth_address(secrets.SystemRandom())
    return StealthAddressRecord.from_stealth_address(sa, config).model_dump_json(indent=2)


def _cmd_scan(args: argparse.Namespace, config: PkiConfig) -> str:
    vk = ViewKey.from_hex(args.vk)
    sa = StealthAddress.from_hex(args.address)
    return ScanResult(owned=vk.owns(sa)).model_dump_json(indent=2)


def _cmd_recover(args: argparse.Namespace, config: PkiConfig) -> str:
    ssk = SecretSpendKey.from_hex(args.ssk)
    sa = StealthAddress.from_hex(args.address)
    sk_r = ssk.sk_r(sa)
    # Only hand out sk_r once its public image matches the address
    if sk_r.public_key() != sa.pk_r:
        logger.info("Stealth address does not belong to the given secret spend key")
        return ScanResult(owned=False).model_dump_json(indent=2)
    return ScanResult(owned=True, sk_r=config.render(sk_r.to_bytes())).model_dump_json(indent=2)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="stealth-pki",
        description="Spend/view keys and stealth addresses.",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    keygen = sub.add_parser("keygen", help="Generate a secret spend key and its derived keys")
    keygen.add_argument("--seed", help="Derive deterministically from this text instead of randomness")
    keygen.set_defaults(handler=_cmd_keygen)

    address = sub.add_parser("address", help="Generate a fresh stealth address for a public spend key")
    address.add_argument("--psk", required=True, help="Recipient public spend key (hex)")
    address.set_defaults(handler=_cmd_address)

    scan = sub.add_parser("scan", help="Check ownership of a stealth address with a view key")
    scan.add_argument("--vk", required=True, help="View key (hex)")
    scan.add_argument("--address", required=True, help="Stealth address (hex)")
    scan.set_defaults(handler=_cmd_scan)

    recover = sub.add_parser("recover", help="Recover the one-time secret key of an owned stealth address")
    recover.add_argument("--ssk", required=True, help="Secret spend key (hex)")
    recover.add_argument("--address", required=True, help="Stealth address (hex)")
    recover.set_defaults(handler=_cmd_recover)

    return parser


def main(argv: list[str] | None = None) -> int:
    config = PkiConfig.from_env()
    config.configure_logging()

    args = build_parser().parse_args(argv)
    try:
        output = args.handler(args, config)
    except PkiError as e:
        logger.debug(f"{args.command} rejected input: {e}")
        print(f"error: {e}", file=sys.stderr)
        return 2

    print(output)
    return 0


if __name__ == "__main__":
    sys.exit(main())
