"""dnsstamp command-line interface.

Usage:
    dnsstamp parse sdns://AgcAAAAAAAAAAAAABC9mb28 [...]
    dnsstamp encode doh --addr 9.9.9.9 --hostname dns.quad9.net --path /dns-query
    dnsstamp encode plain --addr 8.8.8.8 --no-nolog --no-nofilter
    dnsstamp encode --input resolvers.yaml
    dnsstamp version
"""

from __future__ import annotations

import argparse
import json
import sys
from typing import Any, Dict, List, Optional

from loguru import logger

from . import StampError, __version__, parse
from ._descriptor import load_descriptors, protocol_names, stamp_from_dict, stamp_to_dict
from ._log import configure_logging

# option dest → descriptor field
_FIELD_OPTIONS = {
    "addr": "addr",
    "pk": "pk",
    "provider_name": "provider_name",
    "hash": "hash",
    "hostname": "host_name",
    "path": "path",
}
_FLAG_OPTIONS = ("dnssec", "nolog", "nofilter")


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="dnsstamp",
        description="Encode and decode DNS Stamps (sdns:// resolver descriptors)",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    sub = parser.add_subparsers(dest="command")

    # ── parse ──
    parse_p = sub.add_parser("parse", help="Decode stamps and print them as JSON")
    parse_p.add_argument("stamps", nargs="+", metavar="STAMP")

    # ── encode ──
    enc_p = sub.add_parser("encode", help="Encode a resolver description as a stamp")
    enc_p.add_argument("protocol", nargs="?", metavar="PROTOCOL",
                       help="One of: {}".format(", ".join(protocol_names())))
    enc_p.add_argument("--input", "-i", metavar="FILE",
                       help="Encode every descriptor in a YAML or JSON file")
    enc_p.add_argument("--addr", help="Server address, optionally with :port")
    enc_p.add_argument("--pk", help="DNSCrypt provider public key (hex)")
    enc_p.add_argument("--provider-name", help="DNSCrypt provider name")
    enc_p.add_argument("--hash", help="Certificate hash(es) (hex)")
    enc_p.add_argument("--hostname", help="Server host name (TLS SNI)")
    enc_p.add_argument("--path", help="Absolute URI path")
    for flag in _FLAG_OPTIONS:
        enc_p.add_argument("--no-{}".format(flag), dest=flag, action="store_false",
                           default=None, help="Clear the {} property".format(flag))

    # ── version ──
    sub.add_parser("version", help="Print version and exit")

    return parser


def _descriptor_from_args(args: argparse.Namespace) -> Dict[str, Any]:
    d: Dict[str, Any] = {"protocol": args.protocol}
    for dest, name in _FIELD_OPTIONS.items():
        value = getattr(args, dest)
        if value is not None:
            d[name] = value
    props = {flag: getattr(args, flag) for flag in _FLAG_OPTIONS
             if getattr(args, flag) is not None}
    if props:
        d["props"] = props
    return d


def _cmd_parse(args: argparse.Namespace) -> None:
    for text in args.stamps:
        stamp = parse(text.strip())
        print(json.dumps(stamp_to_dict(stamp), ensure_ascii=False))


def _cmd_encode(args: argparse.Namespace, parser: argparse.ArgumentParser) -> None:
    if args.input and args.protocol:
        parser.error("encode: give either PROTOCOL or --input, not both")
    if args.input:
        extra = ["--{}".format(dest.replace("_", "-")) for dest in _FIELD_OPTIONS
                 if getattr(args, dest) is not None]
        extra += ["--no-{}".format(flag) for flag in _FLAG_OPTIONS
                  if getattr(args, flag) is not None]
        if extra:
            parser.error("encode: {} cannot be combined with --input".format(", ".join(extra)))
        stamps = load_descriptors(args.input)
        logger.debug("loaded {} descriptor(s) from {}", len(stamps), args.input)
    elif args.protocol:
        stamps = [stamp_from_dict(_descriptor_from_args(args))]
    else:
        parser.error("encode: PROTOCOL or --input is required")
    for stamp in stamps:
        print(str(stamp))


def main(argv: Optional[List[str]] = None) -> None:
    parser = _build_parser()
    args = parser.parse_args(argv)
    configure_logging("DEBUG" if args.verbose else "WARNING")

    if args.command is None:
        parser.print_help()
        sys.exit(1)

    if args.command == "version":
        print(f"dnsstamp {__version__}")
        return

    try:
        if args.command == "parse":
            _cmd_parse(args)
        elif args.command == "encode":
            _cmd_encode(args, parser)
    except StampError as e:
        print(f"dnsstamp: error [{e.code}]: {e}", file=sys.stderr)
        sys.exit(2)
    except OSError as e:
        print(f"dnsstamp: {e}", file=sys.stderr)
        sys.exit(2)


if __name__ == "__main__":
    main()
