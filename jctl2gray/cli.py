"""Command line entry point: read logs from stdin or journalctl and send them to Graylog."""

from __future__ import annotations

import argparse
import logging
import re
import sys
from typing import Iterable, Sequence

from .compression import MessageCompression
from .config import Config, LogSource, parse_log_source
from .errors import Jctl2grayError, JournalIOError
from .level import LevelMsg, LevelSystem
from .processing import get_target_addr, process_journalctl, process_stdin

log = logging.getLogger(__name__)

_UNSIGNED_RE = re.compile(r"\+?[0-9]+")
_U64_MAX = 2**64 - 1

_OPT_HELP = (
    "Optional fields to be attached to the message. Fields must be defined as "
    "comma delimited pairs in format <field_name=text>, e.g.: "
    "`--opt team=t1,service=backend`"
)


def validate_address(value: str) -> str:
    """Accept an address that resolves to a socket address."""
    try:
        get_target_addr(value)
    except JournalIOError:
        raise argparse.ArgumentTypeError("Bad address provided") from None
    return value


def validate_port(value: str) -> int:
    """Accept a UDP port number."""
    if not _UNSIGNED_RE.fullmatch(value) or int(value) > 0xFFFF:
        raise argparse.ArgumentTypeError("Bad port provided")
    return int(value)


def validate_ttl(value: str) -> int:
    """Accept a positive resolve period in seconds."""
    if not _UNSIGNED_RE.fullmatch(value) or int(value) > _U64_MAX:
        raise argparse.ArgumentTypeError("Bad TTL value provided")
    ttl = int(value)
    if ttl == 0:
        raise argparse.ArgumentTypeError("TTL could not be zero")
    return ttl


def parse_opt_fields(fields: Iterable[str]) -> list[tuple[str, str]]:
    """Turn ``name=text`` items into pairs, dropping items without ``=``."""
    pairs = []
    for item in fields:
        parts = item.split("=")
        if len(parts) >= 2:
            pairs.append((parts[0], parts[1]))
    return pairs


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="jctl2gray",
        description="Reading logs from stdin/journalctl and sending it to Graylog",
    )
    parser.add_argument("-V", "--version", action="version", version="%(prog)s 0.2")
    parser.add_argument(
        "-s", "--source", dest="log_source", required=True,
        choices=["stdin", "journal"], help="Log source",
    )
    parser.add_argument(
        "-d", "--journal_dir", default="", metavar="DIR",
        help="Directory to read journal files from (useful for remote)",
    )
    parser.add_argument(
        "-p", "--port", type=validate_port, default="5000", metavar="UDP-PORT",
        help="Local UDP-port to send from",
    )
    parser.add_argument(
        "-t", "--target", type=validate_address, default="127.0.0.1:9000",
        metavar="ADDRESS", help="Full address of target Graylog",
    )
    parser.add_argument(
        "--ttl", type=validate_ttl, default="60",
        help="Period of resolving target's IP-address, secs",
    )
    parser.add_argument(
        "-c", "--comp", dest="compression", default="none",
        choices=[str(c) for c in MessageCompression], help="Message compression type",
    )
    parser.add_argument(
        "--opt", dest="opt_fields", action="append", metavar="NAME=TEXT", help=_OPT_HELP,
    )
    parser.add_argument(
        "-l", "--sys", dest="system_level", default="info",
        choices=[str(level) for level in LevelSystem],
        help="System logging level threshold",
    )
    parser.add_argument(
        "-m", "--msg", dest="msg_level",
        choices=[str(level) for level in LevelMsg],
        help="Message filter logging level threshold",
    )
    return parser


def parse_options(argv: Sequence[str] | None = None) -> Config:
    """Build the configuration from command line arguments."""
    args = _build_parser().parse_args(argv)

    items = (part for value in args.opt_fields or () for part in value.split(","))
    optional = parse_opt_fields(items)

    log.debug("additional fields to be attached:")
    for name, value in optional:
        log.debug("- %s: %s", name, value)

    return Config(
        log_source=parse_log_source(args.log_source),
        journal_dir=args.journal_dir,
        sender_port=args.port,
        graylog_addr=args.target,
        graylog_addr_ttl=args.ttl,
        compression=MessageCompression.from_name(args.compression),
        log_level_system=LevelSystem.from_name(args.system_level),
        log_level_message=(
            LevelMsg.from_name(args.msg_level) if args.msg_level is not None else None
        ),
        optional=optional,
    )


def main(argv: Sequence[str] | None = None) -> int:
    """Run the forwarder; returns the exit status once processing stops."""
    logging.basicConfig(level=logging.INFO, format="%(levelname)s | %(message)s")
    config = parse_options(argv)

    if config.log_source is LogSource.STDIN:
        try:
            process_stdin(config, sys.stdin)
        except Jctl2grayError as exc:
            log.error("stdin processing stopped: %s", exc)
    else:
        try:
            process_journalctl(config)
        except Jctl2grayError as exc:
            log.error("journalctl processing stopped: %s", exc)

    return 1


if __name__ == "__main__":
    sys.exit(main())