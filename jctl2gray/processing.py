"""Reading log records, turning them into GELF and sending them over UDP."""

from __future__ import annotations

import json
import logging
import re
import socket
import subprocess
import sys
import time
from contextlib import suppress
from typing import Any, Iterable, Iterator, TextIO

from .chunked_message import ChunkedMessage, ChunkSize
from .config import Config
from .errors import (
    InsufficientLogLevel,
    InternalError,
    Jctl2grayError,
    JournalIOError,
    JsonParsingError,
    NoMessage,
)
from .level import LevelMsg, LevelSystem
from .message import Message
from .wire_message import WireMessage

log = logging.getLogger(__name__)

IGNORED_FIELDS = frozenset(
    {
        "MESSAGE",
        "_HOSTNAME",
        "__REALTIME_TIMESTAMP",
        "PRIORITY",
        "__CURSOR",
        "_BOOT_ID",
        "_MACHINE_ID",
        "_SYSTEMD_CGROUP",
        "_SYSTEMD_SLICE",
    }
)

_MSG_LEVEL_RE = re.compile(r"level=([a-zA-Z]+ )")
_UNSIGNED_RE = re.compile(r"\+?[0-9]+")

Address = tuple


def process_journalctl(config: Config) -> None:
    """Follow journalctl's JSON output and ship every record.

    Returns only by raising: the journal output ending is an error.
    """
    if not is_platform_supported():
        raise InternalError("operating system currently unsupported")

    args = ["journalctl", "-o", "json", "-f", "--merge"]
    if config.journal_dir:
        args += ["--directory", config.journal_dir]

    try:
        proc = subprocess.Popen(
            args,
            stdout=subprocess.PIPE,
            stderr=subprocess.PIPE,
            text=True,
            errors="replace",
        )
    except OSError as exc:
        raise JournalIOError(str(exc)) from exc

    try:
        with create_sender_udp(config.sender_port) as sender:
            target = _Target(config.graylog_addr, config.graylog_addr_ttl)
            log.debug("start reading from journalctl")
            while True:
                try:
                    record = proc.stdout.readline().strip()
                except OSError as exc:
                    raise JournalIOError(str(exc)) from exc

                if not record:
                    try:
                        reason = proc.stderr.readline()
                    except OSError as exc:
                        raise JournalIOError(str(exc)) from exc
                    raise InternalError(reason)

                process_log_record(record, config, sender, target.current())
    finally:
        with suppress(OSError):
            proc.kill()
        with suppress(OSError):
            proc.stdout.close()
        with suppress(OSError):
            proc.stderr.close()
        with suppress(OSError):
            proc.wait()


def process_stdin(config: Config, stream: TextIO | None = None) -> None:
    """Read records line by line from ``stream`` (standard input by default)."""
    if stream is None:
        stream = sys.stdin

    with create_sender_udp(config.sender_port) as sender:
        target = _Target(config.graylog_addr, config.graylog_addr_ttl)
        log.debug("start reading from stdin")
        for line in _read_lines(stream):
            process_log_record(line.strip(), config, sender, target.current())


def process_log_record(data: str, config: Config, sender: Any, target: Address) -> None:
    """Transform one record and send its chunks; failures are logged, not raised."""
    try:
        compressed = transform_record(data, config)
    except InsufficientLogLevel:
        return
    except NoMessage:
        log.debug("no message field found")
        return
    except Jctl2grayError as exc:
        log.warning("parsing error: %s, message: %s", exc, data)
        return

    try:
        chunked = ChunkedMessage(ChunkSize.wan(), compressed)
    except ValueError:
        return

    for chunk in chunked:
        try:
            sender.sendto(chunk, target)
        except OSError as exc:
            log.error("sender failure: %s", exc)


def transform_record(data: str, config: Config) -> bytes:
    """Decode a journal JSON record, build a GELF message and compress it."""
    try:
        decoded = json.loads(data, parse_constant=_reject_constant)
    except ValueError as exc:
        raise JsonParsingError(str(exc)) from exc
    if not isinstance(decoded, dict):
        raise JsonParsingError(f"expected a JSON object, got {type(decoded).__name__}")

    if "MESSAGE" not in decoded:
        raise NoMessage()
    short_msg = _json_text(decoded["MESSAGE"])

    host = _json_text(decoded["_HOSTNAME"]) if "_HOSTNAME" in decoded else "undefined"

    if config.log_level_message is not None:
        msg_level = get_msg_log_level(short_msg)
        if msg_level is not None and msg_level > config.log_level_message:
            raise InsufficientLogLevel()

    msg = Message(host, short_msg)

    priority = decoded.get("PRIORITY")
    if isinstance(priority, str):
        number = _parse_u8(priority)
        if number is not None:
            level = LevelSystem.from_num(number)
            if level > config.log_level_system:
                raise InsufficientLogLevel()
            msg.level = level

    raw_ts = decoded.get("__REALTIME_TIMESTAMP")
    if isinstance(raw_ts, str):
        micros = _parse_float(raw_ts)
        if micros is not None:
            msg.timestamp = micros / 1_000_000

    for key, value in decoded.items():
        if is_metadata(key):
            msg.set_metadata(key, value)

    return config.compression.compress(WireMessage(msg, config.optional))


def is_metadata(field: str) -> bool:
    """Whether a journal field is passed on as an additional GELF field."""
    return field not in IGNORED_FIELDS


def is_platform_supported() -> bool:
    """Whether journalctl can be read on this operating system."""
    return sys.platform.startswith("linux")


def get_msg_log_level(msg: str) -> LevelMsg | None:
    """Find a ``level=name `` marker in the message text."""
    match = _MSG_LEVEL_RE.search(msg)
    if match is None:
        return None
    return LevelMsg.from_name(match.group(1).strip())


def create_sender_udp(port: int) -> socket.socket:
    """A UDP socket bound to ``port`` on every interface."""
    sock = socket.socket(socket.AF_INET, socket.SOCK_DGRAM)
    try:
        sock.bind(("0.0.0.0", port))
    except OSError as exc:
        sock.close()
        raise JournalIOError(str(exc)) from exc
    return sock


def get_target_addr(host: str) -> tuple[Address, float]:
    """Resolve ``host:port`` to its first address; return it with the resolve time."""
    name, port = _split_host_port(host)
    try:
        infos = socket.getaddrinfo(name, port, type=socket.SOCK_DGRAM)
    except (OSError, UnicodeError) as exc:
        raise JournalIOError(str(exc)) from exc
    if not infos:
        raise JournalIOError("empty address list")
    return infos[0][4], time.monotonic()


class _Target:
    """A resolved target address that is refreshed once it grows older than ttl."""

    def __init__(self, host: str, ttl: int) -> None:
        self.host = host
        self.ttl = ttl
        self.address, self.resolved_at = get_target_addr(host)

    def current(self) -> Address:
        if int(time.monotonic() - self.resolved_at) > self.ttl:
            try:
                self.address, self.resolved_at = get_target_addr(self.host)
                log.debug("target address updated")
            except JournalIOError as exc:
                log.warning("cannot resolve graylog address: %s", exc)
        return self.address


def _read_lines(stream: Iterable[str]) -> Iterator[str]:
    lines = iter(stream)
    while True:
        try:
            line = next(lines)
        except StopIteration:
            return
        except (OSError, UnicodeDecodeError) as exc:
            raise JournalIOError(str(exc)) from exc
        yield line


def _split_host_port(address: str) -> tuple[str, int]:
    if address.startswith("["):
        name, sep, rest = address[1:].partition("]")
        if not sep or not rest.startswith(":"):
            raise JournalIOError("invalid socket address")
        port_text = rest[1:]
    else:
        name, sep, port_text = address.rpartition(":")
        if not sep:
            raise JournalIOError("invalid socket address")
    if not _UNSIGNED_RE.fullmatch(port_text) or int(port_text) > 0xFFFF:
        raise JournalIOError("invalid port value")
    return name, int(port_text)


def _json_text(value: Any) -> str:
    return json.dumps(value, ensure_ascii=False, separators=(",", ":"))


def _parse_u8(text: str) -> int | None:
    if not _UNSIGNED_RE.fullmatch(text):
        return None
    value = int(text)
    return value if value <= 0xFF else None


def _parse_float(text: str) -> float | None:
    if text != text.strip() or "_" in text:
        return None
    try:
        return float(text)
    except ValueError:
        return None


def _reject_constant(name: str) -> Any:
    raise ValueError(f"invalid number: {name}")