# jctl2gray

Reads systemd journal records in JSON form, either from standard input or
from a `journalctl` process it starts itself, turns each record into a GELF
1.1 message and sends it to Graylog over UDP. Messages larger than one
datagram are split into GELF chunks (1420 bytes of payload each, at most 128
chunks), and can be compressed with gzip or zlib first.

It has no dependencies outside the Python standard library and needs
Python 3.10 or later.

## Installation

```
pip install .
```

For running the tests:

```
pip install ".[test]"
pytest
```

## Usage

Follow the local journal (Linux only; requires `journalctl` on `PATH`):

```
jctl2gray --source journal --target graylog.example.com:12201
```

This runs `journalctl -o json -f --merge` (plus `--directory DIR` when
`--journal_dir` is given). When its output ends, the first line of its error
output is logged and the program stops.

Pipe records in yourself:

```
journalctl -o json -f | jctl2gray --source stdin --target 127.0.0.1:12201
```

The command also runs as `python -m jctl2gray.cli`. It exits with status 1
whenever processing stops, whether at the end of input or after an error.

### Options

| Option | Default | Meaning |
| --- | --- | --- |
| `-s`, `--source` | required | `stdin` or `journal` |
| `-d`, `--journal_dir` | empty | directory to read journal files from |
| `-p`, `--port` | `5000` | local UDP port to send from |
| `-t`, `--target` | `127.0.0.1:9000` | Graylog address `host:port`; must resolve at start-up |
| `--ttl` | `60` | seconds between re-resolving the target address (must be > 0) |
| `-c`, `--comp` | `none` | `none`, `gzip` or `zlib` |
| `--opt` | none | extra fields as `name=text` pairs, comma separated, e.g. `--opt team=t1,service=backend`; may be repeated |
| `-l`, `--sys` | `info` | system level threshold: `emergency`, `alert`, `critical`, `error`, `warning`, `notice`, `info`, `debug` |
| `-m`, `--msg` | none | message level threshold: `fatal`, `panic`, `error`, `warning`, `info`, `debug` |
| `-V`, `--version` | | print the version and exit |

### Filtering and fields

Records whose `PRIORITY` is less severe than the `--sys` threshold are
dropped; records without a usable `PRIORITY` keep the GELF default level,
alert. When `--msg` is given, messages that contain `level=<name> ` and are
less severe than the threshold are dropped too. Records without a `MESSAGE`
field are skipped, and lines that are not JSON objects are logged as parsing
errors and skipped.

`__REALTIME_TIMESTAMP` (microseconds) becomes the GELF `timestamp` in
seconds; without it the current time is used. `_HOSTNAME` becomes `host`
(`undefined` when absent). Every other journal field except `MESSAGE`,
`PRIORITY`, `__CURSOR`, `_BOOT_ID`, `_MACHINE_ID`, `_SYSTEMD_CGROUP`,
`_SYSTEMD_SLICE` and `id` is forwarded as an additional GELF field prefixed
with `_`. The `--opt` fields are added to every message under their names as
given.

If the target address cannot be re-resolved after its TTL, a warning is
logged and the previous address keeps being used.

## Library use

```python
from jctl2gray.message import Message
from jctl2gray.wire_message import WireMessage
from jctl2gray.compression import MessageCompression
from jctl2gray.chunked_message import ChunkSize
from jctl2gray.level import LevelSystem

msg = Message("web-1", "service started")
msg.level = LevelSystem.from_name("notice")
msg.set_metadata("unit", "nginx.service")

wire = WireMessage(msg, [("team", "t1")])
chunked = wire.to_chunked_message(ChunkSize.wan(), MessageCompression.from_name("gzip"))
for datagram in chunked:
    ...  # send each datagram over UDP
```

The modules:

- `jctl2gray.message` — `Message`, the GELF message fields.
- `jctl2gray.wire_message` — `WireMessage` with `to_dict()`, `to_gelf()`,
  `to_compressed_gelf()` and `to_chunked_message()`.
- `jctl2gray.compression` — `MessageCompression` (`NONE`, `GZIP`, `ZLIB`).
- `jctl2gray.chunked_message` — `ChunkSize` (`lan()`, `wan()`),
  `ChunkedMessageId` and `ChunkedMessage`, which iterates over datagrams.
- `jctl2gray.level` — `LevelSystem` (syslog severities) and `LevelMsg`.
- `jctl2gray.processing` — `transform_record()`, `process_stdin()`,
  `process_journalctl()` and the helpers they use.
- `jctl2gray.config` — `Config` and `LogSource`.
- `jctl2gray.errors` — `Jctl2grayError` and its subclasses.

## What it does not do

Messages go out over UDP only; there is no TCP or HTTP transport, and no
delivery confirmation. Reading the journal directly is supported on Linux
only, through the `journalctl` command.