"""Parsing of the liquidator's JSON-lines output.

The liquidator runs with ``--json-log``, so every line on stdout is one
``tracing`` event serialized as a JSON object::

    {"timestamp": "...", "level": "INFO", "fields": {"message": "Submitted buy order",
     "tx_hash": "PendingTransaction { tx_hash: 0xab.., .. }", "vault_id": "\\"00cb..\\""},
     "target": "yield_liquidator::liquidations", "spans": [...]}
"""
import enum
import json
import re
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Iterator, Mapping, Optional, Tuple

from liquidator_harness.exceptions import LogParseError

TX_HASH_PATTERN = re.compile(r"tx_hash:\s+(\w+)")
HEX_HASH_PATTERN = re.compile(r"0x[0-9a-fA-F]+")


class LogLevel(str, enum.Enum):
    TRACE = "TRACE"
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARN = "WARN"
    ERROR = "ERROR"


def normalize_vault_id(vault_id) -> str:
    # vault ids are logged through Debug formatting, i.e. with the quotes kept
    text = str(vault_id).strip().strip('"').lower()
    if text.startswith("0x"):
        text = text[2:]
    return text


def extract_tx_hash(text) -> str:
    match = TX_HASH_PATTERN.search(str(text))
    if match is None:
        raise LogParseError(f"no tx_hash in {text!r}")
    return match.group(1)


@dataclass(frozen=True)
class LogRecord:
    level: LogLevel
    fields: Mapping[str, object] = field(hash=False)
    line_number: int = 0
    target: Optional[str] = None
    timestamp: Optional[str] = None
    spans: Tuple[Mapping[str, object], ...] = field(default=(), hash=False)
    raw: str = field(default="", repr=False, compare=False)

    @property
    def message(self) -> Optional[str]:
        return self.fields.get("message")

    @property
    def error(self) -> Optional[str]:
        return self.fields.get("error")

    @property
    def vault_id(self) -> Optional[str]:
        value = self.fields.get("vault_id")
        if value is None:
            return None
        return normalize_vault_id(value)

    @property
    def tx_hash(self) -> Optional[str]:
        value = self.fields.get("tx_hash")
        if value is None:
            return None
        # "confirmed" records log the bare hash, "Submitted ..." ones the pending tx
        if HEX_HASH_PATTERN.fullmatch(str(value)):
            return str(value)
        return extract_tx_hash(value)

    def has_message(self, message, level=None) -> bool:
        if level is not None and self.level != LogLevel(level):
            return False
        return self.message == message


def parse_line(line, line_number=0) -> LogRecord:
    try:
        payload = json.loads(line)
    except json.JSONDecodeError as exc:
        raise LogParseError(f"invalid JSON ({exc.msg})", line_number, line) from exc

    if not isinstance(payload, dict):
        raise LogParseError("not a JSON object", line_number, line)

    try:
        level = LogLevel(str(payload["level"]).upper())
    except KeyError:
        raise LogParseError("missing 'level'", line_number, line) from None
    except ValueError:
        raise LogParseError(f"unknown level {payload['level']!r}", line_number, line) from None

    fields = payload.get("fields")
    if not isinstance(fields, dict):
        raise LogParseError("missing 'fields' object", line_number, line)

    spans = payload.get("spans") or ()
    return LogRecord(
        level=level,
        fields=MappingProxyType(dict(fields)),
        line_number=line_number,
        target=payload.get("target"),
        timestamp=payload.get("timestamp"),
        spans=tuple(MappingProxyType(dict(s)) for s in spans if isinstance(s, dict)),
        raw=line,
    )


class LogStream:
    """Lazy, restartable view over a captured liquidator stdout.

    Iterating parses on the fly, so a malformed line only surfaces when it
    is reached. Use ``records()`` (or ``parse_log``) to get all records or
    nothing.
    """

    def __init__(self, text):
        self.text = text

    @classmethod
    def from_file(cls, path):
        with open(path, "r", encoding="utf-8") as f:
            return cls(f.read())

    def __iter__(self) -> Iterator[LogRecord]:
        for line_number, line in enumerate(self.text.splitlines(), start=1):
            if not line.strip():
                continue
            yield parse_line(line, line_number)

    def records(self) -> Tuple[LogRecord, ...]:
        return tuple(self)

    def with_message(self, message, level=LogLevel.INFO) -> Tuple[LogRecord, ...]:
        return tuple(r for r in self.records() if r.has_message(message, level))

    def tx_hashes(self, message="Submitted buy order") -> Tuple[str, ...]:
        hashes = []
        for record in self.with_message(message):
            if record.tx_hash is None:
                raise LogParseError(f"{message!r} record has no tx_hash", record.line_number, record.raw)
            hashes.append(record.tx_hash)
        return tuple(hashes)


def parse_log(text) -> Tuple[LogRecord, ...]:
    return LogStream(text).records()
