"""Declarative checks over a liquidator run's log records."""
from dataclasses import dataclass
from typing import Optional, Sequence, Tuple

from liquidator_harness.exceptions import ExpectationFailed
from liquidator_harness.log_stream import LogLevel, LogRecord, LogStream, normalize_vault_id


@dataclass(frozen=True)
class PredicateResult:
    name: str
    passed: bool
    detail: str
    record: Optional[LogRecord] = None


@dataclass(frozen=True)
class AllowedError:
    """An ERROR record that a scenario tolerates.

    Matches when the record's message is exactly ``message`` and, if
    ``error_contains`` is set, its ``error`` field contains that text.
    """
    message: str
    error_contains: Optional[str] = None

    def matches(self, record):
        if record.message != self.message:
            return False
        if self.error_contains is None:
            return True
        return self.error_contains in str(record.error or "")


@dataclass(frozen=True)
class MessageCount:
    message: str
    expected: int
    level: LogLevel = LogLevel.INFO

    def __post_init__(self):
        object.__setattr__(self, "level", LogLevel(self.level))

    @property
    def name(self):
        return f"count[{self.level.value} {self.message!r}] == {self.expected}"

    def count(self, records):
        return sum(1 for r in records if r.has_message(self.message, self.level))

    def evaluate(self, records):
        actual = self.count(records)
        return PredicateResult(self.name, actual == self.expected, f"found {actual}")


@dataclass(frozen=True)
class NoUnexpectedErrors:
    allowed: Tuple[AllowedError, ...] = ()

    @property
    def name(self):
        return "no unexpected ERROR records"

    def evaluate(self, records):
        tolerated = 0
        for record in records:
            if record.level != LogLevel.ERROR:
                continue
            if not any(a.matches(record) for a in self.allowed):
                return PredicateResult(
                    self.name, False,
                    f"ERROR {record.message!r} (error={record.error!r}) is not allowed",
                    record,
                )
            tolerated += 1
        return PredicateResult(self.name, True, f"{tolerated} allowed error(s)")


@dataclass(frozen=True)
class VaultExcluded:
    vault_id: str
    message: str = "Submitted liquidation"

    @property
    def name(self):
        return f"vault {normalize_vault_id(self.vault_id)} never in {self.message!r}"

    def evaluate(self, records):
        wanted = normalize_vault_id(self.vault_id)
        for record in records:
            if record.message == self.message and record.vault_id == wanted:
                return PredicateResult(self.name, False, "vault was submitted", record)
        return PredicateResult(self.name, True, "vault not submitted")


@dataclass(frozen=True)
class FinalMessage:
    message: str

    @property
    def name(self):
        return f"last message == {self.message!r}"

    def evaluate(self, records):
        if not records:
            return PredicateResult(self.name, False, "no records")
        last = records[-1]
        if last.message != self.message:
            return PredicateResult(self.name, False, f"last message is {last.message!r}", last)
        return PredicateResult(self.name, True, "ok")


def _as_records(records):
    if isinstance(records, LogStream):
        return records.records()
    return tuple(records)


@dataclass(frozen=True)
class ScenarioExpectation:
    name: str
    predicates: Sequence = ()

    def evaluate(self, records):
        # materialize first so a malformed log fails before any predicate runs
        records = _as_records(records)
        return [p.evaluate(records) for p in self.predicates]

    def check(self, records):
        results = self.evaluate(records)
        failures = [r for r in results if not r.passed]
        if failures:
            raise ExpectationFailed(self.name, failures)
        return results


def count_buy_orders(records):
    return MessageCount("Submitted buy order", 0).count(_as_records(records))
