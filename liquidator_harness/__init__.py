from liquidator_harness.exceptions import (
    ConfigurationError,
    ExpectationFailed,
    HarnessError,
    LiquidatorTimeout,
    LogParseError,
)
from liquidator_harness.expectations import (
    AllowedError,
    FinalMessage,
    MessageCount,
    NoUnexpectedErrors,
    PredicateResult,
    ScenarioExpectation,
    VaultExcluded,
)
from liquidator_harness.log_stream import LogLevel, LogRecord, LogStream, extract_tx_hash, parse_log
