class HarnessError(Exception):
    pass


class ConfigurationError(HarnessError):
    pass


class LogParseError(HarnessError):
    """A liquidator log line that is not a well-formed record."""

    def __init__(self, reason, line_number=None, line=None):
        self.reason = reason
        self.line_number = line_number
        self.line = line
        if line_number is None:
            super().__init__(reason)
        else:
            super().__init__(f"line {line_number}: {reason}: {line!r}")


class ExpectationFailed(HarnessError, AssertionError):
    """One or more scenario predicates did not hold.

    Subclasses AssertionError so pytest reports it as a test failure
    rather than an error.
    """

    def __init__(self, scenario, failures):
        self.scenario = scenario
        self.failures = tuple(failures)
        lines = [f"{scenario}: {len(self.failures)} expectation(s) failed"]
        for failure in self.failures:
            lines.append(f"  {failure.name}: {failure.detail}")
            if failure.record is not None:
                lines.append(f"    offending record (line {failure.record.line_number}): {failure.record.raw}")
        super().__init__("\n".join(lines))


class LiquidatorTimeout(HarnessError):
    def __init__(self, command, timeout):
        self.command = command
        self.timeout = timeout
        super().__init__(f"liquidator did not exit within {timeout}s: {' '.join(command)}")
