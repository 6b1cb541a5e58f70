import sys

import click

from liquidator_harness.exceptions import LogParseError
from liquidator_harness.expectations import (
    AllowedError,
    FinalMessage,
    MessageCount,
    NoUnexpectedErrors,
    ScenarioExpectation,
    VaultExcluded,
)
from liquidator_harness.log_stream import LogStream


def _parse_count(ctx, param, values):
    counts = []
    for value in values:
        message, sep, expected = value.rpartition('=')
        if not sep or not message:
            raise click.BadParameter(f"expected MESSAGE=N, got {value!r}")
        try:
            counts.append(MessageCount(message, int(expected)))
        except ValueError:
            raise click.BadParameter(f"{expected!r} is not a number")
    return counts


def _parse_allowed(ctx, param, values):
    allowed = []
    for message, contains in values:
        allowed.append(AllowedError(message, contains or None))
    return tuple(allowed)


@click.group()
def cli():
    """Checks captured liquidator logs."""


@cli.command()
@click.argument('logfile', type=click.Path(exists=True, dir_okay=False))
@click.option('--count', 'counts', multiple=True, callback=_parse_count,
              help='MESSAGE=N: exactly N INFO records with this message')
@click.option('--allow-error', 'allowed', nargs=2, multiple=True, callback=_parse_allowed,
              metavar='MESSAGE SUBSTRING',
              help='tolerated ERROR record; an empty SUBSTRING allows any error')
@click.option('--exclude-vault', 'excluded', multiple=True,
              help='vault id that must never be submitted for liquidation')
@click.option('--final-message', default=None, help='message of the last record')
def check(logfile, counts, allowed, excluded, final_message):
    predicates = list(counts)
    predicates.append(NoUnexpectedErrors(allowed))
    predicates += [VaultExcluded(v) for v in excluded]
    if final_message is not None:
        predicates.append(FinalMessage(final_message))

    expectation = ScenarioExpectation(logfile, predicates)
    try:
        results = expectation.evaluate(LogStream.from_file(logfile))
    except LogParseError as e:
        click.echo(f"malformed log: {e}", err=True)
        sys.exit(2)

    for result in results:
        status = 'PASS' if result.passed else 'FAIL'
        click.echo(f"{status} {result.name}: {result.detail}")
        if result.record is not None:
            click.echo(f"     line {result.record.line_number}: {result.record.raw}")

    if not all(r.passed for r in results):
        sys.exit(1)


if __name__ == '__main__':
    cli()
