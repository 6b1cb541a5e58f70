import json
import sys
from types import SimpleNamespace

BUY_TX = '0x9a1f3c6b2e0d4f5a8b7c6d5e4f3a2b1c0d9e8f7a6b5c4d3e2f1a0b9c8d7e6f5a'


def log_line(level, message, target='yield_liquidator::liquidations', **fields):
    return json.dumps({'timestamp': 'Dec 04 21:00:00.000',
                       'level': level,
                       'fields': {'message': message, **fields},
                       'target': target})


def buy_order(vault_id, tx_hash=BUY_TX):
    return log_line('INFO', 'Submitted buy order',
                    tx_hash=f'PendingTransaction {{ tx_hash: {tx_hash}, confirmations: 1 }}',
                    vault_id=f'"{vault_id}"',
                    instance_name='undefined',
                    gas='1200000')


def liquidation(vault_id, tx_hash=BUY_TX):
    return log_line('INFO', 'Submitted liquidation',
                    tx_hash=f'PendingTransaction {{ tx_hash: {tx_hash}, confirmations: 1 }}',
                    vault_id=f'"{vault_id}"')


def failed_buy(vault_id, error='(code: 3, message: execution reverted: Too little received, data: None)'):
    return log_line('ERROR', 'Failed to buy', vault_id=f'"{vault_id}"', error=error)


def fake_liquidator(tmp_path, stdout_lines, exit_code=0, stderr='', sleep=0):
    """A python script that behaves like the liquidator binary on the command line."""
    script = tmp_path / 'fake_liquidator.py'
    script.write_text(
        'import json, os, sys, time\n'
        f'time.sleep({sleep})\n'
        'with open(os.path.join(os.path.dirname(__file__), "argv.json"), "w") as f:\n'
        '    json.dump({"argv": sys.argv[1:], "rust_log": os.environ.get("RUST_LOG")}, f)\n'
        f'sys.stdout.write({json.dumps(chr(10).join(stdout_lines) + chr(10))})\n'
        f'sys.stderr.write({stderr!r})\n'
        f'sys.exit({exit_code})\n'
    )
    return [sys.executable, str(script)]


def recorded_invocation(tmp_path):
    return json.loads((tmp_path / 'argv.json').read_text())


class FakeProvider:
    def __init__(self, timestamp=0):
        self.requests = []
        self.timestamp = timestamp

    def get_block(self, block_id):
        return SimpleNamespace(timestamp=self.timestamp)

    def make_request(self, method, params):
        self.requests.append((method, params))


class FakeCauldron:
    def __init__(self, oracle, ratio):
        self.spot = {}
        self.oracle = oracle
        self.ratio = ratio
        self.calls = []

    def spotOracles(self, base_id, ilk_id):
        return self.spot.get((base_id, ilk_id), (self.oracle, self.ratio))

    def setSpotOracle(self, base_id, ilk_id, oracle, ratio, sender=None):
        self.calls.append((base_id, ilk_id, oracle, ratio, sender))
        self.spot[(base_id, ilk_id)] = (oracle, ratio)
