import pytest

from liquidator_harness.constants import MULTICALL2, WITCH
from liquidator_harness.liquidator import LiquidatorConfig

from util import buy_order, failed_buy, log_line


@pytest.fixture
def ens_vaults():
    return ['1e3e42a4a3f1c5b6d7e8f901', '2f4f53b5b4e2d6c7e8f9a012', '3a5a64c6c5f3e7d8f9a0b123',
            '4b6b75d7d6a4f8e9a0b1c234']


@pytest.fixture
def ens_log(ens_vaults):
    # three buys, one unprofitable vault rejected by the router
    lines = [log_line('INFO', 'Starting Yield-v2 Liquidator.', target='liquidator'),
             log_line('DEBUG', 'checking for undercollateralized positions...'),
             log_line('INFO', 'Liquidations collected', count=4, instance_name='undefined')]
    lines += [buy_order(v) for v in ens_vaults[:3]]
    lines.append(failed_buy(ens_vaults[3]))
    return '\n'.join(lines) + '\n'


@pytest.fixture
def tmp_root(tmp_path):
    root = tmp_path / 'flash_liquidator_test'
    root.mkdir()
    return root


@pytest.fixture
def liquidator_config():
    return LiquidatorConfig(witch=WITCH,
                            flash='0x5FbDB2315678afecb367f032d93F642f64180aa3',
                            multicall2=MULTICALL2)
