import pytest

from liquidator_harness import chain
from liquidator_harness.chain import ForkPoint, alchemy_key, fork, impersonate, is_fork_owner, mine, set_balance
from liquidator_harness.constants import ENS_LIQUIDATION_BLOCK, HARDHAT_OWNER, TIMELOCK, WAD
from liquidator_harness.exceptions import ConfigurationError

from util import FakeProvider


class TestAlchemyKey:
    def test_env(self, monkeypatch, tmp_path):
        monkeypatch.setenv('ALCHEMY_KEY', ' abc \n')
        assert alchemy_key(tmp_path) == 'abc'

    def test_key_file(self, monkeypatch, tmp_path):
        monkeypatch.delenv('ALCHEMY_KEY', raising=False)
        (tmp_path / '.alchemyKey').write_text('filekey\n')
        assert alchemy_key(tmp_path) == 'filekey'

    def test_missing(self, monkeypatch, tmp_path):
        monkeypatch.delenv('ALCHEMY_KEY', raising=False)
        with pytest.raises(ConfigurationError):
            alchemy_key(tmp_path)
        assert not chain.has_alchemy_key(tmp_path)


class TestFork:
    def test_fork_point(self):
        point = ForkPoint.from_alchemy(ENS_LIQUIDATION_BLOCK, key='k')
        assert point.rpc_url == 'https://eth-mainnet.alchemyapi.io/v2/k'
        assert point.block_number == 13738315

    def test_hardhat_reset(self):
        provider = FakeProvider()
        fork(provider, ForkPoint(13738305, 'https://archive.example'))

        assert provider.requests == [
            ('hardhat_reset', [{'forking': {'jsonRpcUrl': 'https://archive.example', 'blockNumber': 13738305}}]),
        ]

    def test_node_helpers(self):
        provider = FakeProvider()
        set_balance(provider, TIMELOCK, 10 * WAD)
        impersonate(provider, TIMELOCK)
        mine(provider, 1638648000)
        mine(provider)

        assert provider.requests == [
            ('hardhat_setBalance', [TIMELOCK, '0x8ac7230489e80000']),
            ('hardhat_impersonateAccount', [TIMELOCK]),
            ('evm_mine', [1638648000]),
            ('evm_mine', []),
        ]

    def test_fork_owner(self):
        assert is_fork_owner(HARDHAT_OWNER.lower())
        assert not is_fork_owner(TIMELOCK)
