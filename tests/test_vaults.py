from types import SimpleNamespace

import pytest

from liquidator_harness.constants import DAI, ETH, LIQUIDATION_SPOT_RATIO, TIMELOCK, UNI, WSTETH
from liquidator_harness.vaults import (
    auction_and_liquidate,
    bytes6_to_bytes32,
    collateral_to_post,
    dust_debt,
    spot_ratio,
)

from util import FakeCauldron, FakeProvider

ORACLE = '0x0000000000000000000000000000000000000abc'


class TestAmounts:
    def test_bytes6_to_bytes32(self):
        assert bytes6_to_bytes32(UNI) == '0x313000000000' + '0' * 52
        assert bytes6_to_bytes32(bytes.fromhex(WSTETH[2:])) == bytes6_to_bytes32(WSTETH)
        assert len(bytes6_to_bytes32(DAI)) == 2 + 64

    def test_dust_debt(self):
        assert dust_debt(5000, 18) == 5000 * 10**18
        assert dust_debt(5000, 6) == 5_000_000_000

    def test_collateral_to_post(self):
        # 1 unit priced in the ilk, 150% ratio, 1% margin
        assert collateral_to_post(10**18, 1_500_000) == 1_515_000_000_000_000_000
        assert collateral_to_post(200, 1_000_000) == 202

    def test_collateral_rounds_down(self):
        assert collateral_to_post(99, 1_000_000) == 99


class TestSpotRatio:
    def test_raised_then_restored(self):
        cauldron = FakeCauldron(ORACLE, 1_400_000)
        with spot_ratio(cauldron, TIMELOCK, DAI, UNI, LIQUIDATION_SPOT_RATIO) as previous:
            assert previous == 1_400_000
            assert cauldron.spotOracles(DAI, UNI) == (ORACLE, 30_000_000)

        assert cauldron.calls == [
            (DAI, UNI, ORACLE, 30_000_000, TIMELOCK),
            (DAI, UNI, ORACLE, 1_400_000, TIMELOCK),
        ]

    def test_restored_when_liquidation_fails(self):
        cauldron = FakeCauldron(ORACLE, 1_500_000)
        with pytest.raises(RuntimeError):
            with spot_ratio(cauldron, TIMELOCK, DAI, ETH, 3_000_000):
                raise RuntimeError('Not enough collateral')

        assert cauldron.spotOracles(DAI, ETH) == (ORACLE, 1_500_000)


class TestAuctionAndLiquidate:
    def test_waits_an_hour(self):
        calls = []
        provider = FakeProvider(timestamp=1638648000)
        witch = SimpleNamespace(auction=lambda vault_id, sender: calls.append(('auction', vault_id, sender)))
        liquidator = SimpleNamespace(liquidate=lambda vault_id, sender: calls.append(('liquidate', vault_id, sender)))

        auction_and_liquidate(provider, witch, liquidator, '0xd22a8e6260143034ccb99398', 'owner')

        assert calls == [('auction', '0xd22a8e6260143034ccb99398', 'owner'),
                         ('liquidate', '0xd22a8e6260143034ccb99398', 'owner')]
        assert provider.requests == [('evm_mine', [1638651600])]
