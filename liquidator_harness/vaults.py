"""Opening and liquidating Yield v2 vaults on a mainnet fork.

The Yield contracts are not part of this project, so they are reached
through the minimal ABIs below with ``ape.Contract(address, abi=...)``.
"""
from contextlib import contextmanager

from ape.logging import logger

from liquidator_harness.chain import mine
from liquidator_harness.constants import RATIO_PRECISION


def _fn(name, inputs, outputs=(), mutability='nonpayable'):
    return {'type': 'function', 'name': name, 'stateMutability': mutability,
            'inputs': [{'name': n, 'type': t} for n, t in inputs],
            'outputs': [{'name': n, 'type': t} for n, t in outputs]}


CAULDRON_ABI = [
    _fn('series', [('seriesId', 'bytes6')],
        [('fyToken', 'address'), ('baseId', 'bytes6'), ('maturity', 'uint32')], 'view'),
    _fn('debt', [('baseId', 'bytes6'), ('ilkId', 'bytes6')],
        [('max', 'uint96'), ('min', 'uint24'), ('dec', 'uint8'), ('sum', 'uint128')], 'view'),
    _fn('spotOracles', [('baseId', 'bytes6'), ('ilkId', 'bytes6')],
        [('oracle', 'address'), ('ratio', 'uint32')], 'view'),
    _fn('setSpotOracle', [('baseId', 'bytes6'), ('ilkId', 'bytes6'), ('oracle', 'address'), ('ratio', 'uint32')]),
    {'type': 'event', 'name': 'VaultBuilt', 'anonymous': False,
     'inputs': [{'name': 'vaultId', 'type': 'bytes12', 'indexed': True},
                {'name': 'owner', 'type': 'address', 'indexed': True},
                {'name': 'seriesId', 'type': 'bytes6', 'indexed': True},
                {'name': 'ilkId', 'type': 'bytes6', 'indexed': False}]},
]

LADLE_ABI = [
    _fn('build', [('seriesId', 'bytes6'), ('ilkId', 'bytes6'), ('salt', 'uint8')],
        [('vaultId', 'bytes12')], 'payable'),
    _fn('joins', [('assetId', 'bytes6')], [('join', 'address')], 'view'),
    _fn('pour', [('vaultId', 'bytes12'), ('to', 'address'), ('ink', 'int128'), ('art', 'int128')],
        mutability='payable'),
]

WITCH_ABI = [
    _fn('auction', [('vaultId', 'bytes12')]),
]

ORACLE_ABI = [
    _fn('peek', [('base', 'bytes32'), ('quote', 'bytes32'), ('amount', 'uint256')],
        [('value', 'uint256'), ('updateTime', 'uint256')], 'view'),
]

ERC20_ABI = [
    _fn('balanceOf', [('account', 'address')], [('', 'uint256')], 'view'),
    _fn('decimals', [], [('', 'uint8')], 'view'),
    _fn('transfer', [('to', 'address'), ('amount', 'uint256')], [('', 'bool')]),
    _fn('approve', [('spender', 'address'), ('amount', 'uint256')], [('', 'bool')]),
]

WSTETH_ABI = ERC20_ABI + [
    _fn('wrap', [('stETHAmount', 'uint256')], [('', 'uint256')]),
]


def bytes6_to_bytes32(asset_id):
    # right padded, as oracles key their sources by bytes32
    if isinstance(asset_id, bytes):
        asset_id = '0x' + bytes(asset_id).hex()
    return asset_id + '00' * 26


def dust_debt(dust, decimals):
    # Cauldron.debt().min is in whole units of the base
    return dust * 10**decimals


def collateral_to_post(value, ratio):
    """Collateral that covers ``value`` at ``ratio`` with a 1% margin.

    ``value`` is the debt priced in the ilk, as returned by the oracle.
    """
    return value * ratio // RATIO_PRECISION * 101 // 100


@contextmanager
def spot_ratio(cauldron, timelock, base_id, ilk_id, ratio):
    """Sets the (base, ilk) collateralization ratio, restoring the old one on exit."""
    oracle, previous = cauldron.spotOracles(base_id, ilk_id)
    cauldron.setSpotOracle(base_id, ilk_id, oracle, ratio, sender=timelock)
    logger.info(f"spot ratio {base_id}/{ilk_id}: {previous} -> {ratio}")
    try:
        yield previous
    finally:
        cauldron.setSpotOracle(base_id, ilk_id, oracle, previous, sender=timelock)
        logger.info(f"spot ratio {base_id}/{ilk_id} restored to {previous}")


def auction_and_liquidate(provider, witch, liquidator, vault_id, sender, wait=3600):
    witch.auction(vault_id, sender=sender)
    logger.info(f"auction started for {vault_id}")

    # wait for the auction price to cover the flash loan and its fee
    mine(provider, provider.get_block('latest').timestamp + wait)

    return liquidator.liquidate(vault_id, sender=sender)
