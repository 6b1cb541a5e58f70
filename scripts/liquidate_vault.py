"""
Auctions a mainnet vault on a fork and buys it through the FlashLiquidator.

The timelock raises the (base, ilk) collateralization requirement so that a
healthy vault becomes liquidatable, and puts the old ratio back afterwards.
"""
import click
from ape import Contract, accounts, project
from ape.cli import ConnectedProviderCommand, account_option

from liquidator_harness.chain import impersonate, set_balance
from liquidator_harness.constants import ASSET_IDS, CAULDRON, TIMELOCK, WAD, WITCH
from liquidator_harness.vaults import CAULDRON_ABI, WITCH_ABI, auction_and_liquidate, spot_ratio

# collateralized at 268% when this script was written
DEFAULT_VAULT_ID = '0xd22a8e6260143034ccb99398'


def _asset_id(ctx, param, value):
    return ASSET_IDS[value]


@click.command(cls=ConnectedProviderCommand)
@account_option()
@click.option('--flash-liquidator', required=True, help='address of a deployed FlashLiquidator')
@click.option('--vault-id', default=DEFAULT_VAULT_ID, show_default=True)
@click.option('--base', 'base_id', type=click.Choice(sorted(ASSET_IDS)), default='DAI', show_default=True,
              callback=_asset_id, help='base asset of the vault')
@click.option('--ilk', 'ilk_id', type=click.Choice(sorted(ASSET_IDS)), default='ETH', show_default=True,
              callback=_asset_id, help='collateral asset of the vault')
@click.option('--ratio', default=3_000_000, show_default=True, help='new spot oracle ratio, 1e6 == 100%')
def cli(provider, account, flash_liquidator, vault_id, base_id, ilk_id, ratio):
    set_balance(provider, account.address, 10 * WAD)
    set_balance(provider, TIMELOCK, 10 * WAD)

    cauldron = Contract(CAULDRON, abi=CAULDRON_ABI)
    witch = Contract(WITCH, abi=WITCH_ABI)
    liquidator = project.FlashLiquidator.at(flash_liquidator)

    impersonate(provider, TIMELOCK)
    timelock = accounts[TIMELOCK]
    with spot_ratio(cauldron, timelock, base_id, ilk_id, ratio):
        click.echo(f"{base_id}/{ilk_id} spot ratio set to {ratio / 1e4:.0f}%")
        receipt = auction_and_liquidate(provider, witch, liquidator, vault_id, account)
        click.echo(f"liquidated {vault_id}: {receipt.txn_hash}")
