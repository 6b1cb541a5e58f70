"""
Opens a vault on every series with a whale's UNI or wstETH, then auctions it
and buys it through the FlashLiquidator.

Each vault borrows the dust amount with 1% more collateral than the spot
ratio requires. The timelock then raises the ratio to 3000%, and restores it
once the vault has been liquidated.
"""
import click
from ape import Contract, accounts, project
from ape.cli import ConnectedProviderCommand, account_option

from liquidator_harness.chain import impersonate, set_balance
from liquidator_harness.constants import (
    ASSETS,
    CAULDRON,
    ETH,
    LADLE,
    LIQUIDATION_SPOT_RATIO,
    SERIES_IDS,
    STETH,
    TIMELOCK,
    UNI,
    WAD,
    WHALES,
    WITCH,
    WSTETH,
)
from liquidator_harness.vaults import (
    CAULDRON_ABI,
    ERC20_ABI,
    LADLE_ABI,
    ORACLE_ABI,
    WITCH_ABI,
    WSTETH_ABI,
    auction_and_liquidate,
    bytes6_to_bytes32,
    collateral_to_post,
    dust_debt,
    spot_ratio,
)

ILKS = {'UNI': UNI, 'WSTETH': WSTETH}


def build_vault(cauldron, ladle, owner, series_id, ilk_id):
    receipt = ladle.build(series_id, ilk_id, 0, sender=owner)
    return receipt.decode_logs(cauldron.VaultBuilt)[-1].vaultId


@click.command(cls=ConnectedProviderCommand)
@account_option()
@click.option('--flash-liquidator', required=True, help='address of a deployed FlashLiquidator')
@click.option('--ilk', type=click.Choice(sorted(ILKS)), default='UNI', show_default=True)
@click.option('--ladle', 'ladle_address', default=LADLE, show_default=True)
@click.option('--oracle', 'oracle_address', default=None,
              help='oracle pricing the debt in the ilk; defaults to the series spot oracle')
@click.option('--recipient', default=None, help='WETH profit recipient to report; defaults to the account')
def cli(provider, account, flash_liquidator, ilk, ladle_address, oracle_address, recipient):
    ilk_id = ILKS[ilk]
    whale_address = WHALES[ilk_id]
    for address in (account.address, TIMELOCK, whale_address):
        set_balance(provider, address, 10 * WAD)

    cauldron = Contract(CAULDRON, abi=CAULDRON_ABI)
    ladle = Contract(ladle_address, abi=LADLE_ABI)
    witch = Contract(WITCH, abi=WITCH_ABI)
    weth = Contract(ASSETS[ETH], abi=ERC20_ABI)
    collateral = Contract(ASSETS[ilk_id], abi=WSTETH_ABI if ilk_id == WSTETH else ERC20_ABI)
    liquidator = project.FlashLiquidator.at(flash_liquidator)

    impersonate(provider, TIMELOCK)
    impersonate(provider, whale_address)
    timelock = accounts[TIMELOCK]
    whale = accounts[whale_address]

    if ilk_id == WSTETH:
        # the whale holds stETH
        steth = Contract(ASSETS[STETH], abi=ERC20_ABI)
        steth.approve(collateral.address, 10 * WAD, sender=whale)
        collateral.wrap(10 * WAD, sender=whale)

    for series_id in SERIES_IDS:
        click.echo(f"series: {series_id}")
        fy_token, base_id, _ = cauldron.series(series_id)
        dust = cauldron.debt(base_id, ilk_id)[1]
        oracle_for_spot, ratio = cauldron.spotOracles(base_id, ilk_id)
        oracle = Contract(oracle_address or oracle_for_spot, abi=ORACLE_ABI)

        borrowed = dust_debt(dust, Contract(fy_token, abi=ERC20_ABI).decimals())
        value = oracle.peek(bytes6_to_bytes32(base_id), bytes6_to_bytes32(ilk_id), borrowed)[0]
        posted = collateral_to_post(value, ratio)

        vault_id = build_vault(cauldron, ladle, account, series_id, ilk_id)
        click.echo(f"vault: {vault_id}")

        click.echo(f"posting {posted} {ilk} out of {collateral.balanceOf(whale.address)}")
        collateral.transfer(ladle.joins(ilk_id), posted, sender=whale)
        click.echo(f"borrowing {borrowed} {base_id} with {series_id}")
        ladle.pour(vault_id, whale.address, posted, borrowed, sender=account)

        with spot_ratio(cauldron, timelock, base_id, ilk_id, LIQUIDATION_SPOT_RATIO):
            receipt = auction_and_liquidate(provider, witch, liquidator, vault_id, account)
            click.echo(f"liquidated {vault_id}: {receipt.txn_hash}")

        click.echo(f"profit: {weth.balanceOf(recipient or account.address)}")
