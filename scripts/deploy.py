import click
from ape import project
from ape.cli import ConnectedProviderCommand, account_option

from liquidator_harness.chain import deploy_flash_liquidator, is_fork_owner, set_balance
from liquidator_harness.constants import UNI_FACTORY, UNI_ROUTER, WAD, WITCH


@click.command(cls=ConnectedProviderCommand)
@account_option()
@click.option('--witch', default=WITCH, show_default=True)
@click.option('--uni-factory', default=UNI_FACTORY, show_default=True)
@click.option('--uni-router', default=UNI_ROUTER, show_default=True)
def cli(provider, account, witch, uni_factory, uni_router):
    # on a mainnet fork the default account starts with nothing
    if is_fork_owner(account.address):
        set_balance(provider, account.address, 1_000_000 * WAD)

    flash_liquidator = deploy_flash_liquidator(project, account, witch, uni_factory, uni_router)
    click.echo(f"FlashLiquidator deployed at {flash_liquidator.address}")
    click.echo(f"constructor args: {witch} {uni_factory} {uni_router}")
