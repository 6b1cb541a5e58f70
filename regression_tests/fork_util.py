from liquidator_harness.chain import ForkPoint, deploy_flash_liquidator, fork
from liquidator_harness.constants import HARDHAT_CHAIN_ID, LIQUIDATOR_TIMEOUT, LOCAL_RPC_URL, MULTICALL2, WITCH
from liquidator_harness.liquidator import LiquidatorConfig, run_liquidator, write_inputs


def fork_and_deploy(provider, project, owner, block_number):
    fork(provider, ForkPoint.from_alchemy(block_number))
    return deploy_flash_liquidator(project, owner)


def liquidate(tmp_root, owner, liquidator, **config):
    liquidator_config = LiquidatorConfig(witch=WITCH, flash=liquidator.address, multicall2=MULTICALL2, **config)
    options = write_inputs(tmp_root, liquidator_config, owner.private_key, LOCAL_RPC_URL, HARDHAT_CHAIN_ID)
    return run_liquidator(tmp_root, options, timeout=LIQUIDATOR_TIMEOUT)
