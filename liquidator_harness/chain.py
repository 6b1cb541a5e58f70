"""Hardhat node helpers: forking, account funding and impersonation, redeploys."""
import os
from dataclasses import dataclass
from pathlib import Path

from ape.logging import logger
from dotenv import load_dotenv

from liquidator_harness.constants import HARDHAT_OWNER, UNI_FACTORY, UNI_ROUTER, WITCH
from liquidator_harness.exceptions import ConfigurationError

ROOT_DIR = Path(__file__).resolve().parent.parent
ALCHEMY_URL = 'https://eth-mainnet.alchemyapi.io/v2/{key}'

load_dotenv(ROOT_DIR / '.env')


def alchemy_key(root=ROOT_DIR):
    key = os.environ.get('ALCHEMY_KEY')
    if key:
        return key.strip()
    key_file = Path(root) / '.alchemyKey'
    if key_file.exists():
        return key_file.read_text().strip()
    raise ConfigurationError('ALCHEMY_KEY is not set and there is no .alchemyKey file')


def has_alchemy_key(root=ROOT_DIR):
    try:
        alchemy_key(root)
    except ConfigurationError:
        return False
    return True


@dataclass(frozen=True)
class ForkPoint:
    block_number: int
    rpc_url: str

    @classmethod
    def from_alchemy(cls, block_number, key=None):
        return cls(block_number, ALCHEMY_URL.format(key=key or alchemy_key()))

    def reset_params(self):
        return [{'forking': {'jsonRpcUrl': self.rpc_url, 'blockNumber': self.block_number}}]


def fork(provider, fork_point):
    logger.info(f"Forking mainnet at block {fork_point.block_number}")
    provider.make_request('hardhat_reset', fork_point.reset_params())


def set_balance(provider, address, amount):
    provider.make_request('hardhat_setBalance', [str(address), hex(amount)])


def impersonate(provider, address):
    provider.make_request('hardhat_impersonateAccount', [str(address)])


def mine(provider, timestamp=None):
    provider.make_request('evm_mine', [] if timestamp is None else [timestamp])


def is_fork_owner(address):
    return str(address).lower() == HARDHAT_OWNER.lower()


def deploy_flash_liquidator(project, owner, witch=WITCH, uni_factory=UNI_FACTORY, uni_router=UNI_ROUTER):
    liquidator = project.FlashLiquidator.deploy(witch, uni_factory, uni_router, sender=owner)
    logger.info(f"Liquidator deployed: {liquidator.address}")
    return liquidator


def fetch_transactions(provider, tx_hashes):
    transactions = []
    for tx_hash in tx_hashes:
        tx = provider.get_receipt(tx_hash).transaction
        logger.info(f"TX hash found: {tx_hash} [{tx.nonce}]")
        transactions.append(tx)
    return transactions


def replay_transactions(provider, sender, transactions):
    """Sends the calldata of previously fetched transactions again, from sender.

    Raises if any of them reverts, e.g. because the recorded gas limit no
    longer covers the call.
    """
    ecosystem = provider.network.ecosystem
    receipts = []
    for original in transactions:
        logger.info(f"Sending to {original.receiver} [{original.nonce}]")
        tx = ecosystem.create_transaction(
            chain_id=original.chain_id,
            receiver=original.receiver,
            data=original.data,
            gas_limit=original.gas_limit,
            value=original.value,
        )
        receipts.append(sender.call(tx))
    return receipts
