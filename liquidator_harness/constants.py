# first account of the default hardhat mnemonic
HARDHAT_OWNER = '0xf39Fd6e51aad88F6F4ce6aB8827279cffFb92266'
HARDHAT_CHAIN_ID = 31337
LOCAL_RPC_URL = 'http://127.0.0.1:8545/'

WAD = 10**18


def bytes6_id(name):
    # ethers.utils.formatBytes32String(name).slice(0, 14)
    return '0x' + name.encode().hex().ljust(12, '0')[:12]


ETH = bytes6_id('00')
DAI = bytes6_id('01')
USDC = bytes6_id('02')
WBTC = bytes6_id('03')
WSTETH = bytes6_id('04')
STETH = bytes6_id('05')
LINK = bytes6_id('06')
ENS = bytes6_id('07')
YVDAI = bytes6_id('08')
YVUSDC = bytes6_id('09')
UNI = bytes6_id('10')

FYDAI2112 = bytes6_id('0104')
FYDAI2203 = bytes6_id('0105')
FYUSDC2112 = bytes6_id('0204')
FYUSDC2203 = bytes6_id('0205')

SERIES_IDS = (FYDAI2112, FYDAI2203, FYUSDC2112, FYUSDC2203)

# mainnet
WITCH = '0x53C3760670f6091E1eC76B4dd27f73ba4CAd5061'
CAULDRON = '0xc88191F8cb8e6D4a668B047c1C8503432c3Ca867'
TIMELOCK = '0x3b870db67a45611CF4723d44487EAF398fAc51E3'
UNI_FACTORY = '0x1F98431c8aD98523631AE4a59f267346ea31F984'
UNI_ROUTER = '0xE592427A0AEce92De3Edee1F18E0157C05861564'
SWAP_ROUTER_02 = '0x68b3465833fb72A70ecDF485E0e4C7bD8665Fc45'
MULTICALL2 = '0x5ba1e12693dc8f9c48aad8770482f4739beed696'
LADLE = '0x6cB18fF2A33e981D1e38A663Ca056c0a5265066A'

ASSETS = {
    ETH: '0xC02aaA39b223FE8D0A0e5C4F27eAD9083C756Cc2',
    DAI: '0x6B175474E89094C44Da98b954EedeAC495271d0F',
    USDC: '0xA0b86991c6218b36c1d19D4a2e9Eb0cE3606eB48',
    WBTC: '0x2260FAC5E5542a773Aa44fBCfeDf7C193bc2C599',
    WSTETH: '0x7f39C581F595B53c5cb19bD0b3f8dA6c935E2Ca0',
    STETH: '0xae7ab96520DE3A18E5e111B5EaAb095312D7fE84',
    LINK: '0x514910771af9ca656af840dff83e8264ecf986ca',
    ENS: '0xC18360217D8F7Ab5e7c516566761Ea12Ce7F9D72',
    UNI: '0x1f9840a85d5aF5bf1D1762F925BDADdC4201F984',
}

ASSET_IDS = {
    'ETH': ETH, 'DAI': DAI, 'USDC': USDC, 'WBTC': WBTC, 'WSTETH': WSTETH, 'STETH': STETH,
    'LINK': LINK, 'ENS': ENS, 'YVDAI': YVDAI, 'YVUSDC': YVUSDC, 'UNI': UNI,
}

# accounts holding enough collateral to open vaults on a fork
WHALES = {
    WSTETH: '0x06920c9fc643de77b99cb7670a944ad31eaaa260',
    UNI: '0x5f246d7d19aa612d6718d27c1da1ee66859586b0',
}

# 1e6 == 100%
RATIO_PRECISION = 10**6
LIQUIDATION_SPOT_RATIO = 3000 * RATIO_PRECISION // 100

# Dec-04-2021: buy orders for ENS vaults issued at the first block, mined by the second
ENS_TXS_ISSUED_BLOCK = 13738305
ENS_LIQUIDATION_BLOCK = 13738315
ENS_EXPECTED_BUYS = 3

DUST_VAULT_ID = '00cbb039b7b8103611a9717f'
DUST_DEBT_THRESHOLD = 1000 * WAD

LIQUIDATOR_TIMEOUT = 30 * 60
