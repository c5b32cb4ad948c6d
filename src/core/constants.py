GLOBAL_P2P = "GlobalP2P"

NIL_ADDRESS = "0x0000000000000000000000000000000000000000"

# used for deployWallet unless the gas policy asks the node for an estimate
DEFAULT_GAS_LIMIT = 800000
DEFAULT_RECEIPT_TIMEOUT = 120

DEPLOY_WALLET_METHOD = "deployWallet"
WALLETS_METHOD = "wallets"
