import os

# Settings() is built at import time of core.config
os.environ["ENVIRONMENT_NAME"] = "Test"
os.environ["KLAYTN_RPC_URL"] = "http://localhost:8551"
os.environ["GLOBAL_P2P_ADDRESS"] = "0x5FbDB2315678afecb367f032d93F642f64180aa3"
os.environ["OPERATION_ADMIN_WALLET_PRIVATE_KEY"] = (
    "ac0974bec39a17e36ba4a6b4d238ff944bacb478cbed5efcae784d7bf4f2ff80"
)

from unittest.mock import MagicMock

import pytest
from hexbytes import HexBytes

from services.wallet_adapter import WalletAdapter, WalletOptions

OPERATOR_PRIVATE_KEY = os.environ["OPERATION_ADMIN_WALLET_PRIVATE_KEY"]
OPERATOR_ADDRESS = "0xf39Fd6e51aad88F6F4ce6aB8827279cffFb92266"
REGISTRY_ADDRESS = os.environ["GLOBAL_P2P_ADDRESS"]
ALICE_WALLET = "0xe7f1725E7734CE288F8367e1Bb143E90bb3F0512"
TX_HASH = HexBytes("0x" + "ab" * 32)


@pytest.fixture
def wallet_options():
    return WalletOptions(
        rpc_url="http://localhost:8551",
        address=REGISTRY_ADDRESS,
        signer_private_key=OPERATOR_PRIVATE_KEY,
    )


@pytest.fixture
def web3_client():
    w3 = MagicMock()
    w3.eth.get_transaction_count.return_value = 5
    w3.eth.gas_price = 1_000_000_000
    w3.eth.send_raw_transaction.return_value = TX_HASH
    w3.eth.wait_for_transaction_receipt.return_value = {
        "blockNumber": 150_000_000,
        "status": 1,
    }
    return w3


@pytest.fixture
def registry_contract():
    contract = MagicMock()
    contract.functions.deployWallet.return_value.build_transaction.side_effect = (
        lambda opts: {**opts, "to": REGISTRY_ADDRESS, "data": "0x1234", "chainId": 1001}
    )
    contract.functions.wallets.return_value.call.return_value = ALICE_WALLET.lower()
    return contract


@pytest.fixture
def wallet_adapter(web3_client, registry_contract, wallet_options):
    return WalletAdapter(web3_client, [], registry_contract, wallet_options)
