"""
Custodial wallet creation through the GlobalP2P registry contract.

The adapter signs every transaction with the operator key and treats the
contract as the only record of which wallet belongs to which user id.
Nonce, gas price, gas estimation, ABI encoding and transport are all left
to web3.
"""

import enum
import logging
from typing import Any, List, Optional
from urllib.parse import urlparse

from pydantic import BaseModel, ConfigDict, Field, field_validator
from web3 import Web3
from web3.contract import Contract
from web3.middleware import ExtraDataToPOAMiddleware

from core import constants
from core.abi_reader import read_abi
from services.signer import LocalKeySigner, Signer

logger = logging.getLogger(__name__)

NIL_ADDRESS = constants.NIL_ADDRESS


class GasPolicy(str, enum.Enum):
    fixed = "fixed"
    estimate = "estimate"


class WalletOptions(BaseModel):
    model_config = ConfigDict(frozen=True)

    rpc_url: str
    address: str
    signer_private_key: str = Field(repr=False)
    gas_policy: GasPolicy = GasPolicy.fixed
    gas_limit: int = Field(default=constants.DEFAULT_GAS_LIMIT, gt=0)
    wait_for_receipt: bool = False
    receipt_timeout: float = Field(default=constants.DEFAULT_RECEIPT_TIMEOUT, gt=0)

    @field_validator("address", mode="before")
    def checksum_address(cls, v: str) -> str:
        if not Web3.is_address(v):
            raise ValueError(f"Invalid registry contract address: {v}")
        return Web3.to_checksum_address(v)


def connect_klaytn_client(rpc_url: str) -> Web3:
    scheme = urlparse(rpc_url).scheme
    if scheme in ("http", "https"):
        provider = Web3.HTTPProvider(rpc_url)
    elif scheme in ("ws", "wss"):
        provider = Web3.LegacyWebSocketProvider(rpc_url)
    else:
        raise ValueError(f"Unsupported rpc url scheme: {rpc_url}")

    w3 = Web3(provider)
    # Klaytn headers carry istanbul extra data longer than 32 bytes
    w3.middleware_onion.inject(ExtraDataToPOAMiddleware, layer=0)
    return w3


def new_wallet_adapter_with_client(options: WalletOptions) -> "WalletAdapter":
    w3 = connect_klaytn_client(options.rpc_url)
    abi = read_abi(constants.GLOBAL_P2P)
    contract = w3.eth.contract(address=options.address, abi=abi)
    return WalletAdapter(w3, abi, contract, options)


class WalletAdapter:
    def __init__(
        self,
        web3: Web3,
        abi: List[dict],
        contract: Contract,
        options: WalletOptions,
        signer: Optional[Signer] = None,
    ):
        self.web3 = web3
        self.abi = abi
        self.contract = contract
        self.options = options
        self.signer = signer if signer is not None else LocalKeySigner(
            options.signer_private_key
        )

    def create_wallet(self, user_id: str) -> str:
        """
        Send deployWallet(user_id) and return the address the registry reports
        for user_id afterwards.

        Calling this twice for the same user id sends two transactions. If the
        read-back fails the error is raised even though the deployment may
        have gone through.
        """
        opts = self.transact_opts(0)
        if self.options.gas_policy == GasPolicy.estimate:
            opts["gas"] = self.estimate_gas_usage(
                constants.DEPLOY_WALLET_METHOD, [user_id]
            )

        try:
            deploy_wallet = getattr(self.contract.functions, constants.DEPLOY_WALLET_METHOD)
            tx = deploy_wallet(user_id).build_transaction(opts)
            signed_tx = self.signer.sign_transaction(tx)
            tx_hash = self.web3.eth.send_raw_transaction(signed_tx.raw_transaction)
        except Exception as e:
            logger.error("deployWallet failed for %s: %s", user_id, e, exc_info=True)
            raise

        logger.info(
            "deployWallet sent for %s, nonce %s, tx %s",
            user_id,
            opts["nonce"],
            Web3.to_hex(tx_hash),
        )

        if self.options.wait_for_receipt:
            try:
                receipt = self.web3.eth.wait_for_transaction_receipt(
                    tx_hash, timeout=self.options.receipt_timeout
                )
            except Exception as e:
                # the transaction is out, its outcome is unknown
                logger.error(
                    "No receipt for deployWallet of %s, tx %s: %s",
                    user_id,
                    Web3.to_hex(tx_hash),
                    e,
                    exc_info=True,
                )
                raise

            logger.info(
                "deployWallet for %s mined in block %s with status %s",
                user_id,
                receipt["blockNumber"],
                receipt["status"],
            )

        return self.get_wallet_address_for(user_id)

    def get_wallet_address_for(self, user_id: str) -> str:
        """Look up the wallet of user_id. Unregistered ids give NIL_ADDRESS."""
        try:
            wallets = getattr(self.contract.functions, constants.WALLETS_METHOD)
            address = wallets(user_id).call(block_identifier="latest")
        except Exception as e:
            logger.error("wallets lookup failed for %s: %s", user_id, e, exc_info=True)
            raise

        return Web3.to_checksum_address(address)

    def transact_opts(self, value: int) -> dict:
        from_address = self.signer.address
        try:
            nonce = self.web3.eth.get_transaction_count(from_address, "pending")
            gas_price = self.web3.eth.gas_price
        except Exception as e:
            logger.error(
                "Nonce or gas price lookup failed for %s: %s",
                from_address,
                e,
                exc_info=True,
            )
            raise

        return {
            "from": from_address,
            "nonce": nonce,
            "value": value,  # in peb
            "gas": self.options.gas_limit,
            "gasPrice": gas_price,
        }

    def estimate_gas_usage(self, method_name: str, method_args: List[Any]) -> int:
        call_msg = {
            "from": self.signer.address,
            "to": self.options.address,
            "gasPrice": 0,
            "value": 0,
        }
        try:
            call_msg["data"] = self.contract.encode_abi(method_name, args=list(method_args))
            gas_limit = self.web3.eth.estimate_gas(call_msg)
        except Exception as e:
            logger.error("Could not estimate gas for %s: %s", method_name, e, exc_info=True)
            raise

        logger.info("Max transaction gas for %s: %s", method_name, gas_limit)
        return gas_limit
