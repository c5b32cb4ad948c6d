from typing import Literal, Optional

from pydantic import field_validator
from pydantic_settings import BaseSettings
from web3 import Web3


class Settings(BaseSettings):

    ENVIRONMENT_NAME: str = "Development"
    PROJECT_NAME: str = "GlobalP2P Wallet API"
    API_V1_STR: str = "/api/v1"

    # Klaytn node, e.g. https://public-en-baobab.klaytn.net or wss://...
    KLAYTN_RPC_URL: str
    GLOBAL_P2P_ADDRESS: str

    # hex encoded, no 0x prefix expected
    OPERATION_ADMIN_WALLET_PRIVATE_KEY: str

    WALLET_GAS_POLICY: Literal["fixed", "estimate"] = "fixed"
    WALLET_GAS_LIMIT: int = 800000
    WALLET_WAIT_FOR_RECEIPT: bool = False
    WALLET_RECEIPT_TIMEOUT: float = 120

    # Seq log
    SEQ_SERVER_URL: Optional[str] = None
    SEQ_SERVER_API_KEY: Optional[str] = None

    @field_validator("GLOBAL_P2P_ADDRESS", mode="before")
    def checksum_contract_address(cls, v: str) -> str:
        if not Web3.is_address(v):
            raise ValueError(f"Invalid contract address: {v}")
        return Web3.to_checksum_address(v)

    def wallet_options(self):
        from services.wallet_adapter import GasPolicy, WalletOptions

        return WalletOptions(
            rpc_url=self.KLAYTN_RPC_URL,
            address=self.GLOBAL_P2P_ADDRESS,
            signer_private_key=self.OPERATION_ADMIN_WALLET_PRIVATE_KEY,
            gas_policy=GasPolicy(self.WALLET_GAS_POLICY),
            gas_limit=self.WALLET_GAS_LIMIT,
            wait_for_receipt=self.WALLET_WAIT_FOR_RECEIPT,
            receipt_timeout=self.WALLET_RECEIPT_TIMEOUT,
        )

    class Config:

        case_sensitive = True
        env_file = ".env"
        extra = "allow"


settings = Settings()
