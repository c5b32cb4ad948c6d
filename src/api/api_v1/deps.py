from functools import lru_cache
from typing import Annotated

from fastapi import Depends

from core.config import settings
from services.wallet_adapter import WalletAdapter, new_wallet_adapter_with_client


@lru_cache
def get_wallet_adapter() -> WalletAdapter:
    return new_wallet_adapter_with_client(settings.wallet_options())


WalletAdapterDep = Annotated[WalletAdapter, Depends(get_wallet_adapter)]
