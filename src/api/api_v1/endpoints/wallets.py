from fastapi import APIRouter, HTTPException

import schemas
from api.api_v1.deps import WalletAdapterDep
from core import constants

router = APIRouter()


@router.post("/{user_id}", response_model=schemas.Wallet)
def create_wallet(adapter: WalletAdapterDep, user_id: str):
    address = adapter.create_wallet(user_id)
    return schemas.Wallet(user_id=user_id, address=address)


@router.get("/{user_id}", response_model=schemas.Wallet)
def get_wallet(adapter: WalletAdapterDep, user_id: str):
    address = adapter.get_wallet_address_for(user_id)
    if address == constants.NIL_ADDRESS:
        raise HTTPException(status_code=404, detail="Wallet not found")
    return schemas.Wallet(user_id=user_id, address=address)
