from fastapi import APIRouter

from api.api_v1.endpoints import wallets

api_router = APIRouter()

api_router.include_router(
    wallets.router, prefix="/wallets"
)
api_router.redirect_slashes = False
