from pydantic import BaseModel


class Wallet(BaseModel):
    user_id: str
    address: str
