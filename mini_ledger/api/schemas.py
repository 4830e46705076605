from datetime import datetime

from pydantic import BaseModel, Field


class CreateAccountRequest(BaseModel):
    name: str
    cpf: str
    balance: int = Field(0, description="Opening balance in cents")


class CreateTransferRequest(BaseModel):
    account_origin_id: int = Field(..., ge=0)
    account_destination_id: int = Field(..., ge=0)
    amount: int = Field(..., description="Amount in cents")


class IdResponse(BaseModel):
    id: int


class BalanceResponse(BaseModel):
    id: int
    balance: int


class AccountOut(BaseModel):
    id: int
    name: str
    cpf: str
    balance: int
    created_at: datetime


class TransferOut(BaseModel):
    id: int
    account_origin_id: int
    account_destination_id: int
    amount: int
    created_at: datetime
    status: str
