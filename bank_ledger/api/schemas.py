"""
Pydantic schemas for API requests and response rendering
"""

from typing import Any, Dict, Optional
from pydantic import BaseModel, Field

from ..models import Account, Transaction


# Account schemas
class CreateAccountRequest(BaseModel):
    holder_name: str = Field(..., min_length=1)
    account_type: str = Field(..., description="Account type (Checking, Savings)")
    initial_deposit: str = Field("0", description="Decimal amount as string")


# Transaction schemas
class DepositRequest(BaseModel):
    account_number: str
    amount: str = Field(..., description="Decimal amount as string")
    description: Optional[str] = ""


class WithdrawRequest(BaseModel):
    account_number: str
    amount: str = Field(..., description="Decimal amount as string")
    description: Optional[str] = ""


class TransferRequest(BaseModel):
    from_account_number: str
    to_account_number: str
    amount: str = Field(..., description="Decimal amount as string")
    description: Optional[str] = ""


def account_to_response(account: Account) -> Dict[str, Any]:
    return account.to_dict()


def transaction_to_response(transaction: Transaction) -> Dict[str, Any]:
    """Render a transaction with its credit/debit direction spelled out"""
    result = transaction.to_dict()
    result["direction"] = "credit" if transaction.is_credit else "debit"
    result["signed_amount"] = str(transaction.signed_amount)
    return result
