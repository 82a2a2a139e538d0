"""
Account endpoints
"""

from fastapi import APIRouter, HTTPException, Depends, status

from .dependencies import get_ledger, ledger_http_error
from .schemas import CreateAccountRequest, account_to_response, transaction_to_response
from ..exceptions import LedgerError
from ..ledger import Ledger
from ..models import AccountType


router = APIRouter()


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_account(
    request: CreateAccountRequest,
    ledger: Ledger = Depends(get_ledger)
):
    """Open a new account"""
    try:
        account_type = AccountType(request.account_type)
    except ValueError:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail={
                "code": "invalid_account_type",
                "message": f"Unknown account type: {request.account_type}"
            }
        )

    try:
        account = ledger.create_account(
            holder_name=request.holder_name,
            account_type=account_type,
            initial_deposit=request.initial_deposit
        )
    except LedgerError as e:
        raise ledger_http_error(e)

    return account_to_response(account)


@router.get("")
async def list_accounts(ledger: Ledger = Depends(get_ledger)):
    """List all accounts"""
    return {"accounts": [account_to_response(a) for a in ledger.get_all_accounts()]}


@router.get("/{account_number}")
async def get_account(account_number: str, ledger: Ledger = Depends(get_ledger)):
    """Get account details"""
    account = ledger.get_account(account_number)
    if account is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail={"code": "account_not_found", "message": f"Account {account_number} not found"}
        )
    return account_to_response(account)


@router.get("/{account_number}/transactions")
async def get_account_transactions(account_number: str, ledger: Ledger = Depends(get_ledger)):
    """Get transaction history for an account, most recent first"""
    transactions = ledger.get_transaction_history(account_number)
    return {"transactions": [transaction_to_response(t) for t in transactions]}
