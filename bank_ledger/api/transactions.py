"""
Transaction endpoints
"""

from fastapi import APIRouter, Depends, status

from .dependencies import get_ledger, ledger_http_error
from .schemas import DepositRequest, WithdrawRequest, TransferRequest, transaction_to_response
from ..exceptions import LedgerError
from ..ledger import Ledger


router = APIRouter()


@router.get("")
async def list_transactions(ledger: Ledger = Depends(get_ledger)):
    """Get every transaction, most recent first"""
    return {"transactions": [transaction_to_response(t) for t in ledger.get_all_transactions()]}


@router.post("/deposit", status_code=status.HTTP_201_CREATED)
async def deposit(request: DepositRequest, ledger: Ledger = Depends(get_ledger)):
    """Make a deposit"""
    try:
        transaction = ledger.deposit(
            account_number=request.account_number,
            amount=request.amount,
            description=request.description or ""
        )
    except LedgerError as e:
        raise ledger_http_error(e)

    return transaction_to_response(transaction)


@router.post("/withdraw", status_code=status.HTTP_201_CREATED)
async def withdraw(request: WithdrawRequest, ledger: Ledger = Depends(get_ledger)):
    """Make a withdrawal"""
    try:
        transaction = ledger.withdraw(
            account_number=request.account_number,
            amount=request.amount,
            description=request.description or ""
        )
    except LedgerError as e:
        raise ledger_http_error(e)

    return transaction_to_response(transaction)


@router.post("/transfer", status_code=status.HTTP_201_CREATED)
async def transfer(request: TransferRequest, ledger: Ledger = Depends(get_ledger)):
    """Make a transfer between accounts"""
    try:
        from_transaction, to_transaction = ledger.transfer(
            from_account_number=request.from_account_number,
            to_account_number=request.to_account_number,
            amount=request.amount,
            description=request.description or ""
        )
    except LedgerError as e:
        raise ledger_http_error(e)

    return {
        "from_transaction": transaction_to_response(from_transaction),
        "to_transaction": transaction_to_response(to_transaction)
    }
