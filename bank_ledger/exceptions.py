"""
Ledger Exceptions

Typed errors raised by the ledger. Every error is raised before any state is
mutated, so a caller that catches one can retry with corrected input.
"""

from decimal import Decimal
from typing import Optional


class LedgerError(ValueError):
    """Base class for all ledger business-rule violations"""
    code = "ledger_error"


class InvalidAmountError(LedgerError):
    """Amount is non-numeric, non-positive, or negative where disallowed"""
    code = "invalid_amount"
    
    def __init__(self, message: str, amount=None):
        super().__init__(message)
        self.amount = amount


class AccountNotFoundError(LedgerError):
    """No account exists with the given account number"""
    code = "account_not_found"
    
    def __init__(self, account_number: str, role: Optional[str] = None):
        label = f"{role.capitalize()} account" if role else "Account"
        super().__init__(f"{label} {account_number} not found")
        self.account_number = account_number
        self.role = role


class InsufficientFundsError(LedgerError):
    """Debit would take the account balance below zero"""
    code = "insufficient_funds"
    
    def __init__(self, account_number: str, available: Decimal, requested: Decimal):
        super().__init__(
            f"Insufficient funds in {account_number}: "
            f"available {available}, requested {requested}"
        )
        self.account_number = account_number
        self.available = available
        self.requested = requested


class SameAccountError(LedgerError):
    """Transfer source and destination are the same account"""
    code = "same_account"
    
    def __init__(self, account_number: str):
        super().__init__(f"Cannot transfer from {account_number} to the same account")
        self.account_number = account_number


class DuplicateAccountNumberError(LedgerError):
    """Explicitly requested account number is already taken"""
    code = "duplicate_account_number"
    
    def __init__(self, account_number: str):
        super().__init__(f"Account number {account_number} already exists")
        self.account_number = account_number


class AccountNumberExhaustedError(LedgerError):
    """No free account number was found within the attempt limit"""
    code = "account_number_exhausted"
    
    def __init__(self, attempts: int):
        super().__init__(f"Could not generate a unique account number after {attempts} attempts")
        self.attempts = attempts
