"""
Ledger Data Model

Accounts and transactions as immutable records. The ledger replaces an
account record whenever its balance changes; transactions are never
replaced once appended.
"""

from dataclasses import dataclass, asdict
from datetime import datetime
from decimal import Decimal, InvalidOperation
from enum import Enum
from typing import Any, Dict, Optional

from .exceptions import InvalidAmountError


class AccountType(Enum):
    """Deposit account products offered by the bank"""
    CHECKING = "Checking"
    SAVINGS = "Savings"


class TransactionType(Enum):
    """Kinds of ledger transactions"""
    DEPOSIT = "Deposit"
    WITHDRAWAL = "Withdrawal"
    TRANSFER = "Transfer"


class TransferDirection(Enum):
    """Which side of a transfer a transaction records"""
    DEBIT = "debit"    # Source leg, money leaves the account
    CREDIT = "credit"  # Destination leg, money enters the account


def to_amount(value: Any) -> Decimal:
    """
    Convert a caller-supplied amount to Decimal without rounding.

    Floats go through str() so 0.1 stays 0.1.

    Raises:
        InvalidAmountError: value is not a finite number
    """
    if isinstance(value, bool):
        raise InvalidAmountError(f"Invalid amount: {value!r}", amount=value)
    if isinstance(value, Decimal):
        amount = value
    else:
        try:
            amount = Decimal(str(value).strip())
        except (InvalidOperation, ValueError):
            raise InvalidAmountError(f"Invalid amount: {value!r}", amount=value) from None

    if not amount.is_finite():
        raise InvalidAmountError(f"Invalid amount: {value!r}", amount=value)
    return amount


@dataclass(frozen=True)
class LedgerRecord:
    """Base class for all ledger records"""
    id: str
    created_at: datetime

    def to_dict(self) -> Dict[str, Any]:
        """Convert to a JSON-ready dictionary"""
        result = asdict(self)
        for key, value in result.items():
            if isinstance(value, Decimal):
                result[key] = str(value)
            elif isinstance(value, datetime):
                result[key] = value.isoformat()
            elif isinstance(value, Enum):
                result[key] = value.value
        return result


@dataclass(frozen=True)
class Account(LedgerRecord):
    """
    Bank account snapshot

    The id is internal; account_number is what customers see.
    """
    account_number: str
    holder_name: str
    account_type: AccountType
    balance: Decimal
    updated_at: Optional[datetime] = None

    def __post_init__(self):
        if self.balance < 0:
            raise ValueError("Account balance cannot be negative")

    @property
    def is_savings(self) -> bool:
        return self.account_type == AccountType.SAVINGS

    @property
    def is_checking(self) -> bool:
        return self.account_type == AccountType.CHECKING


@dataclass(frozen=True)
class Transaction(LedgerRecord):
    """
    Immutable entry in the transaction log

    Transfers produce one Transaction per account. Each leg names its
    counterpart in both the description text ("Transfer to ..." or
    "Transfer from ...") and the direction/counterparty fields.
    """
    account_id: str
    transaction_type: TransactionType
    amount: Decimal
    balance_after: Decimal
    description: str
    direction: Optional[TransferDirection] = None
    counterparty_account_number: Optional[str] = None

    def __post_init__(self):
        if self.amount <= 0:
            raise ValueError("Transaction amount must be positive")

        if self.balance_after < 0:
            raise ValueError("Balance after transaction cannot be negative")

        is_transfer = self.transaction_type == TransactionType.TRANSFER
        if is_transfer and self.direction is None:
            raise ValueError("Transfer transactions must have a direction")
        if not is_transfer and self.direction is not None:
            raise ValueError("Only transfer transactions have a direction")

    @property
    def is_credit(self) -> bool:
        """True when the transaction added money to its account"""
        if self.transaction_type == TransactionType.TRANSFER:
            return self.direction == TransferDirection.CREDIT
        return self.transaction_type == TransactionType.DEPOSIT

    @property
    def signed_amount(self) -> Decimal:
        """Amount with a negative sign for debits"""
        return self.amount if self.is_credit else self.amount.copy_negate()
