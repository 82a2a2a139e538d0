"""
Ledger Service Module

Holds every account and the append-only transaction log in memory and
applies deposits, withdrawals and transfers to them. All validation runs
before any state changes; each mutation runs inside an atomic block that
restores the previous state if anything fails.
"""

from contextlib import contextmanager
from dataclasses import replace
from datetime import datetime, timezone
from decimal import Decimal, Inexact, localcontext
from typing import Callable, Dict, List, Optional, Tuple
import random
import threading
import uuid

from .exceptions import (
    AccountNotFoundError, AccountNumberExhaustedError, DuplicateAccountNumberError,
    InsufficientFundsError, InvalidAmountError, LedgerError, SameAccountError
)
from .logging_config import get_logger, log_action
from .models import (
    Account, AccountType, Transaction, TransactionType, TransferDirection, to_amount
)


logger = get_logger(__name__)

ACCOUNT_NUMBER_MIN = 1_000_000_000
ACCOUNT_NUMBER_MAX = 9_999_999_999
DEFAULT_MAX_ATTEMPTS = 1000
BALANCE_PRECISION = 60


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


def _new_id() -> str:
    return str(uuid.uuid4())


class Ledger:
    """
    In-memory ledger of accounts and transactions

    Accounts are keyed by account number. Returned accounts and
    transactions are immutable snapshots; the ledger swaps in a new
    account record on every balance change.
    """

    def __init__(
        self,
        rng: Optional[random.Random] = None,
        clock: Callable[[], datetime] = _utc_now,
        id_factory: Callable[[], str] = _new_id,
        max_account_number_attempts: Optional[int] = DEFAULT_MAX_ATTEMPTS
    ):
        """
        Args:
            rng: Random source for account numbers (anything with randrange)
            clock: Returns the current time for record timestamps
            id_factory: Returns fresh internal ids
            max_account_number_attempts: Retry bound for account number
                generation, None for unbounded
        """
        self._rng = rng or random.Random()
        self._clock = clock
        self._id_factory = id_factory
        self.max_account_number_attempts = max_account_number_attempts

        self._accounts: Dict[str, Account] = {}
        self._transactions: List[Transaction] = []
        self._lock = threading.RLock()

    @contextmanager
    def atomic(self):
        """Run a block of mutations as one unit, undoing them on failure"""
        with self._lock:
            accounts = dict(self._accounts)
            transaction_count = len(self._transactions)
            try:
                yield
            except Exception:
                self._accounts = accounts
                del self._transactions[transaction_count:]
                raise

    # Accounts

    def create_account(
        self,
        holder_name: str,
        account_type: AccountType,
        initial_deposit=Decimal('0'),
        account_number: Optional[str] = None,
        opened_at: Optional[datetime] = None
    ) -> Account:
        """
        Open a new account

        Args:
            holder_name: Name of the account holder
            account_type: Checking or savings
            initial_deposit: Opening balance, zero or more
            account_number: Specific account number (generated if not provided)
            opened_at: Opening timestamp (current time if not provided)

        Returns:
            The created Account

        Raises:
            InvalidAmountError: initial deposit is negative
            DuplicateAccountNumberError: account_number is already taken
        """
        with self._lock:
            try:
                initial_deposit = to_amount(initial_deposit)
                if initial_deposit < 0:
                    raise InvalidAmountError(
                        "Initial deposit cannot be negative", amount=initial_deposit
                    )
                account_type = AccountType(account_type)
                if not account_number:
                    account_number = self._generate_account_number()
                elif account_number in self._accounts:
                    raise DuplicateAccountNumberError(account_number)
            except ValueError as e:
                self._log_rejected("create_account", account_number, e)
                raise

            with self.atomic():
                now = opened_at or self._clock()
                account = Account(
                    id=self._id_factory(),
                    created_at=now,
                    account_number=account_number,
                    holder_name=holder_name,
                    account_type=account_type,
                    balance=initial_deposit,
                    updated_at=now
                )
                self._accounts[account_number] = account

                if initial_deposit > 0:
                    self._append(Transaction(
                        id=self._id_factory(),
                        created_at=now,
                        account_id=account.id,
                        transaction_type=TransactionType.DEPOSIT,
                        amount=initial_deposit,
                        balance_after=initial_deposit,
                        description="Initial deposit"
                    ))

        log_action(
            logger, "info", "Account created",
            action="create_account", resource=account_number,
            extra={
                "account_id": account.id,
                "account_type": account_type.value,
                "initial_deposit": str(initial_deposit)
            }
        )
        return account

    def get_account(self, account_number: str) -> Optional[Account]:
        """Get account by number, None if it does not exist"""
        return self._accounts.get(account_number)

    def get_all_accounts(self) -> List[Account]:
        """Get all accounts in the order they were opened"""
        with self._lock:
            return list(self._accounts.values())

    # Transactions

    def deposit(self, account_number: str, amount, description: str = "") -> Transaction:
        """
        Credit an account

        Raises:
            InvalidAmountError: amount is not positive
            AccountNotFoundError: account does not exist
        """
        with self._lock:
            try:
                amount = self._positive_amount(amount, "Deposit")
                account = self._require_account(account_number)
                new_balance = self._exact_balance(account.balance, amount)
            except LedgerError as e:
                self._log_rejected("deposit", account_number, e)
                raise

            with self.atomic():
                now = self._clock()
                account = self._set_balance(account, new_balance, now)
                transaction = self._append(Transaction(
                    id=self._id_factory(),
                    created_at=now,
                    account_id=account.id,
                    transaction_type=TransactionType.DEPOSIT,
                    amount=amount,
                    balance_after=account.balance,
                    description=description or "Deposit"
                ))

        self._log_posted("deposit", account_number, transaction)
        return transaction

    def withdraw(self, account_number: str, amount, description: str = "") -> Transaction:
        """
        Debit an account

        Raises:
            InvalidAmountError: amount is not positive
            AccountNotFoundError: account does not exist
            InsufficientFundsError: balance is below amount
        """
        with self._lock:
            try:
                amount = self._positive_amount(amount, "Withdrawal")
                account = self._require_account(account_number)
                self._require_funds(account, amount)
                new_balance = self._exact_balance(account.balance, amount, debit=True)
            except LedgerError as e:
                self._log_rejected("withdraw", account_number, e)
                raise

            with self.atomic():
                now = self._clock()
                account = self._set_balance(account, new_balance, now)
                transaction = self._append(Transaction(
                    id=self._id_factory(),
                    created_at=now,
                    account_id=account.id,
                    transaction_type=TransactionType.WITHDRAWAL,
                    amount=amount,
                    balance_after=account.balance,
                    description=description or "Withdrawal"
                ))

        self._log_posted("withdraw", account_number, transaction)
        return transaction

    def transfer(
        self,
        from_account_number: str,
        to_account_number: str,
        amount,
        description: str = ""
    ) -> Tuple[Transaction, Transaction]:
        """
        Move money between two accounts

        Both legs are recorded or neither is. The description of each leg
        names the other account ("Transfer to X - ..." on the source,
        "Transfer from Y - ..." on the destination).

        Returns:
            (source leg, destination leg)

        Raises:
            InvalidAmountError: amount is not positive
            SameAccountError: source and destination are the same
            AccountNotFoundError: either account does not exist
            InsufficientFundsError: source balance is below amount
        """
        with self._lock:
            try:
                amount = self._positive_amount(amount, "Transfer")
                if from_account_number == to_account_number:
                    raise SameAccountError(from_account_number)
                from_account = self._require_account(from_account_number, role="source")
                to_account = self._require_account(to_account_number, role="destination")
                self._require_funds(from_account, amount)
                from_balance = self._exact_balance(from_account.balance, amount, debit=True)
                to_balance = self._exact_balance(to_account.balance, amount)
            except LedgerError as e:
                self._log_rejected("transfer", from_account_number, e)
                raise

            with self.atomic():
                now = self._clock()
                from_account = self._set_balance(from_account, from_balance, now)
                to_account = self._set_balance(to_account, to_balance, now)

                from_transaction = self._append(Transaction(
                    id=self._id_factory(),
                    created_at=now,
                    account_id=from_account.id,
                    transaction_type=TransactionType.TRANSFER,
                    amount=amount,
                    balance_after=from_account.balance,
                    description=f"Transfer to {to_account_number} - {description or ''}",
                    direction=TransferDirection.DEBIT,
                    counterparty_account_number=to_account_number
                ))
                to_transaction = self._append(Transaction(
                    id=self._id_factory(),
                    created_at=now,
                    account_id=to_account.id,
                    transaction_type=TransactionType.TRANSFER,
                    amount=amount,
                    balance_after=to_account.balance,
                    description=f"Transfer from {from_account_number} - {description or ''}",
                    direction=TransferDirection.CREDIT,
                    counterparty_account_number=from_account_number
                ))

        log_action(
            logger, "info", "Transfer posted",
            action="transfer", resource=from_account_number,
            extra={
                "to_account_number": to_account_number,
                "amount": str(amount),
                "from_transaction_id": from_transaction.id,
                "to_transaction_id": to_transaction.id
            }
        )
        return from_transaction, to_transaction

    # History

    def get_transaction_history(self, account_number: str) -> List[Transaction]:
        """
        Get an account's transactions, most recent first

        Returns an empty list for unknown accounts.
        """
        with self._lock:
            account = self.get_account(account_number)
            if account is None:
                return []

            return self._newest_first(
                t for t in self._transactions if t.account_id == account.id
            )

    def get_all_transactions(self) -> List[Transaction]:
        """Get every transaction across all accounts, most recent first"""
        with self._lock:
            return self._newest_first(self._transactions)

    # Internals

    def _newest_first(self, transactions) -> List[Transaction]:
        # Reverse first so equal timestamps keep the latest append on top
        return sorted(reversed(list(transactions)), key=lambda t: t.created_at, reverse=True)

    def _generate_account_number(self) -> str:
        """Pick random 10-digit numbers until one is free"""
        attempts = 0
        while self.max_account_number_attempts is None or attempts < self.max_account_number_attempts:
            attempts += 1
            account_number = str(self._rng.randrange(ACCOUNT_NUMBER_MIN, ACCOUNT_NUMBER_MAX + 1))
            if account_number not in self._accounts:
                return account_number
            logger.debug("Account number collision on %s, retrying", account_number)

        raise AccountNumberExhaustedError(attempts)

    def _positive_amount(self, amount, label: str) -> Decimal:
        amount = to_amount(amount)
        if amount <= 0:
            raise InvalidAmountError(f"{label} amount must be positive", amount=amount)
        return amount

    def _exact_balance(self, balance: Decimal, amount: Decimal, debit: bool = False) -> Decimal:
        """Apply amount to balance, refusing any result that would need rounding"""
        with localcontext() as ctx:
            ctx.prec = BALANCE_PRECISION
            ctx.traps[Inexact] = True
            try:
                return balance - amount if debit else balance + amount
            except Inexact:
                raise InvalidAmountError(
                    f"Amount {amount} cannot be applied to balance {balance} exactly",
                    amount=amount
                ) from None

    def _require_account(self, account_number: str, role: Optional[str] = None) -> Account:
        account = self.get_account(account_number)
        if account is None:
            raise AccountNotFoundError(account_number, role=role)
        return account

    def _require_funds(self, account: Account, amount: Decimal) -> None:
        if account.balance < amount:
            raise InsufficientFundsError(account.account_number, account.balance, amount)

    def _set_balance(self, account: Account, balance: Decimal, now: datetime) -> Account:
        updated = replace(account, balance=balance, updated_at=now)
        self._accounts[account.account_number] = updated
        return updated

    def _append(self, transaction: Transaction) -> Transaction:
        self._transactions.append(transaction)
        return transaction

    def _log_posted(self, action: str, account_number: str, transaction: Transaction) -> None:
        log_action(
            logger, "info", f"{transaction.transaction_type.value} posted",
            action=action, resource=account_number,
            extra={
                "transaction_id": transaction.id,
                "amount": str(transaction.amount),
                "balance_after": str(transaction.balance_after)
            }
        )

    def _log_rejected(self, action: str, account_number: Optional[str], error: Exception) -> None:
        log_action(
            logger, "warning", f"{action} rejected: {error}",
            action=action, resource=account_number,
            extra={"error": getattr(error, "code", type(error).__name__)}
        )
