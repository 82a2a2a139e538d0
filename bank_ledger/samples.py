"""
Sample Data

The demo accounts a fresh ledger starts with.
"""

from datetime import datetime, timezone
from decimal import Decimal
from typing import List

from .ledger import Ledger
from .logging_config import get_logger
from .models import Account, AccountType


logger = get_logger(__name__)

SAMPLE_ACCOUNTS = [
    {
        "account_number": "1234567890",
        "holder_name": "John Doe",
        "account_type": AccountType.CHECKING,
        "initial_deposit": Decimal('5000.00'),
        "opened_at": datetime(2024, 1, 15, tzinfo=timezone.utc),
    },
    {
        "account_number": "0987654321",
        "holder_name": "Jane Smith",
        "account_type": AccountType.SAVINGS,
        "initial_deposit": Decimal('10000.00'),
        "opened_at": datetime(2024, 2, 20, tzinfo=timezone.utc),
    },
]


def seed_sample_accounts(ledger: Ledger) -> List[Account]:
    """
    Open the sample accounts that are not already in the ledger

    Returns:
        The accounts that were created by this call
    """
    created = []
    for sample in SAMPLE_ACCOUNTS:
        if ledger.get_account(sample["account_number"]) is not None:
            continue
        created.append(ledger.create_account(**sample))

    logger.info("Seeded %d sample accounts", len(created))
    return created
