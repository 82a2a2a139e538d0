"""
Bank Ledger

An in-memory demonstration banking ledger: accounts, deposits, withdrawals
and transfers recorded in an append-only transaction log, with all amounts
handled as Decimal.
"""

__version__ = "1.0.0"
