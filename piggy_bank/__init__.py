"""
Piggy Bank

A single in-memory balance with deposits, withdrawals and a flat fee on
large withdrawals. All monetary values use Decimal.
"""

from .exceptions import PiggyBankError, InvalidAmount, InsufficientFunds
from .ledger import BalanceLedger, WithdrawalResult, WITHDRAWAL_FEE, FEE_THRESHOLD

__version__ = "1.0.0"

__all__ = [
    "BalanceLedger",
    "WithdrawalResult",
    "WITHDRAWAL_FEE",
    "FEE_THRESHOLD",
    "PiggyBankError",
    "InvalidAmount",
    "InsufficientFunds",
]
