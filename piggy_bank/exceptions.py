"""
Piggy bank domain exceptions.

Both errors are recoverable: the ledger leaves the balance untouched whenever
one of them is raised, and the caller decides how to surface the message.
"""

from decimal import Decimal
from typing import Optional


DEPOSIT_NOT_POSITIVE = "O valor do depósito deve ser maior que zero."
WITHDRAWAL_NOT_POSITIVE = "O valor do saque deve ser maior que zero."
INSUFFICIENT_FUNDS = "Saldo insuficiente para realizar o saque."
AMOUNT_TOO_LARGE = "O valor informado excede o limite do cofrinho."


class PiggyBankError(Exception):
    """Base class for piggy bank errors"""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class InvalidAmount(PiggyBankError, ValueError):
    """Raised when a deposit or withdrawal amount is zero, negative or not a number"""

    def __init__(self, message: str, amount: Optional[object] = None):
        super().__init__(message)
        self.amount = amount


class InsufficientFunds(PiggyBankError):
    """
    Raised when a withdrawal's total cost (fee included) exceeds the balance
    """

    def __init__(self, requested: Decimal, total_cost: Decimal, balance: Decimal,
                 message: str = INSUFFICIENT_FUNDS):
        super().__init__(message)
        self.requested = requested
        self.total_cost = total_cost
        self.balance = balance
