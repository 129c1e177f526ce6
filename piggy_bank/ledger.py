"""
Balance Ledger Module

Holds the single piggy bank balance and applies the deposit and withdrawal
rules. Withdrawals strictly above FEE_THRESHOLD pay a flat WITHDRAWAL_FEE.
The balance never goes negative and is only changed through deposit() and
withdraw(); a failed operation leaves it untouched.

Arithmetic is exact: any sum or difference that would need more digits than
the decimal context holds is rejected as InvalidAmount instead of rounded.
Amounts and balances stay below MAX_AMOUNT so they always render with two
decimal places.
"""

from decimal import Decimal, Inexact, getcontext, localcontext
from dataclasses import dataclass
import threading

from .currency import to_decimal
from .exceptions import (
    InvalidAmount, InsufficientFunds,
    DEPOSIT_NOT_POSITIVE, WITHDRAWAL_NOT_POSITIVE, AMOUNT_TOO_LARGE
)
from .logging_config import get_logger, log_action


WITHDRAWAL_FEE = Decimal('2.50')
FEE_THRESHOLD = Decimal('200.00')

# Integer part plus two decimal places must fit the context precision
MAX_AMOUNT = Decimal(10) ** (getcontext().prec - 2)

ZERO = Decimal('0')


@dataclass(frozen=True)
class WithdrawalResult:
    """Outcome of a successful withdrawal"""
    amount: Decimal
    fee: Decimal
    total_cost: Decimal
    balance: Decimal  # Balance after the withdrawal

    @property
    def fee_applied(self) -> bool:
        return self.fee > ZERO


def withdrawal_fee_for(amount: Decimal) -> Decimal:
    """Fee charged on a withdrawal of ``amount`` (exactly 200.00 is free)"""
    return WITHDRAWAL_FEE if amount > FEE_THRESHOLD else ZERO


def exact(operation, left: Decimal, right: Decimal) -> Decimal:
    """
    Apply ``operation`` with Inexact trapped

    Raises:
        decimal.Inexact: If the result cannot be represented without rounding
    """
    with localcontext() as ctx:
        ctx.traps[Inexact] = True
        return operation(left, right)


class BalanceLedger:
    """
    In-memory piggy bank balance

    Every read-modify-write of the balance happens under a lock, so deposits
    and withdrawals from different threads never interleave.
    """

    def __init__(self):
        self._balance = ZERO
        self._lock = threading.Lock()
        self.logger = get_logger("piggy_bank.ledger")

    @property
    def balance(self) -> Decimal:
        """Current balance (read-only)"""
        return self.get_balance()

    def get_balance(self) -> Decimal:
        """Return the current balance"""
        with self._lock:
            return self._balance

    def deposit(self, amount) -> Decimal:
        """
        Add money to the piggy bank

        Args:
            amount: Strictly positive amount

        Returns:
            Balance after the deposit

        Raises:
            InvalidAmount: If amount is zero, negative, not a number, or would
                take the balance past what can be held exactly
        """
        value = self._validate(amount, DEPOSIT_NOT_POSITIVE, "deposit")

        with self._lock:
            try:
                balance = exact(Decimal.__add__, self._balance, value)
            except Inexact:
                balance = None

            if balance is None or balance >= MAX_AMOUNT:
                self._reject(amount, AMOUNT_TOO_LARGE, "deposit")

            self._balance = balance

        log_action(
            self.logger, "info", "Deposit completed",
            action="deposit", resource="piggy_bank",
            extra={"amount": str(value), "balance": str(balance)}
        )
        return balance

    def withdraw(self, amount) -> WithdrawalResult:
        """
        Take money out of the piggy bank

        Args:
            amount: Strictly positive amount requested

        Returns:
            WithdrawalResult telling whether the fee was charged

        Raises:
            InvalidAmount: If amount is zero, negative or not a number
            InsufficientFunds: If amount plus fee exceeds the balance
        """
        value = self._validate(amount, WITHDRAWAL_NOT_POSITIVE, "withdraw")
        fee = withdrawal_fee_for(value)
        try:
            total_cost = exact(Decimal.__add__, value, fee)
        except Inexact:
            self._reject(amount, AMOUNT_TOO_LARGE, "withdraw")

        with self._lock:
            if total_cost > self._balance:
                balance = self._balance
                log_action(
                    self.logger, "warning", "Withdrawal rejected: insufficient funds",
                    action="withdraw", resource="piggy_bank",
                    extra={"amount": str(value), "total_cost": str(total_cost),
                           "balance": str(balance)}
                )
                raise InsufficientFunds(requested=value, total_cost=total_cost, balance=balance)

            try:
                balance = exact(Decimal.__sub__, self._balance, total_cost)
            except Inexact:
                self._reject(amount, AMOUNT_TOO_LARGE, "withdraw")

            self._balance = balance

        log_action(
            self.logger, "info", "Withdrawal completed",
            action="withdraw", resource="piggy_bank",
            extra={"amount": str(value), "fee": str(fee), "balance": str(balance)}
        )
        return WithdrawalResult(amount=value, fee=fee, total_cost=total_cost, balance=balance)

    def _validate(self, amount, message: str, action: str) -> Decimal:
        try:
            value = to_decimal(amount)
        except ValueError:
            value = None

        if value is None or value <= ZERO:
            self._reject(amount, message, action)
        if value >= MAX_AMOUNT:
            self._reject(amount, AMOUNT_TOO_LARGE, action)

        return value

    def _reject(self, amount, message: str, action: str):
        log_action(
            self.logger, "warning", f"{action.capitalize()} rejected: invalid amount",
            action=action, resource="piggy_bank",
            extra={"amount": str(amount), "reason": message}
        )
        raise InvalidAmount(message, amount=amount)

    def __repr__(self) -> str:
        return f"BalanceLedger(balance={self.get_balance()})"
