"""
User-facing messages for piggy bank operations.
"""

from decimal import Decimal
from typing import Optional

from .config import get_config
from .currency import format_amount
from .exceptions import PiggyBankError
from .ledger import WithdrawalResult


DEPOSIT_SUCCESS = "Depósito realizado com sucesso!"
WITHDRAWAL_SUCCESS = "Saque realizado com sucesso!"
UNEXPECTED_ERROR = "Não foi possível concluir a operação."


def _symbol(symbol: Optional[str]) -> str:
    return symbol if symbol is not None else get_config().currency_symbol


def balance_message(balance: Decimal, symbol: Optional[str] = None) -> str:
    return f"Saldo atual: {format_amount(balance, _symbol(symbol))}"


def deposit_message() -> str:
    return DEPOSIT_SUCCESS


def withdrawal_message(result: WithdrawalResult, symbol: Optional[str] = None) -> str:
    """Success sentence, mentioning the fee when one was charged"""
    if result.fee_applied:
        return (f"{WITHDRAWAL_SUCCESS} Foi aplicada uma taxa de "
                f"{format_amount(result.fee, _symbol(symbol))}.")
    return WITHDRAWAL_SUCCESS


def error_message(error: Exception) -> str:
    """Text to show for an error raised by the ledger"""
    if isinstance(error, PiggyBankError):
        return error.message
    return UNEXPECTED_ERROR
