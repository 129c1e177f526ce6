"""
FastAPI REST API Module

Exposes the piggy bank as three endpoints mirroring the original form's
buttons: deposit, withdraw and show balance. One ledger lives for the
lifetime of the process.
"""

from datetime import datetime, timezone
from fastapi import FastAPI, HTTPException, Depends, status
from pydantic import BaseModel, Field
import uvicorn

from .config import get_config
from .currency import decimal_from_string, quantize_amount
from .exceptions import InvalidAmount, InsufficientFunds
from .ledger import BalanceLedger
from .logging_config import get_logger, setup_logging
from .messages import balance_message, deposit_message, withdrawal_message, error_message


logger = get_logger("piggy_bank.api")


class AmountRequest(BaseModel):
    amount: str = Field(..., description="Amount as typed by the user, e.g. \"10,50\"")


class BalanceResponse(BaseModel):
    balance: str
    message: str


class WithdrawalResponse(BaseModel):
    balance: str
    amount: str
    fee: str
    fee_applied: bool
    total_cost: str
    message: str


# Global ledger instance
ledger = BalanceLedger()


app = FastAPI(
    title="Piggy Bank API",
    description="Single-balance piggy bank with a flat fee on large withdrawals",
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc"
)


def get_ledger() -> BalanceLedger:
    return ledger


def _parse_amount(text: str):
    try:
        return decimal_from_string(text)
    except ValueError as e:
        logger.warning(f"Rejected unparsable amount {text!r}")
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail={"error": "invalid_input", "message": str(e)}
        )


@app.get("/health")
async def health_check():
    """Health check endpoint"""
    return {"status": "healthy", "timestamp": datetime.now(timezone.utc).isoformat()}


@app.get("/balance", response_model=BalanceResponse)
def get_balance(ledger: BalanceLedger = Depends(get_ledger)):
    """Show the current balance"""
    balance = ledger.get_balance()
    return BalanceResponse(
        balance=str(quantize_amount(balance)),
        message=balance_message(balance)
    )


@app.post("/deposit", response_model=BalanceResponse)
def deposit(request: AmountRequest, ledger: BalanceLedger = Depends(get_ledger)):
    """Make a deposit"""
    amount = _parse_amount(request.amount)
    try:
        balance = ledger.deposit(amount)
    except InvalidAmount as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail={"error": "invalid_amount", "message": error_message(e)}
        )

    return BalanceResponse(balance=str(quantize_amount(balance)), message=deposit_message())


@app.post("/withdraw", response_model=WithdrawalResponse)
def withdraw(request: AmountRequest, ledger: BalanceLedger = Depends(get_ledger)):
    """Make a withdrawal"""
    amount = _parse_amount(request.amount)
    try:
        result = ledger.withdraw(amount)
    except InvalidAmount as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail={"error": "invalid_amount", "message": error_message(e)}
        )
    except InsufficientFunds as e:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail={"error": "insufficient_funds", "message": error_message(e)}
        )

    return WithdrawalResponse(
        balance=str(quantize_amount(result.balance)),
        amount=str(quantize_amount(result.amount)),
        fee=str(quantize_amount(result.fee)),
        fee_applied=result.fee_applied,
        total_cost=str(quantize_amount(result.total_cost)),
        message=withdrawal_message(result)
    )


def startup_banner(cfg) -> list:
    """Lines printed by run.py before the server starts"""
    base_url = f"http://{cfg.api_host}:{cfg.api_port}"
    return [
        "🐷 Starting Piggy Bank...",
        "💰 All financial calculations use Decimal precision",
        f"🌐 API available at: {base_url}",
        f"📚 Documentation at: {base_url}/docs",
    ]


def run_server(host: str = None, port: int = None, debug: bool = False):
    """Run the FastAPI server"""
    cfg = get_config()
    setup_logging(cfg.log_level, log_format=cfg.log_format, log_file=cfg.log_file)
    uvicorn.run(
        "piggy_bank.api:app",
        host=host or cfg.api_host,
        port=port or cfg.api_port,
        reload=debug,
        log_level=cfg.log_level.lower()
    )
