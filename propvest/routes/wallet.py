# propvest/routes/wallet.py
import logging

from fastapi import APIRouter, Depends

from propvest.core.config import Settings
from propvest.core.deps import get_current_user, get_settings, get_storage
from propvest.core.exceptions import InsufficientBalance, InsufficientFunds, NotFound
from propvest.models import User
from propvest.schemas.wallet import (
    DepositRequest,
    TransactionResponse,
    WalletMovementResponse,
    WalletResponse,
    WithdrawRequest,
    mask_account,
    mask_card_number,
)
from propvest.storage import Storage

logger = logging.getLogger(__name__)

router = APIRouter()

def deposit_details(deposit_data: DepositRequest, current_user: User, storage: Storage) -> dict:
    if deposit_data.method == "card":
        card = storage.get_payment_card(deposit_data.card_id)
        if not card or card.user_id != current_user.id:
            raise NotFound("Payment card not found")
        return {
            "type": "deposit",
            "method": "card",
            "organization": card.card_type,
            "account": mask_card_number(card.last_four_digits),
            "description": f"Deposit from {card.card_type} card ending in {card.last_four_digits}",
        }

    if deposit_data.method == "mobile-money":
        return {
            "type": "deposit",
            "method": "mobile-money",
            "organization": deposit_data.provider,
            "account": deposit_data.phone_number,
            "description": f"Deposit via {deposit_data.provider} mobile money",
        }

    return {
        "type": "deposit",
        "method": "standard",
        "description": "Funds deposited to wallet",
    }

def withdrawal_details(withdraw_data: WithdrawRequest) -> dict:
    if withdraw_data.method == "bank":
        description = f"Withdrawal to {withdraw_data.account_name} at {withdraw_data.bank_name}"
        if withdraw_data.branch_name:
            description += f", {withdraw_data.branch_name} branch"
        if withdraw_data.swift_code:
            description += f" (SWIFT {withdraw_data.swift_code})"
        return {
            "type": "withdrawal",
            "method": "bank",
            "organization": withdraw_data.bank_name,
            "account": mask_account(withdraw_data.account_number),
            "description": description,
        }

    return {
        "type": "withdrawal",
        "method": "standard",
        "description": "Funds withdrawn from wallet",
    }

@router.get("/wallet", response_model=WalletResponse)
def get_wallet_balance(
    current_user: User = Depends(get_current_user),
    storage: Storage = Depends(get_storage),
    settings: Settings = Depends(get_settings),
):
    return WalletResponse(
        balance=storage.get_user_wallet_balance(current_user.id),
        currency=settings.DEFAULT_CURRENCY,
    )

@router.post("/wallet/deposit", response_model=WalletMovementResponse)
def deposit_funds(
    deposit_data: DepositRequest,
    current_user: User = Depends(get_current_user),
    storage: Storage = Depends(get_storage),
):
    transaction = deposit_details(deposit_data, current_user, storage)
    balance = storage.record_wallet_movement(current_user.id, deposit_data.amount, transaction)

    logger.info(
        "User %s deposited %.2f via %s", current_user.id, deposit_data.amount, transaction["method"]
    )
    return WalletMovementResponse(message="Deposit successful", balance=balance)

# Recorded as settled immediately; there is no payout processor behind it.
@router.post("/wallet/withdraw", response_model=WalletMovementResponse)
def withdraw_funds(
    withdraw_data: WithdrawRequest,
    current_user: User = Depends(get_current_user),
    storage: Storage = Depends(get_storage),
):
    if storage.get_user_wallet_balance(current_user.id) < withdraw_data.amount:
        raise InsufficientFunds()

    transaction = withdrawal_details(withdraw_data)
    try:
        balance = storage.record_wallet_movement(
            current_user.id, -withdraw_data.amount, transaction
        )
    except InsufficientBalance as exc:
        raise InsufficientFunds() from exc

    logger.info(
        "User %s withdrew %.2f via %s", current_user.id, withdraw_data.amount, transaction["method"]
    )
    return WalletMovementResponse(message="Withdrawal successful", balance=balance)

@router.get("/wallet/transactions", response_model=list[TransactionResponse])
def get_transactions(
    current_user: User = Depends(get_current_user),
    storage: Storage = Depends(get_storage),
):
    return storage.get_wallet_transactions(current_user.id)
