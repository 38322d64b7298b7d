# propvest/routes/cards.py
import logging

from fastapi import APIRouter, Depends, status

from propvest.core.deps import get_current_user, get_storage
from propvest.core.exceptions import NotFound
from propvest.models import User
from propvest.schemas.wallet import PaymentCardCreate, PaymentCardResponse
from propvest.storage import Storage

logger = logging.getLogger(__name__)

router = APIRouter()

@router.get("/cards", response_model=list[PaymentCardResponse])
def list_cards(
    current_user: User = Depends(get_current_user),
    storage: Storage = Depends(get_storage),
):
    return [PaymentCardResponse.masked(card) for card in storage.get_payment_cards(current_user.id)]

@router.post("/cards", response_model=PaymentCardResponse, status_code=status.HTTP_201_CREATED)
def add_card(
    card_data: PaymentCardCreate,
    current_user: User = Depends(get_current_user),
    storage: Storage = Depends(get_storage),
):
    # the CVV is checked for shape only and never stored
    data = card_data.model_dump(exclude={"cvv"})
    data["user_id"] = current_user.id
    card = storage.add_payment_card(data)

    logger.info(
        "User %s added %s card ending in %s", current_user.id, card.card_type, card.last_four_digits
    )
    return PaymentCardResponse.masked(card)

@router.delete("/cards/{card_id}")
def delete_card(
    card_id: int,
    current_user: User = Depends(get_current_user),
    storage: Storage = Depends(get_storage),
):
    card = storage.get_payment_card(card_id)
    if not card or card.user_id != current_user.id:
        raise NotFound("Payment card not found")

    storage.delete_payment_card(card_id)
    logger.info("User %s deleted card %s", current_user.id, card_id)
    return {"message": "Card deleted successfully"}

@router.post("/cards/{card_id}/default", response_model=PaymentCardResponse)
def set_default_card(
    card_id: int,
    current_user: User = Depends(get_current_user),
    storage: Storage = Depends(get_storage),
):
    card = storage.set_default_payment_card(card_id, current_user.id)
    logger.info("User %s set card %s as default", current_user.id, card_id)
    return PaymentCardResponse.masked(card)
