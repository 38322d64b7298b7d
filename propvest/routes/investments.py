# propvest/routes/investments.py
import logging

from fastapi import APIRouter, Depends, status

from propvest.core.deps import get_current_user, get_storage
from propvest.core.exceptions import InsufficientBalance, NotFound, PropertyNotAvailable
from propvest.models import User
from propvest.schemas.investment import (
    InvestmentRequest,
    InvestmentResult,
    PortfolioItem,
    UserPropertyResponse,
)
from propvest.schemas.property import PropertyResponse
from propvest.storage import Storage

logger = logging.getLogger(__name__)

router = APIRouter()

@router.get("/portfolio", response_model=list[PortfolioItem])
def get_portfolio(
    current_user: User = Depends(get_current_user),
    storage: Storage = Depends(get_storage),
):
    result = []
    for stake, prop in storage.get_user_properties(current_user.id):
        item = UserPropertyResponse.model_validate(stake).model_dump()
        item["property"] = PropertyResponse.model_validate(prop)
        result.append(PortfolioItem(**item))

    return result

@router.post(
    "/properties/{property_id}/invest",
    response_model=InvestmentResult,
    status_code=status.HTTP_201_CREATED,
)
def invest_in_property(
    property_id: int,
    investment_data: InvestmentRequest,
    current_user: User = Depends(get_current_user),
    storage: Storage = Depends(get_storage),
):
    amount = investment_data.amount

    prop = storage.get_property(property_id)
    if not prop:
        raise NotFound("Property not found")

    if prop.filter != "Available":
        raise PropertyNotAvailable()

    if storage.get_user_wallet_balance(current_user.id) < amount:
        raise InsufficientBalance()

    # one share per unit invested
    stake = storage.record_investment(
        {
            "user_id": current_user.id,
            "property_id": prop.id,
            "investment_amount": amount,
            "shares": amount,
            "status": "active",
        },
        {"description": f"Investment in property: {prop.title}"},
    )

    logger.info(
        "User %s invested %.2f in property %s (stake %s)",
        current_user.id, amount, prop.id, stake.id,
    )
    return InvestmentResult(
        message="Investment successful",
        investment=UserPropertyResponse.model_validate(stake),
        balance=storage.get_user_wallet_balance(current_user.id),
    )
