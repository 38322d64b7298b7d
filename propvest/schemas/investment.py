# propvest/schemas/investment.py
from datetime import datetime
from typing import Optional

from pydantic import field_validator

from .base import CamelModel, Money, positive_amount
from .property import PropertyResponse


class InvestmentRequest(CamelModel):
    amount: Money

    @field_validator("amount")
    @classmethod
    def valid_amount(cls, v):
        return positive_amount(v)


class UserPropertyResponse(CamelModel):
    id: int
    user_id: int
    property_id: int
    investment_amount: float
    shares: float
    status: str
    date_invested: Optional[datetime] = None


class PortfolioItem(UserPropertyResponse):
    property: PropertyResponse


class InvestmentResult(CamelModel):
    message: str
    investment: UserPropertyResponse
    balance: float
