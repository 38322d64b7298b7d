# propvest/schemas/wallet.py
import re
from datetime import datetime
from typing import Optional

from pydantic import field_validator, model_validator

from .base import CamelModel, Money, digits, positive_amount, text_length

EXPIRY = re.compile(r"^(0[1-9]|1[0-2])/\d{2}$")


class WalletResponse(CamelModel):
    balance: float
    currency: str


class DepositRequest(CamelModel):
    amount: Money
    method: str = "standard"  # card, mobile-money, standard
    card_id: Optional[int] = None
    cvv: Optional[str] = None
    provider: Optional[str] = None
    phone_number: Optional[str] = None

    @field_validator("amount")
    @classmethod
    def valid_amount(cls, v):
        return positive_amount(v)

    @model_validator(mode="after")
    def method_details(self):
        if self.method == "card":
            if self.card_id is None:
                raise ValueError("Please select a card")
            digits(self.cvv, "CVV", 3, 4)
        elif self.method == "mobile-money":
            if not (self.provider or "").strip():
                raise ValueError("Please select a mobile money provider")
            digits(self.phone_number, "Phone number", 10, 12)
        return self


class WithdrawRequest(CamelModel):
    amount: Money
    method: str = "standard"  # bank, standard
    bank_name: Optional[str] = None
    account_number: Optional[str] = None
    account_name: Optional[str] = None
    branch_name: Optional[str] = None
    swift_code: Optional[str] = None

    @field_validator("amount")
    @classmethod
    def valid_amount(cls, v):
        return positive_amount(v)

    @model_validator(mode="after")
    def bank_details(self):
        if self.method == "bank":
            if not (self.bank_name or "").strip():
                raise ValueError("Please select a bank")
            digits(self.account_number, "Account number", 10, 20)
            self.account_name = text_length(self.account_name, "Account name", 3, 100)
        return self


class WalletMovementResponse(CamelModel):
    message: str
    balance: float


class TransactionResponse(CamelModel):
    id: int
    user_id: int
    amount: float
    type: str
    method: str
    organization: Optional[str] = None
    account: Optional[str] = None
    description: Optional[str] = None
    related_property_id: Optional[int] = None
    date: Optional[datetime] = None


class PaymentCardCreate(CamelModel):
    cardholder_name: str
    card_number: str
    expiry_date: str
    cvv: str
    card_type: str

    @field_validator("cardholder_name")
    @classmethod
    def valid_cardholder(cls, v):
        return text_length(v, "Cardholder name", 3, 50)

    @field_validator("card_number", mode="before")
    @classmethod
    def valid_card_number(cls, v):
        if v is not None:
            v = str(v).replace(" ", "")
        return digits(v, "Card number", 16, 19)

    @field_validator("expiry_date")
    @classmethod
    def valid_expiry(cls, v):
        if not EXPIRY.match(v):
            raise ValueError("Expiry date must be in MM/YY format")
        return v

    @field_validator("cvv")
    @classmethod
    def valid_cvv(cls, v):
        return digits(v, "CVV", 3, 4)

    @field_validator("card_type")
    @classmethod
    def valid_card_type(cls, v):
        if not v.strip():
            raise ValueError("Please select a card type")
        return v.strip()


class PaymentCardResponse(CamelModel):
    id: int
    user_id: int
    card_number: str
    cardholder_name: str
    expiry_date: str
    card_type: str
    is_default: bool
    last_four_digits: str
    created_at: Optional[datetime] = None

    @classmethod
    def masked(cls, card):
        """Build the public view of a card; the stored number never leaves."""
        return cls(
            id=card.id,
            user_id=card.user_id,
            card_number=mask_card_number(card.last_four_digits),
            cardholder_name=card.cardholder_name,
            expiry_date=card.expiry_date,
            card_type=card.card_type,
            is_default=card.is_default,
            last_four_digits=card.last_four_digits,
            created_at=card.created_at,
        )


def mask_card_number(last_four: str) -> str:
    return f"**** **** **** {last_four}"


def mask_account(account_number: str) -> str:
    return f"****{account_number[-4:]}"
