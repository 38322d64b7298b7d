# propvest/storage/base.py
"""The storage contract shared by every persistence backend.

Backends are drop-in alternatives: the in-memory store and the relational
store must behave identically for every operation declared here. Lookups
return ``None`` for absent rows; mutations of absent rows raise
:class:`~propvest.core.exceptions.NotFound`.

Data passed to the ``create``/``add`` operations is a plain ``dict`` keyed
by model attribute name (``full_name``, ``related_property_id``, ...).
"""
from abc import ABC, abstractmethod
from datetime import datetime, timezone
from decimal import Decimal
from typing import List, Optional, Tuple

from propvest.core.exceptions import ValidationError
from propvest.models import (
    AdminAuditLog,
    PaymentCard,
    Property,
    PropertyDocument,
    PropertyImage,
    User,
    UserProperty,
    WalletTransaction,
)

PROFILE_FIELDS = ("full_name", "email", "phone_number", "avatar_url")
ADMIN_USER_FIELDS = PROFILE_FIELDS + ("role", "is_verified")
PROPERTY_FIELDS = (
    "title",
    "description",
    "location",
    "city",
    "bedrooms",
    "price",
    "image_url",
    "type",
    "funding_percentage",
    "yearly_return",
    "total_return",
    "projected_yield",
    "property_id",
    "status",
    "filter",
    "floor_area",
    "year_built",
    "parking_spaces",
    "monthly_rent",
    "service_charges",
    "maintenance_fees",
    "occupancy_rate",
    "admin_id",
)

# placeholders recorded when a caller does not say how money moved
TRANSACTION_DEFAULTS = {
    "method": "standard",
    "organization": "Propvest Wallet",
    "account": "N/A",
}

CENTS = Decimal("0.01")


def utcnow():
    return datetime.now(timezone.utc)


def to_money(value) -> Decimal:
    """Normalize an amount to a two-place Decimal; floats go through ``str``."""
    if not isinstance(value, Decimal):
        value = Decimal(str(value))
    return value.quantize(CENTS)


def pick(data: dict, fields) -> dict:
    return {key: value for key, value in data.items() if key in fields}


class Storage(ABC):
    """CRUD facade over users, properties, stakes, wallet and admin records."""

    # Users

    @abstractmethod
    def get_user(self, user_id: int) -> Optional[User]:
        ...

    @abstractmethod
    def get_user_by_username(self, username: str) -> Optional[User]:
        ...

    @abstractmethod
    def create_user(self, data: dict) -> User:
        """Create a user with a zero balance, role ``user`` unless given, unverified.

        Raises ValidationError when the username is taken or a required
        field is missing.
        """

    @abstractmethod
    def update_user_profile(self, user_id: int, data: dict) -> User:
        """Merge the self-service profile fields (see ``PROFILE_FIELDS``)."""

    @abstractmethod
    def update_last_login(self, user_id: int) -> User:
        ...

    # Properties

    @abstractmethod
    def get_properties(self, filter_value: str) -> List[Property]:
        """Properties in one lifecycle bucket (Available, Funded, Exited)."""

    @abstractmethod
    def get_property(self, property_id: int) -> Optional[Property]:
        ...

    @abstractmethod
    def create_property(self, data: dict) -> Property:
        ...

    @abstractmethod
    def initialize_properties(self) -> None:
        """Seed the sample catalog unless any property already exists."""

    # Stakes

    @abstractmethod
    def get_user_properties(self, user_id: int) -> List[Tuple[UserProperty, Property]]:
        """Every stake of the user joined to its property.

        Raises InternalInconsistency when a stake points at a missing property.
        """

    @abstractmethod
    def add_user_property(self, data: dict) -> UserProperty:
        """Append a stake. Does not touch the wallet."""

    # Wallet

    @abstractmethod
    def get_user_wallet_balance(self, user_id: int) -> Decimal:
        ...

    @abstractmethod
    def update_wallet_balance(self, user_id: int, delta: Decimal) -> User:
        """``balance := balance + delta`` with no floor; callers check sufficiency."""

    @abstractmethod
    def add_wallet_transaction(self, data: dict) -> WalletTransaction:
        ...

    @abstractmethod
    def get_wallet_transactions(self, user_id: int) -> List[WalletTransaction]:
        """The user's transactions, newest first."""

    @abstractmethod
    def record_wallet_movement(self, user_id: int, delta: Decimal, transaction: dict) -> Decimal:
        """Apply ``delta`` and append its transaction as one unit.

        A negative delta only succeeds while ``balance >= -delta``; otherwise
        InsufficientBalance is raised and nothing changes. Returns the new
        balance.
        """

    @abstractmethod
    def record_investment(self, stake: dict, transaction: dict) -> UserProperty:
        """Debit the stake amount, append the stake and its ``investment``
        transaction as one unit. Raises InsufficientBalance without side
        effects when the wallet cannot cover the amount.
        """

    # Payment cards

    @abstractmethod
    def get_payment_cards(self, user_id: int) -> List[PaymentCard]:
        ...

    @abstractmethod
    def get_payment_card(self, card_id: int) -> Optional[PaymentCard]:
        ...

    @abstractmethod
    def add_payment_card(self, data: dict) -> PaymentCard:
        """The first card a user adds becomes the default."""

    @abstractmethod
    def delete_payment_card(self, card_id: int) -> bool:
        """Remove a card, promoting the first remaining one if it was the default."""

    @abstractmethod
    def set_default_payment_card(self, card_id: int, user_id: int) -> PaymentCard:
        ...

    # Property media

    @abstractmethod
    def get_property_images(self, property_id: int) -> List[PropertyImage]:
        ...

    @abstractmethod
    def get_property_image(self, image_id: int) -> Optional[PropertyImage]:
        ...

    @abstractmethod
    def add_property_image(self, data: dict) -> PropertyImage:
        ...

    @abstractmethod
    def delete_property_image(self, image_id: int) -> bool:
        ...

    @abstractmethod
    def get_property_documents(self, property_id: int) -> List[PropertyDocument]:
        ...

    @abstractmethod
    def get_property_document(self, document_id: int) -> Optional[PropertyDocument]:
        ...

    @abstractmethod
    def add_property_document(self, data: dict) -> PropertyDocument:
        ...

    @abstractmethod
    def delete_property_document(self, document_id: int) -> bool:
        ...

    # Admin

    @abstractmethod
    def get_all_users(self) -> List[User]:
        ...

    @abstractmethod
    def get_all_properties(self) -> List[Property]:
        ...

    @abstractmethod
    def get_all_transactions(self) -> List[WalletTransaction]:
        ...

    @abstractmethod
    def update_user_by_admin(self, user_id: int, data: dict) -> User:
        ...

    @abstractmethod
    def update_property_by_admin(self, property_id: int, data: dict) -> Property:
        ...

    @abstractmethod
    def add_admin_audit_log(self, data: dict) -> AdminAuditLog:
        ...

    @abstractmethod
    def get_admin_audit_logs(self) -> List[AdminAuditLog]:
        ...

    # Shared row preparation

    def _user_values(self, data: dict) -> dict:
        if not data.get("username") or not data.get("password"):
            raise ValidationError("Username and password are required")
        return {
            "username": data["username"],
            "password": data["password"],
            "full_name": data.get("full_name"),
            "email": data.get("email"),
            "phone_number": data.get("phone_number"),
            "avatar_url": data.get("avatar_url"),
            "wallet_balance": Decimal("0.00"),
            "role": data.get("role") or "user",
            "is_verified": False,
            "created_at": utcnow(),
            "last_login": None,
        }

    def _property_values(self, data: dict) -> dict:
        values = pick(data, PROPERTY_FIELDS)
        values.setdefault("funding_percentage", 0)
        now = utcnow()
        values["created_at"] = now
        values["updated_at"] = now
        return values

    def _stake_values(self, data: dict) -> dict:
        amount = to_money(data["investment_amount"])
        return {
            "user_id": data["user_id"],
            "property_id": data["property_id"],
            "investment_amount": amount,
            "shares": to_money(data.get("shares", amount)),
            "status": data.get("status") or "active",
            "date_invested": data.get("date_invested") or utcnow(),
        }

    def _transaction_values(self, data: dict) -> dict:
        if not data.get("type"):
            raise ValidationError("Transaction type is required")
        values = {
            "user_id": data["user_id"],
            "amount": to_money(data["amount"]),
            "type": data["type"],
            "description": data.get("description"),
            "related_property_id": data.get("related_property_id"),
            "date": utcnow(),
        }
        for key, placeholder in TRANSACTION_DEFAULTS.items():
            values[key] = data.get(key) or placeholder
        return values

    def _card_values(self, data: dict, is_default: bool) -> dict:
        card_number = data["card_number"]
        return {
            "user_id": data["user_id"],
            "card_number": card_number,
            "cardholder_name": data["cardholder_name"],
            "expiry_date": data["expiry_date"],
            "card_type": data["card_type"],
            "is_default": is_default,
            "last_four_digits": card_number[-4:],
            "created_at": utcnow(),
        }

    def _image_values(self, data: dict) -> dict:
        return {
            "property_id": data["property_id"],
            "image_url": data["image_url"],
            "caption": data.get("caption"),
            "display_order": data.get("display_order") or 0,
            "uploaded_by": data.get("uploaded_by"),
            "created_at": utcnow(),
        }

    def _document_values(self, data: dict) -> dict:
        return {
            "property_id": data["property_id"],
            "title": data["title"],
            "document_url": data["document_url"],
            "document_type": data.get("document_type"),
            "uploaded_by": data.get("uploaded_by"),
            "uploaded_at": utcnow(),
        }

    def _audit_values(self, data: dict) -> dict:
        return {
            "admin_id": data["admin_id"],
            "action": data["action"],
            "entity_type": data["entity_type"],
            "entity_id": data.get("entity_id"),
            "details": data.get("details"),
            "ip_address": data.get("ip_address"),
            "timestamp": utcnow(),
        }
