# propvest/models/wallet.py
from sqlalchemy import Column, Integer, String, DateTime, Numeric, ForeignKey, Text, Boolean
from sqlalchemy.sql import func
from propvest.core.database import Base

class WalletTransaction(Base):
    __tablename__ = "wallet_transactions"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    amount = Column(Numeric(18, 2), nullable=False)  # positive credit, negative debit
    type = Column(String, nullable=False)  # deposit, withdrawal, investment, return
    method = Column(String, nullable=False, default="standard")  # card, mobile-money, bank, standard
    organization = Column(String)  # bank name, mobile provider or card brand
    account = Column(String)  # masked
    description = Column(Text)
    related_property_id = Column(Integer, ForeignKey("properties.id"))
    date = Column(DateTime(timezone=True), server_default=func.now())

class PaymentCard(Base):
    __tablename__ = "payment_cards"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    card_number = Column(String, nullable=False)  # never returned unmasked
    cardholder_name = Column(String, nullable=False)
    expiry_date = Column(String, nullable=False)  # MM/YY
    card_type = Column(String, nullable=False)
    is_default = Column(Boolean, nullable=False, default=False)
    last_four_digits = Column(String, nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
