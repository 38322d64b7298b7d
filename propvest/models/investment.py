# propvest/models/investment.py
from sqlalchemy import Column, Integer, String, DateTime, Numeric, ForeignKey
from sqlalchemy.sql import func
from propvest.core.database import Base

class UserProperty(Base):
    __tablename__ = "user_properties"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    property_id = Column(Integer, ForeignKey("properties.id"), nullable=False)
    investment_amount = Column(Numeric(18, 2), nullable=False)
    shares = Column(Numeric(18, 2), nullable=False)  # 1:1 with investment_amount
    status = Column(String, nullable=False, default="active")
    date_invested = Column(DateTime(timezone=True), server_default=func.now())
