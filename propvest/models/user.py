# propvest/models/user.py
from sqlalchemy import Column, Integer, String, DateTime, Numeric, Boolean
from sqlalchemy.sql import func
from propvest.core.database import Base

class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    username = Column(String, unique=True, nullable=False, index=True)
    password = Column(String, nullable=False)  # passlib hash, salt embedded
    full_name = Column(String)
    email = Column(String)
    phone_number = Column(String)
    avatar_url = Column(String)
    wallet_balance = Column(Numeric(18, 2), nullable=False, default=0)
    role = Column(String, nullable=False, default="user")  # user, admin
    is_verified = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    last_login = Column(DateTime(timezone=True))
